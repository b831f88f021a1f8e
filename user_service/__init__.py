"""User Service - layered CRUD service for users and their tasks."""

__version__ = "1.0.0"
