"""Database models for User Service."""
from .user import User
from .task import Task

__all__ = ["User", "Task"]
