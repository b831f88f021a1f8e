"""Data access layer for User Service."""
from .user_repository import UserRepository

__all__ = ["UserRepository"]
