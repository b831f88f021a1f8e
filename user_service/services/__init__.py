"""Business logic for User Service."""
from .user_service import UserService

__all__ = ["UserService"]
