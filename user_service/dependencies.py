from fastapi import Depends
from sqlalchemy.orm import Session

from .core.database import get_db
from .core.events import UserEventPublisher, get_event_publisher
from .repositories.user_repository import UserRepository
from .services.user_service import UserService


def get_user_service(
    db: Session = Depends(get_db),
    publisher: UserEventPublisher = Depends(get_event_publisher)
) -> UserService:
    """Build the per-request service on top of the request's session"""
    return UserService(UserRepository(db), publisher)
