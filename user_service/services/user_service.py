"""
Business logic for users.

Reads and creates are passed straight to the repository.  Update and
delete look the user up first and return ``None`` when it is missing,
so the repository's fail-on-missing-row behaviour is never reached
from a request.  Successful mutations are announced through the event
publisher; a publishing failure never changes the result.
"""
import logging
from typing import Any, Dict, List, Optional

from ..core.events import UserEventPublisher
from ..models.user import User
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Service wrapping ``UserRepository`` with existence checks"""

    def __init__(self, repository: UserRepository, publisher: Optional[UserEventPublisher] = None):
        self.repository = repository
        self.publisher = publisher

    def create_user(self, data: Dict[str, Any]) -> User:
        user = self.repository.create(name=data["name"], email=data["email"])
        self._publish("user.created", user.to_dict())
        return user

    def get_all_users(self) -> List[User]:
        return self.repository.find_all()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.repository.find_by_id(user_id)

    def update_user(self, user_id: int, data: Dict[str, Any]) -> Optional[User]:
        """Return the updated user, or None if ``user_id`` does not exist"""
        existing = self.repository.find_by_id(user_id)
        if existing is None:
            logger.info(f"Update skipped, user {user_id} not found")
            return None
        if not data:
            return existing

        user = self.repository.update(user_id, data)
        self._publish("user.updated", user.to_dict())
        return user

    def delete_user(self, user_id: int) -> Optional[bool]:
        """Return True once deleted, or None if ``user_id`` does not exist"""
        user = self.repository.find_by_id(user_id)
        if user is None:
            logger.info(f"Delete skipped, user {user_id} not found")
            return None

        # Snapshot before the row goes away
        payload = user.to_dict()
        self.repository.delete(user_id)
        self._publish("user.deleted", payload)
        return True

    def _publish(self, event_type: str, data: Dict[str, Any]) -> None:
        if self.publisher is None:
            return
        try:
            self.publisher.publish_event(event_type, data)
        except Exception as e:
            logger.warning(f"Failed to publish {event_type} event: {e}")
