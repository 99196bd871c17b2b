"""User repository."""

from src.pulse.api.mapper import decode_model, user_from_dto
from src.pulse.api.response_models import UserDTO
from src.pulse.api.routes import UsersAPI
from src.pulse.config.logging import get_logger
from src.pulse.errors import NotFoundError
from src.pulse.models.user import User
from src.pulse.repositories.base import BaseRepository

logger = get_logger(__name__)


class UserRepository(BaseRepository):
    """Repository for the signed-in user."""

    async def get_current_user(self) -> User:
        """Get the profile of the session user.

        Raises:
            NotFoundError: If the backend returns no data
        """
        data = await self._fetch(UsersAPI.me())
        if data is None:
            raise NotFoundError(details={"resource": "user"})
        return user_from_dto(decode_model(UserDTO, data))

    async def register_device_token(self, token: str) -> bool:
        """Register a push notification token for the session user."""
        registered = await self._command(UsersAPI.register_device_token(token))
        if registered:
            logger.info("device_token_registered")
        return registered
