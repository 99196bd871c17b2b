"""Session lifecycle for the signed-in user.

Keeps the credential store and the session context in step, and loads the
user profile in the background of sign-in. Profile refresh and device token
registration are best-effort: failures are logged and never raised.
"""

import uuid

from src.pulse.config.logging import bind_session_context, clear_session_context, get_logger
from src.pulse.constants import GUEST_ID_PREFIX
from src.pulse.errors import PulseError, StorageError
from src.pulse.models.user import User
from src.pulse.repositories.user import UserRepository
from src.pulse.session import SessionContext
from src.pulse.storage.credentials import CredentialKeys, CredentialStore

logger = get_logger(__name__)


class AuthManager:
    """Signs users in and out and tracks the current profile."""

    def __init__(
        self,
        session: SessionContext,
        credential_store: CredentialStore,
        user_repository: UserRepository,
    ) -> None:
        """Initialize the auth manager.

        Args:
            session: Session shared with the transport client
            credential_store: Store holding the persisted user id and tokens
            user_repository: Repository used to load the profile
        """
        self._session = session
        self._store = credential_store
        self._users = user_repository
        self._current_user: User | None = None

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    @property
    def current_user(self) -> User | None:
        return self._current_user

    async def restore_session(self) -> bool:
        """Resume a previously stored session.

        Returns:
            True if a stored user id was found
        """
        user_id = self._store.read(CredentialKeys.USER_ID)
        if not user_id:
            return False

        self._session.set_user(user_id)
        bind_session_context(user_id)
        logger.info("session_restored", user_id=user_id)
        await self.refresh_user_profile()
        return True

    async def sign_in(self, user_id: str) -> None:
        """Persist the user id, start the session and load the profile.

        Raises:
            StorageError: If the user id cannot be stored
        """
        self._store.save(CredentialKeys.USER_ID, user_id)
        self._session.set_user(user_id)
        bind_session_context(user_id)
        logger.info("user_signed_in", user_id=user_id)
        await self.refresh_user_profile()

    def sign_out(self) -> None:
        """Forget stored credentials and clear the session."""
        for key in (CredentialKeys.USER_ID, CredentialKeys.AUTH_TOKEN, CredentialKeys.DEVICE_TOKEN):
            try:
                self._store.delete(key)
            except StorageError as e:
                logger.warning("credential_delete_failed", key=key, error=e.message)

        self._session.clear()
        clear_session_context()
        self._current_user = None
        logger.info("user_signed_out")

    async def refresh_user_profile(self) -> None:
        """Reload the profile; on failure the previous profile is kept."""
        try:
            self._current_user = await self._users.get_current_user()
        except PulseError as e:
            # The account may not exist on the backend yet
            logger.warning(
                "user_profile_refresh_failed",
                error_code=e.error_code.name,
                error=e.message,
            )

    async def register_device_token(self, token: str) -> None:
        """Store the push token and register it with the backend."""
        try:
            self._store.save(CredentialKeys.DEVICE_TOKEN, token)
            await self._users.register_device_token(token)
        except PulseError as e:
            logger.warning(
                "device_token_registration_failed",
                error_code=e.error_code.name,
                error=e.message,
            )

    async def sign_in_as_guest(self) -> str | None:
        """Sign in with a generated guest id.

        Returns:
            The guest id, or None if it could not be stored
        """
        guest_id = f"{GUEST_ID_PREFIX}{uuid.uuid4().hex[:8]}"
        try:
            await self.sign_in(guest_id)
        except StorageError as e:
            logger.warning("guest_sign_in_failed", error=e.message)
            return None
        return guest_id
