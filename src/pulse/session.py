"""Session identity shared by the transport client and the auth manager."""


class SessionContext:
    """Holds the signed-in user id.

    Reads are plain attribute reads; a request that has already built its
    headers keeps the id it read, so sign-in and sign-out are eventually
    consistent with in-flight requests.
    """

    def __init__(self, user_id: str | None = None) -> None:
        self._user_id = user_id

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def is_authenticated(self) -> bool:
        return self._user_id is not None

    def set_user(self, user_id: str) -> None:
        """Mark the session as signed in.

        Raises:
            ValueError: If user_id is empty
        """
        if not user_id:
            raise ValueError("user_id must not be empty")
        self._user_id = user_id

    def clear(self) -> None:
        """Sign the session out."""
        self._user_id = None
