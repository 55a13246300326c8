"""
Mock authentication provider for local development.
"""

from weekplan.interfaces.auth_provider import IAuthProvider, User

DEV_USER = User(id="dev_user", email="dev@example.com", display_name="Developer")


class MockAuthProvider(IAuthProvider):
    """Mock auth provider: the bearer token is the user id."""

    def __init__(self, enabled: bool = False):
        """
        Initialize mock auth provider.

        Args:
            enabled: Whether authentication is required
        """
        self._enabled = enabled

    async def verify_token(self, token: str) -> User:
        if token == DEV_USER.id:
            return DEV_USER
        if "@" in token:
            return User(id=token, email=token, display_name=token)
        return User(id=token, email=f"{token}@example.com", display_name=token)

    def is_enabled(self) -> bool:
        return self._enabled
