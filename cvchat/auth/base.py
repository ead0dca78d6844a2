from abc import ABC, abstractmethod


class BaseIdentityProvider(ABC):
    """Contract for bearer-credential validation."""

    @abstractmethod
    def authenticate(self, token: str) -> str:
        """Return the principal id for a bearer token.

        Raises:
            AuthError: if the token is missing, invalid, or cannot be verified.
        """
