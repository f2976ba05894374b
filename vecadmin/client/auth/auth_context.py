from abc import ABC, abstractmethod
from typing import Optional


class AuthContext(ABC):
    def get_auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.get_token()}"}

    @abstractmethod
    def get_token(self) -> Optional[str]:
        pass

    @abstractmethod
    def authenticate(self) -> None:
        """
        Fetch a fresh token using the necessary configuration.
        If the authentication fails, a `LoginException` should be raised.
        """
        pass
