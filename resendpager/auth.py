"""API key handling, encapsulated in ``Auth``."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional

from .exceptions import InvalidArgument

log = logging.getLogger(__name__)

API_KEY_ENV = "RESEND_API_KEY"


@dataclass(frozen=True)
class Credentials:
    """A Resend API key."""

    api_key: str

    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    @classmethod
    def from_env(cls, var: str = API_KEY_ENV) -> Credentials:
        """Read the API key from the environment variable ``var``."""
        api_key = os.environ.get(var, "").strip()
        if not api_key:
            raise InvalidArgument(f"Environment variable {var} is not set")
        return cls(api_key=api_key)

    def __repr__(self) -> str:
        return f"Credentials(api_key='{self.api_key[:3]}...')"


@dataclass
class Auth:
    """Holds the credentials used by the module-level API."""

    credentials: Optional[Credentials] = field(default=None, init=False)

    @property
    def authenticated(self) -> bool:
        return self.credentials is not None

    def login(
        self, api_key: Optional[str] = None, strategy: str = "environment"
    ) -> Auth:
        """Store credentials from ``api_key`` or the environment.

        Parameters:
            api_key: Key to use with the ``direct`` strategy. Passing a key
                implies ``direct``.
            strategy: ``environment`` reads ``RESEND_API_KEY``; ``direct``
                uses ``api_key``.

        Raises:
            InvalidArgument: if the strategy is unknown or yields no key.
        """
        if api_key is not None:
            strategy = "direct"
        if strategy == "direct":
            if not api_key or not api_key.strip():
                raise InvalidArgument("An API key is required for direct login")
            self.credentials = Credentials(api_key=api_key.strip())
        elif strategy == "environment":
            self.credentials = Credentials.from_env()
        else:
            raise InvalidArgument(f"Unknown login strategy: {strategy}")
        log.debug("Logged in using the %s strategy", strategy)
        return self

    def get_credentials(self) -> Credentials:
        """Return the stored credentials.

        Raises:
            InvalidArgument: if ``login`` has not been called.
        """
        if self.credentials is None:
            raise InvalidArgument("Not logged in, call login() first")
        return self.credentials

    def logout(self) -> None:
        self.credentials = None
