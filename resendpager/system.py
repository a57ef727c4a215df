"""Resend API endpoints and pagination limits."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

DEFAULT_BASE_URL = "https://api.resend.com"


@dataclass(frozen=True)
class System:
    """Describes a Resend API deployment and the limits it enforces.

    Attributes:
        base_url: Root URL that list endpoints are appended to.
        max_page_size: Largest ``limit`` the API accepts.
        default_page_size: Page size used when the caller gives none.
        max_pages: Runaway guard for full-collection walks.
        max_option_pages: Page bound for option lists feeding a UI.
    """

    base_url: str = DEFAULT_BASE_URL
    max_page_size: int = 100
    default_page_size: int = 50
    max_pages: int = 100
    max_option_pages: int = 10

    def url(self, endpoint: str) -> str:
        """Join ``endpoint`` onto the base URL."""
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    @classmethod
    def from_env(cls) -> System:
        """Build a system honouring ``RESEND_API_URL`` when it is set."""
        base_url = os.environ.get("RESEND_API_URL")
        if base_url:
            return replace(PROD, base_url=base_url)
        return PROD


PROD = System()
