"""Validation helpers used by the public API."""

from __future__ import annotations

from typing import Optional

from ..exceptions import InvalidArgument


def require_single_direction(
    after: Optional[str], before: Optional[str], item_index: Optional[int] = None
) -> None:
    """Raise ``InvalidArgument`` if both cursors are supplied."""
    if after and before:
        raise InvalidArgument(
            'You can only use either "After" or "Before", not both.',
            item_index=item_index,
            parameter="after/before",
        )
