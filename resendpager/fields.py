"""Value transforms for request fields that list callers pass along."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .exceptions import InvalidArgument

FALLBACK_KEYS = ("fallbackValue", "fallback_value")


def normalize_email_list(value: Union[str, Sequence[Any], None]) -> List[str]:
    """Split a comma-separated string or a sequence into trimmed addresses.

    Empty entries are dropped; duplicates and order are kept.
    """
    if isinstance(value, str):
        parts: Sequence[Any] = value.split(",")
    elif isinstance(value, Sequence):
        parts = value
    else:
        return []
    return [email for email in (str(part).strip() for part in parts) if email]


def _parse_number(value: Any) -> Union[int, float]:
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        if not text or "_" in text:
            raise ValueError(value)
        number = float(text)
    if not math.isfinite(number):
        raise ValueError(value)
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def parse_template_variables(
    variables_input: Optional[Mapping[str, Any]],
    fallback_key: str = "fallback_value",
    item_index: int = 0,
) -> Optional[List[Dict[str, Any]]]:
    """Build template variable declarations from a fixed-collection input.

    Parameters:
        variables_input: ``{"variables": [{"key", "type", "fallbackValue"}]}``.
        fallback_key: Name under which the fallback is emitted, either
            ``fallbackValue`` or ``fallback_value``.
        item_index: Workflow item being processed, reported on errors.

    Returns:
        The declarations, or None when there are no variables.

    Raises:
        InvalidArgument: if a ``number`` variable's fallback is not numeric.
    """
    if fallback_key not in FALLBACK_KEYS:
        raise InvalidArgument(
            f"fallback_key must be one of {', '.join(FALLBACK_KEYS)}",
            item_index=item_index,
            parameter="fallback_key",
        )
    variables = (variables_input or {}).get("variables") or []
    if not variables:
        return None

    entries = []
    for variable in variables:
        entry: Dict[str, Any] = {"key": variable.get("key"), "type": variable.get("type")}
        fallback = variable.get("fallbackValue")
        if fallback is not None and fallback != "":
            if variable.get("type") == "number":
                try:
                    fallback = _parse_number(fallback)
                except (TypeError, ValueError):
                    raise InvalidArgument(
                        f'Variable "{variable.get("key")}" fallback value must be a number',
                        item_index=item_index,
                        parameter=variable.get("key"),
                    ) from None
            entry[fallback_key] = fallback
        entries.append(entry)
    return entries


def build_template_send_variables(
    variables_input: Optional[Mapping[str, Any]],
) -> Optional[Dict[str, Any]]:
    """Map variable keys to values for sending with a template.

    Entries without a key are skipped and a missing value becomes ``""``.
    Returns None when nothing is left.
    """
    variables = (variables_input or {}).get("variables") or []
    result: Dict[str, Any] = {}
    for variable in variables:
        key = variable.get("key")
        if not key:
            continue
        value = variable.get("value")
        result[key] = "" if value is None else value
    return result or None
