"""Test helpers for building Resend list responses.

Usage:
    from tests.unit.fixtures import FakeTransport, make_items, make_page

    transport = FakeTransport([make_page(make_items(3))])
"""

from typing import Any, Callable, Dict, List, Optional

API_KEY = "re_test_key"


def make_items(count: int, start: int = 0, prefix: str = "item") -> List[Dict[str, Any]]:
    """Build ``count`` list items with sequential ids."""
    return [{"id": f"{prefix}_{i}"} for i in range(start, start + count)]


def make_page(items: List[Dict[str, Any]], has_more: bool = False) -> Dict[str, Any]:
    """Build a Resend list response."""
    return {"object": "list", "data": items, "has_more": has_more}


class FakeTransport:
    """Scripted stand-in for ``request_json``.

    Responses are served in order; an exception instance is raised instead
    of returned. With ``factory`` every call is answered by
    ``factory(call_number)`` instead.
    """

    def __init__(
        self,
        responses: Optional[List[Any]] = None,
        factory: Optional[Callable[[int], Any]] = None,
    ):
        self.responses = list(responses or [])
        self.factory = factory
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, config, auth_token=None):
        self.calls.append(
            {
                "method": config.method,
                "url": config.url,
                "params": dict(config.params),
                "token": auth_token,
            }
        )
        if self.factory is not None:
            response = self.factory(len(self.calls))
        elif self.responses:
            response = self.responses.pop(0)
        else:
            raise AssertionError(f"Unexpected request to {config.url}")
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def params(self) -> List[Dict[str, Any]]:
        return [call["params"] for call in self.calls]
