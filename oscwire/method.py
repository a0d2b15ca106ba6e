"""Registered handlers for OSC address patterns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional


def _show(value: Any) -> str:
    return "(null)" if value is None else str(value)


@dataclass
class Method:
    """A handler bound to an address path and a type specification.

    A ``path`` or ``typespec`` of None matches any path or any types.
    """

    path: Optional[str]
    typespec: Optional[str]
    handler: Callable[..., Any]
    user_data: Any = None

    def format(self, prefix: str = "") -> str:
        """Return a readable description, each line starting with ``prefix``."""
        handler = "(null)" if self.handler is None else repr(self.handler)
        user_data = "(null)" if self.user_data is None else repr(self.user_data)
        return "\n".join(
            (
                f"{prefix}path:      {_show(self.path)}",
                f"{prefix}typespec:  {_show(self.typespec)}",
                f"{prefix}handler:   {handler}",
                f"{prefix}user-data: {user_data}",
            )
        )

    def __str__(self) -> str:
        return self.format("")