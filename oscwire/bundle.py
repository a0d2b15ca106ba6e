"""OSC bundles: time-stamped collections of messages and nested bundles."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from oscwire.message import Message
from oscwire.types import TimeTag

_HEADER = b"#bundle\0"


class ElementType(enum.IntEnum):
    """Kinds of element a bundle can hold."""

    MESSAGE = 1
    BUNDLE = 2


@dataclass
class _Element:
    type: ElementType
    content: Union[Message, "Bundle"]
    path: Optional[str] = None


class Bundle:
    """A time-stamped sequence of messages (each with a path) and bundles.

    Elements are held by reference, so later changes to an added message
    or bundle show up when this bundle is serialised.
    """

    def __init__(self, timestamp: TimeTag = TimeTag.IMMEDIATE) -> None:
        self.timestamp = timestamp
        self._elements: List[_Element] = []

    def __len__(self) -> int:
        return len(self._elements)

    @property
    def count(self) -> int:
        """The number of elements in the bundle."""
        return len(self._elements)

    def __iter__(self) -> Iterator[Tuple[ElementType, Optional[str], Union[Message, "Bundle"]]]:
        return ((e.type, e.path, e.content) for e in self._elements)

    def __repr__(self) -> str:
        return f"Bundle({self.timestamp!s}, {len(self)} elements)"

    def __str__(self) -> str:
        return self.format()

    def add_message(self, path: str, message: Optional[Message]) -> None:
        """Append ``message`` addressed to ``path``; a None message is ignored."""
        if message is None:
            return
        if not isinstance(path, str):
            raise TypeError("a message in a bundle needs a str path")
        self._elements.append(_Element(ElementType.MESSAGE, message, path))

    def add_bundle(self, bundle: Optional["Bundle"]) -> None:
        """Append a nested bundle; a None bundle is ignored.

        Raises ValueError if adding it would make a bundle contain itself.
        """
        if bundle is None:
            return
        self._elements.append(_Element(ElementType.BUNDLE, bundle))
        if self._circular():
            self._elements.pop()
            raise ValueError("adding this bundle would create a circular reference")

    def _circular(self) -> bool:
        ancestors: List[Bundle] = []

        def walk(node: Bundle) -> bool:
            if any(node is seen for seen in ancestors):
                return True
            ancestors.append(node)
            try:
                return any(
                    walk(e.content)  # type: ignore[arg-type]
                    for e in node._elements
                    if e.type is ElementType.BUNDLE
                )
            finally:
                ancestors.pop()

        return walk(self)

    def get_type(self, index: int) -> ElementType:
        """Return the kind of element at ``index``."""
        return self._elements[index].type

    def get_bundle(self, index: int) -> Optional["Bundle"]:
        """Return the bundle at ``index``, or None if that element is a message."""
        element = self._elements[index]
        if element.type is ElementType.BUNDLE:
            return element.content  # type: ignore[return-value]
        return None

    def get_message(self, index: int) -> Optional[Tuple[str, Message]]:
        """Return ``(path, message)`` at ``index``, or None if that element is a bundle."""
        element = self._elements[index]
        if element.type is ElementType.MESSAGE:
            return element.path, element.content  # type: ignore[return-value]
        return None

    def _element_length(self, element: _Element) -> int:
        if element.type is ElementType.BUNDLE:
            return element.content.length()  # type: ignore[union-attr]
        return element.content.length(element.path)  # type: ignore[call-arg,arg-type]

    def length(self) -> int:
        """Return the size of the serialised bundle in bytes."""
        return 16 + sum(4 + self._element_length(e) for e in self._elements)

    def serialise(self) -> bytes:
        """Return the wire form of the bundle."""
        parts = [_HEADER, struct.pack(">II", self.timestamp.sec, self.timestamp.frac)]
        for element in self._elements:
            if element.type is ElementType.BUNDLE:
                body = element.content.serialise()  # type: ignore[union-attr]
            else:
                body = element.content.serialise(element.path)  # type: ignore[call-arg,arg-type]
            parts.append(struct.pack(">I", len(body)))
            parts.append(body)
        return b"".join(parts)

    def format(self) -> str:
        """Return a tree drawing of the bundle and everything it contains."""
        lines: List[str] = []
        state: List[bool] = [True]
        self._format_into(lines, 0, state)
        return "\n".join(lines)

    @staticmethod
    def _indent(offset: int, state: List[bool]) -> str:
        head = "".join("         " if state[i] else "│        " for i in range(offset))
        return head + ("└─" if state[offset] else "├─")

    def _format_into(self, lines: List[str], offset: int, state: List[bool]) -> None:
        while len(state) < offset + 2:
            state.append(False)
        lines.append(f"{self._indent(offset, state)}bundle─┬─({self.timestamp})")
        last = len(self._elements) - 1
        for i, element in enumerate(self._elements):
            state[offset + 1] = i == last
            if element.type is ElementType.MESSAGE:
                lines.append(
                    f"{self._indent(offset + 1, state)}{element.path} "
                    f"{element.content.format()}"  # type: ignore[union-attr]
                )
            else:
                element.content._format_into(lines, offset + 1, state)  # type: ignore[union-attr]