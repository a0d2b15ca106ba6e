"""Binary large objects carried as OSC 'b' arguments."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Blob:
    """An immutable chunk of binary data.

    A blob must hold at least one byte. On the wire it is written as a
    32-bit size followed by the data, zero-padded to a multiple of four.
    """

    data: bytes

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) < 1:
            raise ValueError("a blob must contain at least one byte")
        object.__setattr__(self, "data", data)

    def __len__(self) -> int:
        return len(self.data)

    def padded_size(self) -> int:
        """Return the encoded size: size prefix plus data, padded to 4 bytes."""
        raw = 4 + len(self.data)
        return 4 * ((raw + 3) // 4)