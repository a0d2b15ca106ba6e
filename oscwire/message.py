"""OSC messages: typed argument lists and their wire encoding."""

from __future__ import annotations

import math
import operator
import struct
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from oscwire.blob import Blob
from oscwire.types import (
    ErrorCode,
    OscError,
    OscType,
    TimeTag,
    format_arg,
    strsize,
    validate_arg,
    validate_string,
)

_INT32_RANGE = (-(2**31), 2**31 - 1)
_INT64_RANGE = (-(2**63), 2**63 - 1)
_NO_DATA = frozenset({OscType.TRUE, OscType.FALSE, OscType.NIL, OscType.INFINITUM})
_NO_CHECK = "$$"


def _padded(raw: bytes) -> bytes:
    """Return ``raw`` terminated and zero-padded to a multiple of four."""
    return raw + b"\0" * (4 * (len(raw) // 4 + 1) - len(raw))


def _osc_string(value: str) -> bytes:
    raw = value.encode("utf-8")
    if b"\0" in raw:
        raise ValueError("OSC strings may not contain NUL characters")
    return _padded(raw)


def _to_float32(value: float) -> float:
    try:
        return struct.unpack(">f", struct.pack(">f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _integer(value: Any, bounds: Tuple[int, int], kind: str) -> int:
    number = operator.index(value)
    low, high = bounds
    if not low <= number <= high:
        raise ValueError(f"{kind} value out of range: {number}")
    return number


def _normalise(t: OscType, value: Any) -> Any:
    """Check an argument value and return the form stored in a message."""
    if t == OscType.INT32:
        return _integer(value, _INT32_RANGE, "int32")
    if t == OscType.INT64:
        return _integer(value, _INT64_RANGE, "int64")
    if t == OscType.FLOAT:
        return _to_float32(float(value))
    if t == OscType.DOUBLE:
        return float(value)
    if t in (OscType.STRING, OscType.SYMBOL):
        if not isinstance(value, str):
            raise TypeError(f"expected a str for type {t.value!r}, got {type(value).__name__}")
        _osc_string(value)
        return value
    if t == OscType.BLOB:
        return value if isinstance(value, Blob) else Blob(value)
    if t == OscType.TIMETAG:
        return value if isinstance(value, TimeTag) else TimeTag(*value)
    if t == OscType.CHAR:
        if isinstance(value, str):
            if len(value) != 1 or ord(value) > 0xFF:
                raise ValueError(f"char argument must be a single 8-bit character: {value!r}")
            return value
        code = operator.index(value)
        if not 0 <= code <= 0xFF:
            raise ValueError(f"char argument out of range: {code}")
        return chr(code)
    if t == OscType.MIDI:
        data = bytes(value)
        if len(data) != 4:
            raise ValueError("a MIDI argument holds exactly four bytes")
        return data
    return None


def _encode(t: OscType, value: Any) -> bytes:
    if t == OscType.INT32:
        return struct.pack(">i", value)
    if t == OscType.INT64:
        return struct.pack(">q", value)
    if t == OscType.FLOAT:
        return struct.pack(">f", value)
    if t == OscType.DOUBLE:
        return struct.pack(">d", value)
    if t in (OscType.STRING, OscType.SYMBOL):
        return _osc_string(value)
    if t == OscType.BLOB:
        body = struct.pack(">I", len(value.data)) + value.data
        return body + b"\0" * (value.padded_size() - len(body))
    if t == OscType.TIMETAG:
        return struct.pack(">II", value.sec, value.frac)
    if t == OscType.CHAR:
        return struct.pack(">I", ord(value))
    if t == OscType.MIDI:
        return value
    return b""


def _decode(t: OscType, chunk: bytes) -> Any:
    if t == OscType.INT32:
        return struct.unpack(">i", chunk[:4])[0]
    if t == OscType.INT64:
        return struct.unpack(">q", chunk[:8])[0]
    if t == OscType.FLOAT:
        return struct.unpack(">f", chunk[:4])[0]
    if t == OscType.DOUBLE:
        return struct.unpack(">d", chunk[:8])[0]
    if t in (OscType.STRING, OscType.SYMBOL):
        return chunk[: chunk.index(b"\0")].decode("utf-8", errors="replace")
    if t == OscType.BLOB:
        (size,) = struct.unpack(">I", chunk[:4])
        return Blob(chunk[4 : 4 + size])
    if t == OscType.TIMETAG:
        return TimeTag(*struct.unpack(">II", chunk[:8]))
    if t == OscType.CHAR:
        return chr(chunk[3])
    if t == OscType.MIDI:
        return bytes(chunk[:4])
    return None


class Message:
    """An OSC message: a list of typed arguments with a time stamp and source.

    Arguments of type true, false, nil and infinitum carry no data and are
    stored as None.
    """

    def __init__(self, types: str = "", *args: Any) -> None:
        self._types: List[OscType] = []
        self._args: List[Any] = []
        self.source: Any = None
        self.timestamp: TimeTag = TimeTag.IMMEDIATE
        if types or args:
            self.add(types, *args)

    @property
    def types(self) -> str:
        """The type tags of the arguments, without the leading comma."""
        return "".join(t.value for t in self._types)

    @property
    def args(self) -> Tuple[Any, ...]:
        """The argument values, in order."""
        return tuple(self._args)

    @property
    def argc(self) -> int:
        return len(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[Tuple[OscType, Any]]:
        return iter(zip(self._types, self._args))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return self._types == other._types and self._args == other._args

    def __repr__(self) -> str:
        return f"Message({self.types!r}, {', '.join(map(repr, self._args))})"

    def __str__(self) -> str:
        return self.format()

    def _append(self, t: OscType, value: Any) -> None:
        stored = _normalise(t, value)
        self._types.append(t)
        self._args.append(stored)

    def add(self, types: str, *args: Any) -> None:
        """Append arguments described by the type string ``types``.

        Types without data take no value. The number of values must match
        the types unless the type string ends with ``$$``, in which case
        surplus values are ignored.
        """
        check_count = True
        cut = types.find(_NO_CHECK)
        if cut >= 0:
            types = types[:cut]
            check_count = False
        parsed: List[OscType] = []
        for ch in types:
            try:
                parsed.append(OscType(ch))
            except ValueError:
                raise ValueError(f"unknown OSC type {ch!r}") from None
        needed = sum(1 for t in parsed if t not in _NO_DATA)
        if len(args) < needed or (check_count and len(args) != needed):
            raise TypeError(
                f"type string {types!r} needs {needed} values, {len(args)} given"
            )
        values = iter(args)
        staged = [
            (t, None if t in _NO_DATA else _normalise(t, next(values))) for t in parsed
        ]
        for t, stored in staged:
            self._types.append(t)
            self._args.append(stored)

    def add_int32(self, value: int) -> None:
        self._append(OscType.INT32, value)

    def add_float(self, value: float) -> None:
        self._append(OscType.FLOAT, value)

    def add_string(self, value: str) -> None:
        self._append(OscType.STRING, value)

    def add_blob(self, blob: Any) -> None:
        self._append(OscType.BLOB, blob)

    def add_int64(self, value: int) -> None:
        self._append(OscType.INT64, value)

    def add_timetag(self, timetag: Any) -> None:
        self._append(OscType.TIMETAG, timetag)

    def add_double(self, value: float) -> None:
        self._append(OscType.DOUBLE, value)

    def add_symbol(self, value: str) -> None:
        self._append(OscType.SYMBOL, value)

    def add_char(self, value: Any) -> None:
        self._append(OscType.CHAR, value)

    def add_midi(self, value: Sequence[int]) -> None:
        self._append(OscType.MIDI, value)

    def add_true(self) -> None:
        self._append(OscType.TRUE, None)

    def add_false(self) -> None:
        self._append(OscType.FALSE, None)

    def add_nil(self) -> None:
        self._append(OscType.NIL, None)

    def add_infinitum(self) -> None:
        self._append(OscType.INFINITUM, None)

    def clone(self) -> "Message":
        """Return a copy with the same arguments, no source and an immediate time stamp."""
        copy = Message()
        copy._types = list(self._types)
        copy._args = list(self._args)
        return copy

    def _data(self) -> bytes:
        return b"".join(_encode(t, v) for t, v in zip(self._types, self._args))

    def length(self, path: str) -> int:
        """Return the size of the message serialised under ``path``."""
        return strsize(path) + strsize("," + self.types) + len(self._data())

    def serialise(self, path: str) -> bytes:
        """Return the wire form of the message addressed to ``path``."""
        return _osc_string(path) + _osc_string("," + self.types) + self._data()

    def format(self) -> str:
        """Return the readable form: the type string followed by each argument."""
        shown = " ".join(format_arg(t, v) for t, v in zip(self._types, self._args))
        return f",{self.types} {shown}"


def deserialise_message(data: bytes) -> Message:
    """Parse the wire form of a message; the path can be read with ``get_path``."""
    data = bytes(data)
    if not data:
        raise OscError(ErrorCode.ESIZE, "empty message")
    try:
        path_len = validate_string(data)
    except OscError:
        raise OscError(ErrorCode.EINVALIDPATH, "invalid path string") from None
    rest = data[path_len:]
    if not rest:
        raise OscError(ErrorCode.ENOTYPE, "no type tag string")
    try:
        types_len = validate_string(rest)
    except OscError:
        raise OscError(ErrorCode.EINVALIDTYPE, "invalid type tag string") from None
    if rest[:1] != b",":
        raise OscError(ErrorCode.EBADTYPE, "type tag string missing initial comma")
    tags = rest[1 : rest.index(b"\0")].decode("latin-1")
    body = rest[types_len:]

    message = Message()
    pos = 0
    for ch in tags:
        chunk = body[pos:]
        try:
            size = validate_arg(ch, chunk)
            value = _decode(OscType(ch), chunk)
        except (OscError, ValueError):
            raise OscError(ErrorCode.EINVALIDARG, f"invalid argument of type {ch!r}") from None
        message._types.append(OscType(ch))
        message._args.append(value)
        pos += size
    if pos != len(body):
        raise OscError(ErrorCode.ESIZE, "argument data does not match type tags")
    return message


def _first(items: Sequence[Any]) -> Optional[Any]:
    return items[0] if items else None