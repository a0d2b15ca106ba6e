"""OSC argument types, time tags, sizes, validation and coercion."""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union

from oscwire.blob import Blob

_UINT32_MAX = 0xFFFFFFFF


class OscType(str, enum.Enum):
    """Type tag characters of OSC arguments."""

    INT32 = "i"
    FLOAT = "f"
    STRING = "s"
    BLOB = "b"
    INT64 = "h"
    TIMETAG = "t"
    DOUBLE = "d"
    SYMBOL = "S"
    CHAR = "c"
    MIDI = "m"
    TRUE = "T"
    FALSE = "F"
    NIL = "N"
    INFINITUM = "I"


TypeLike = Union[OscType, str]


class ErrorCode(enum.Enum):
    """Reasons for rejecting OSC data."""

    ENOTYPE = enum.auto()
    INT_ERR = enum.auto()
    EALLOC = enum.auto()
    EINVALIDPATH = enum.auto()
    EINVALIDTYPE = enum.auto()
    EBADTYPE = enum.auto()
    ESIZE = enum.auto()
    EINVALIDARG = enum.auto()
    ETERM = enum.auto()
    EPAD = enum.auto()
    EINVALIDBUND = enum.auto()


class OscError(Exception):
    """Raised when OSC data is malformed."""

    def __init__(self, code: ErrorCode, message: Optional[str] = None) -> None:
        self.code = code
        super().__init__(message or code.name)


@dataclass(frozen=True)
class TimeTag:
    """An NTP-style time tag: seconds and fraction, both unsigned 32-bit."""

    sec: int
    frac: int

    IMMEDIATE: ClassVar["TimeTag"]

    def __post_init__(self) -> None:
        for name in ("sec", "frac"):
            value = getattr(self, name)
            if not 0 <= value <= _UINT32_MAX:
                raise ValueError(f"time tag {name} out of range: {value}")

    def __str__(self) -> str:
        return f"{self.sec:08x}.{self.frac:08x}"


TimeTag.IMMEDIATE = TimeTag(0, 1)

_ZERO_SIZE = frozenset({OscType.TRUE, OscType.FALSE, OscType.NIL, OscType.INFINITUM})
_FOUR_BYTES = frozenset({OscType.INT32, OscType.FLOAT, OscType.MIDI, OscType.CHAR})
_EIGHT_BYTES = frozenset({OscType.INT64, OscType.TIMETAG, OscType.DOUBLE})
_STRINGS = frozenset({OscType.STRING, OscType.SYMBOL})
_NUMERICAL = frozenset({OscType.INT32, OscType.FLOAT, OscType.INT64, OscType.DOUBLE})


def _as_type(type_: TypeLike) -> OscType:
    try:
        return OscType(type_)
    except ValueError:
        raise ValueError(f"unhandled OSC type {type_!r}") from None


def _encoded(s: Union[str, bytes]) -> bytes:
    return s.encode("utf-8") if isinstance(s, str) else bytes(s)


def strsize(s: Union[str, bytes]) -> int:
    """Return the padded wire size of a string including its terminator."""
    return 4 * (len(_encoded(s)) // 4 + 1)


def arg_size(type_: TypeLike, value: Any = None) -> int:
    """Return the number of wire bytes an argument of ``type_`` occupies."""
    t = _as_type(type_)
    if t in _ZERO_SIZE:
        return 0
    if t in _FOUR_BYTES:
        return 4
    if t in _EIGHT_BYTES:
        return 8
    if t in _STRINGS:
        return strsize(value)
    blob = value if isinstance(value, Blob) else Blob(value)
    return blob.padded_size()


def validate_string(data: bytes) -> int:
    """Return the padded length of the OSC string at the start of ``data``."""
    data = bytes(data)
    end = data.find(b"\0")
    if end < 0:
        raise OscError(ErrorCode.ETERM, "string not terminated")
    length = 4 * (end // 4 + 1)
    if length > len(data):
        raise OscError(ErrorCode.ESIZE, "string padding overruns buffer")
    if any(data[end:length]):
        raise OscError(ErrorCode.EPAD, "non-zero byte in string padding")
    return length


def validate_blob(data: bytes) -> int:
    """Return the padded length of the OSC blob at the start of ``data``."""
    data = bytes(data)
    size = len(data)
    if size < 4:
        raise OscError(ErrorCode.ESIZE, "blob size field truncated")
    (dsize,) = struct.unpack_from(">I", data)
    if dsize > size:
        raise OscError(ErrorCode.ESIZE, "blob larger than buffer")
    end = 4 + dsize
    length = 4 * ((end + 3) // 4)
    if length > size:
        raise OscError(ErrorCode.ESIZE, "blob overruns buffer")
    if any(data[end:length]):
        raise OscError(ErrorCode.EPAD, "non-zero byte in blob padding")
    return length


def validate_bundle(data: bytes) -> int:
    """Check the framing of an OSC bundle and return its total size."""
    data = bytes(data)
    size = len(data)
    try:
        length = validate_string(data)
    except OscError:
        raise OscError(ErrorCode.ESIZE, "bundle header invalid") from None
    if data[: data.index(b"\0")] != b"#bundle":
        raise OscError(ErrorCode.EINVALIDBUND, "not a bundle")
    pos = length
    remain = size - length
    if remain < 8:
        raise OscError(ErrorCode.ESIZE, "bundle time tag truncated")
    pos += 8
    remain -= 8
    while remain >= 4:
        (elem_len,) = struct.unpack_from(">I", data, pos)
        pos += 4
        remain -= 4
        if elem_len > remain:
            raise OscError(ErrorCode.ESIZE, "bundle element overruns buffer")
        pos += elem_len
        remain -= elem_len
    if remain:
        raise OscError(ErrorCode.ESIZE, "trailing bytes in bundle")
    return size


def validate_arg(type_: TypeLike, data: bytes) -> int:
    """Return the wire length of an argument of ``type_`` at the start of ``data``."""
    try:
        t = OscType(type_)
    except ValueError:
        raise OscError(ErrorCode.EINVALIDTYPE, f"invalid type {type_!r}") from None
    size = len(data)
    if t in _ZERO_SIZE:
        return 0
    if t in _FOUR_BYTES:
        if size < 4:
            raise OscError(ErrorCode.ESIZE, "argument truncated")
        return 4
    if t in _EIGHT_BYTES:
        if size < 8:
            raise OscError(ErrorCode.ESIZE, "argument truncated")
        return 8
    if t in _STRINGS:
        return validate_string(data)
    return validate_blob(data)


def get_path(data: bytes) -> Optional[str]:
    """Return the address path at the start of ``data``, or None if invalid."""
    try:
        validate_string(data)
    except OscError:
        return None
    raw = bytes(data)
    return raw[: raw.index(b"\0")].decode("utf-8", errors="replace")


def is_numerical_type(type_: TypeLike) -> bool:
    """Return True for int32, float, int64 and double."""
    return type_ in {t.value for t in _NUMERICAL}


def is_string_type(type_: TypeLike) -> bool:
    """Return True for string and symbol."""
    return type_ in {t.value for t in _STRINGS}


def hires_val(type_: TypeLike, value: Any) -> Union[int, float]:
    """Return a numerical argument at full precision."""
    t = _as_type(type_)
    if t in (OscType.INT32, OscType.INT64):
        return int(value)
    if t in (OscType.FLOAT, OscType.DOUBLE):
        return float(value)
    raise ValueError(f"high-resolution value requested of non-numerical type {t.value!r}")


def _wrap(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) % (1 << bits)) - half


def _to_float32(value: float) -> float:
    try:
        return struct.unpack(">f", struct.pack(">f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def coerce(type_to: TypeLike, type_from: TypeLike, value: Any) -> Any:
    """Convert ``value`` of ``type_from`` into ``type_to``.

    Raises TypeError when the two types cannot be converted into each other.
    """
    to = _as_type(type_to)
    frm = _as_type(type_from)
    if to == frm:
        return value
    if to in _STRINGS and frm in _STRINGS:
        return str(value)
    if to in _NUMERICAL and frm in _NUMERICAL:
        hires = hires_val(frm, value)
        if to == OscType.INT32:
            return _wrap(int(hires), 32)
        if to == OscType.INT64:
            return _wrap(int(hires), 64)
        if to == OscType.FLOAT:
            return _to_float32(float(hires))
        return float(hires)
    raise TypeError(f"cannot coerce {frm.value!r} to {to.value!r}")


def _hex_byte(b: int) -> str:
    return "0" if b == 0 else f"{b:#x}"


def format_arg(type_: TypeLike, value: Any) -> str:
    """Return the readable form of an argument."""
    t = _as_type(type_)
    if t in (OscType.INT32, OscType.INT64):
        return str(int(value))
    if t in (OscType.FLOAT, OscType.DOUBLE):
        return f"{float(value):f}"
    if t == OscType.STRING:
        return f'"{value}"'
    if t == OscType.SYMBOL:
        return f"'{value}"
    if t == OscType.CHAR:
        return f"'{value}'"
    if t == OscType.BLOB:
        data = value.data if isinstance(value, Blob) else bytes(value)
        if len(data) > 12:
            return f"[{len(data)} byte blob]"
        return f"[{len(data)}b " + " ".join(_hex_byte(b) for b in data) + "]"
    if t == OscType.TIMETAG:
        return f"{value.sec:08x}.{value.frac:08x}"
    if t == OscType.MIDI:
        return "MIDI [" + " ".join(f"0x{b:02x}" for b in bytes(value)[:4]) + "]"
    if t == OscType.TRUE:
        return "#T"
    if t == OscType.FALSE:
        return "#F"
    if t == OscType.NIL:
        return "Nil"
    return "Infinitum"