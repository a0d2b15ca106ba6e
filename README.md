# oscwire

Build, serialise, parse and validate Open Sound Control (OSC) data in pure
Python. The package needs nothing outside the standard library.

## Modules

- `oscwire.message`: `Message` holds a list of typed arguments. It also has
  a `timestamp`, which defaults to `TimeTag.IMMEDIATE`, and a `source`.
  - Arguments are added with `add(types, *args)` or with the single-type
    methods: `add_int32`, `add_float`, `add_string`, `add_blob`,
    `add_int64`, `add_timetag`, `add_double`, `add_symbol`, `add_char`,
    `add_midi`, `add_true`, `add_false`, `add_nil` and `add_infinitum`.
  - `add` raises `ValueError` for an unknown type character. It raises
    `TypeError` when the number of values does not match the type string.
    A type string ending in `$$` allows surplus values.
  - `serialise(path)` returns the wire bytes, and `length(path)` returns
    their size. `format()` gives a readable form. `clone()` copies the
    arguments.
  - `deserialise_message(data)` parses wire bytes back into a `Message`. It
    raises `OscError` when the data is malformed.
- `oscwire.bundle`: `Bundle` holds messages (each with a path) and nested
  bundles under a `TimeTag`.
  - Add elements with `add_message(path, message)` and `add_bundle(bundle)`.
    `add_bundle` raises `ValueError` if the bundle would end up containing
    itself.
  - Read elements back with `get_type(index)`, `get_message(index)` (which
    returns `(path, message)`) and `get_bundle(index)`.
  - `serialise()` produces a `#bundle` packet, and `length()` returns its
    size. `format()` draws the contents as a tree.
- `oscwire.blob`: `Blob` is immutable binary data of at least one byte.
  `padded_size()` gives its size on the wire.
- `oscwire.types`:
  - `OscType` holds the type tag characters. `TimeTag` is a time tag, and
    `TimeTag.IMMEDIATE` is `TimeTag(0, 1)`.
  - Sizing helpers: `strsize` and `arg_size`.
  - Validators: `validate_string`, `validate_blob`, `validate_bundle` and
    `validate_arg`. They raise `OscError`, whose `code` is an `ErrorCode`.
  - `get_path(data)` reads the address at the start of a packet.
  - Type helpers: `is_numerical_type`, `is_string_type`, `hires_val` and
    `coerce`. `coerce` raises `TypeError` for types that cannot be
    converted.
  - `format_arg` returns the readable form of one argument.
- `oscwire.pattern`: `pattern_match(string, pattern)` matches an OSC
  address pattern. It supports `*`, `?`, `[set]`, `[!set]` and
  `{alt,alt}`.
- `oscwire.method`: `Method` binds a handler to a path and a type
  specification. `format(prefix)` describes it.

## Installing

```
pip install .
```

To install with the test tools and run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from oscwire.bundle import Bundle
from oscwire.message import Message, deserialise_message
from oscwire.pattern import pattern_match
from oscwire.types import TimeTag, get_path, validate_bundle

msg = Message("ifs", 1, 2.5, "three")
data = msg.serialise("/foo/bar")

assert get_path(data) == "/foo/bar"
parsed = deserialise_message(data)
assert parsed == msg
print(parsed.format())          # ,ifs 1 2.500000 "three"

bundle = Bundle(TimeTag(0, 1))
bundle.add_message("/foo/bar", msg)
packet = bundle.serialise()
assert validate_bundle(packet) == len(packet) == bundle.length()
print(bundle.format())

assert pattern_match("/foo/bar", "/foo/{bar,baz}")
```

## What it does not do

This package deals only with OSC data in memory. It does not do any
networking:

- it opens no sockets;
- it does not send or receive packets;
- it has no server or dispatch loop that calls `Method` handlers;
- it does not parse `osc.udp://`-style URLs or resolve host names.

Pair it with your own transport, such as the standard `socket` module, to
put the bytes on the wire.