import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from oscwire.blob import Blob
from oscwire.message import Message, deserialise_message
from oscwire.types import ErrorCode, OscError, TimeTag, get_path

_TEXT = st.text(alphabet="abcXYZ019 /_-é", max_size=20)


def test_empty_message_wire_form():
    assert Message().serialise("/x") == b"/x\0\0,\0\0\0"


def test_int32_wire_form():
    m = Message()
    m.add_int32(1)
    assert m.serialise("/a") == b"/a\0\0,i\0\0" + b"\0\0\0\x01"


def test_string_is_terminated_and_padded():
    m = Message()
    m.add_string("abcd")
    assert m.serialise("/a").endswith(b"abcd\0\0\0\0")


def test_blob_wire_form():
    m = Message()
    m.add_blob(Blob(b"ABCDE"))
    assert m.serialise("/b").endswith(b"\0\0\0\x05ABCDE\0\0\0")


def test_char_wire_form():
    m = Message()
    m.add_char("A")
    assert m.serialise("/c").endswith(b",c\0\0\0\0\0A")


def test_add_varargs_sets_types_and_values():
    m = Message()
    m.add("sfTi", "one", 0.5, 7)
    assert m.types == "sfTi"
    assert m.argc == 4
    assert m.args == ("one", 0.5, None, 7)


def test_constructor_adds_arguments():
    assert Message("ih", 3, 4).args == (3, 4)


def test_add_with_wrong_count_raises():
    with pytest.raises(TypeError):
        Message().add("ii", 1)
    with pytest.raises(TypeError):
        Message().add("i", 1, 2)


def test_add_unknown_type_raises_and_adds_nothing():
    m = Message()
    with pytest.raises(ValueError):
        m.add("iq", 1, 2)
    assert m.argc == 0


def test_double_dollar_disables_count_check():
    m = Message()
    m.add("i$$", 5, "extra")
    assert m.args == (5,)


def test_int32_range_checked():
    with pytest.raises(ValueError):
        Message().add_int32(2**31)


def test_float_stored_as_single_precision():
    m = Message()
    m.add_float(0.5)
    m.add_float(1e300)
    assert m.args == (0.5, math.inf)


def test_string_with_nul_rejected():
    with pytest.raises(ValueError):
        Message().add_string("a\0b")


def test_midi_needs_four_bytes():
    with pytest.raises(ValueError):
        Message().add_midi(b"\x01\x02")


def test_round_trip_of_every_type():
    m = Message()
    m.add_int32(-42)
    m.add_float(2.25)
    m.add_string("hello")
    m.add_blob(b"\x00\x01\x02")
    m.add_int64(-(2**40))
    m.add_timetag(TimeTag(10, 20))
    m.add_double(1.0 / 3.0)
    m.add_symbol("sym")
    m.add_char("z")
    m.add_midi(bytes([0x90, 60, 127, 0]))
    m.add_true()
    m.add_false()
    m.add_nil()
    m.add_infinitum()
    wire = m.serialise("/all")
    back = deserialise_message(wire)
    assert back == m
    assert back.types == m.types
    assert get_path(wire) == "/all"


@given(st.lists(st.integers(-(2**31), 2**31 - 1), max_size=8), _TEXT, _TEXT)
def test_round_trip_property(ints, text, path):
    m = Message()
    for i in ints:
        m.add_int32(i)
    m.add_string(text)
    wire = m.serialise("/" + path)
    assert len(wire) % 4 == 0
    assert len(wire) == m.length("/" + path)
    assert deserialise_message(wire) == m


def test_clone_is_equal_and_independent():
    m = Message("is", 1, "x")
    m.source = object()
    m.timestamp = TimeTag(5, 6)
    c = m.clone()
    assert c == m
    assert c.source is None
    assert c.timestamp == TimeTag.IMMEDIATE
    c.add_int32(2)
    assert m.argc == 2


def test_deserialised_message_defaults():
    back = deserialise_message(Message("i", 1).serialise("/p"))
    assert back.source is None
    assert back.timestamp == TimeTag.IMMEDIATE


@pytest.mark.parametrize(
    "data, code",
    [
        (b"", ErrorCode.ESIZE),
        (b"/a", ErrorCode.EINVALIDPATH),
        (b"/a\0\0", ErrorCode.ENOTYPE),
        (b"/a\0\0,i", ErrorCode.EINVALIDTYPE),
        (b"/a\0\0i\0\0\0", ErrorCode.EBADTYPE),
        (b"/a\0\0,i\0\0\0\0", ErrorCode.EINVALIDARG),
        (b"/a\0\0,q\0\0", ErrorCode.EINVALIDARG),
        (b"/a\0\0,\0\0\0\0\0\0\0", ErrorCode.ESIZE),
    ],
)
def test_deserialise_errors(data, code):
    with pytest.raises(OscError) as info:
        deserialise_message(data)
    assert info.value.code == code


def test_format():
    assert Message("if", 1, 2.5).format() == ",if 1 2.500000"


def test_format_matches_str_and_starts_with_types():
    m = Message("sT", "hi")
    assert str(m) == m.format()
    assert m.format().startswith(",sT ")
    assert '"hi"' in m.format()