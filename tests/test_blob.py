import pytest
from hypothesis import given, strategies as st

from oscwire.blob import Blob


def test_empty_blob_is_rejected():
    with pytest.raises(ValueError):
        Blob(b"")


def test_data_is_kept_and_length_reported():
    blob = Blob(bytearray(b"ABCDE\x00"))
    assert blob.data == b"ABCDE\x00"
    assert len(blob) == 6


def test_four_byte_blob_needs_no_padding():
    assert Blob(b"abcd").padded_size() == 8


def test_blob_is_immutable():
    blob = Blob(b"x")
    with pytest.raises(AttributeError):
        blob.data = b"y"
    assert blob.data == b"x"
    assert len(blob) == 1


@given(st.binary(min_size=1, max_size=200))
def test_padded_size_is_aligned_and_tight(data):
    size = Blob(data).padded_size()
    assert size % 4 == 0
    assert 4 + len(data) <= size < 4 + len(data) + 4


@given(st.binary(min_size=1, max_size=64))
def test_equal_data_gives_equal_blobs(data):
    assert Blob(data) == Blob(bytes(data))