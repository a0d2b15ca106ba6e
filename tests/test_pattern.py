import pytest
from hypothesis import given, strategies as st

from oscwire.pattern import pattern_match


@pytest.mark.parametrize("string", ["ac", "abc", "abbc"])
def test_star_matches_any_run(string):
    assert pattern_match(string, "a*c") is True


@pytest.mark.parametrize("string", ["acc", "abc", "aXc"])
def test_question_mark_matches_one_char(string):
    assert pattern_match(string, "a?c") is True


def test_question_mark_needs_a_char():
    assert pattern_match("ac", "a?c") is False


@pytest.mark.parametrize("string", ["aac", "abc", "acc", "azc"])
def test_range_set(string):
    assert pattern_match(string, "a[a-z]c") is True


@pytest.mark.parametrize("string", ["aAc", "a-c", "a1c"])
def test_range_set_rejects_outside(string):
    assert pattern_match(string, "a[a-z]c") is False


@pytest.mark.parametrize("string", ["a-c", "aac", "abc"])
def test_set_with_leading_hyphen(string):
    assert pattern_match(string, "a[-a-z]c") is True


def test_negated_set():
    assert pattern_match("aXc", "a[!a-z]c") is True
    assert pattern_match("abc", "a[!a-z]c") is False


def test_unterminated_set_fails():
    assert pattern_match("ab", "a[b") is False


@pytest.mark.parametrize("string", ["bar", "baz"])
def test_brace_alternatives(string):
    assert pattern_match(string, "{bar,baz}") is True


def test_brace_alternative_not_listed():
    assert pattern_match("qux", "{bar,baz}") is False


@pytest.mark.parametrize("string", ["/foo/bar/x", "/foo/baz/x"])
def test_brace_followed_by_more_pattern(string):
    assert pattern_match(string, "/foo/{bar,baz}/x") is True


def test_unterminated_brace_fails():
    assert pattern_match("bar", "{bar") is False


def test_literal_paths():
    assert pattern_match("/foo", "/foo") is True
    assert pattern_match("/foobar", "/foo") is False
    assert pattern_match("/foo", "/foobar") is False


def test_empty_pattern():
    assert pattern_match("", "") is True
    assert pattern_match("a", "") is False


def test_wildcard_in_path_segment():
    assert pattern_match("/synth/1/freq", "/synth/*/freq") is True
    assert pattern_match("/synth/1/gain", "/synth/*/freq") is False


_plain = st.text(alphabet="abcxyz/_019", max_size=30)


@given(_plain)
def test_plain_string_matches_itself(s):
    assert pattern_match(s, s) is True


@given(_plain)
def test_lone_star_matches_everything(s):
    assert pattern_match(s, "*") is True


@given(_plain, _plain)
def test_plain_pattern_is_equality(a, b):
    assert pattern_match(a, b) == (a == b)