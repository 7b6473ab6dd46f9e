import pytest

from typist.textinput.normalize import BACKSPACE, SPACE, is_printable, is_whitespace, normalize, normalize_whitespace


@pytest.mark.parametrize("c", (" ", "\t", "\n", "\r", "\u00a0", "\u2003", "\u3000"))
def test_whitespace(c: str):
    assert is_whitespace(ord(c))
    assert normalize_whitespace(ord(c)) == SPACE
    assert normalize(ord(c)) == SPACE


@pytest.mark.parametrize("c", ("a", "1", "-", "\b", "\x00"))
def test_not_whitespace(c: str):
    assert not is_whitespace(ord(c))
    assert normalize_whitespace(ord(c)) == ord(c)


def test_nothing_is_not_whitespace():
    assert not is_whitespace(None)


@pytest.mark.parametrize(
    "expected,typed",
    (
        ("’", "'"),
        ("‘", "'"),
        ("“", '"'),
        ("”", '"'),
        ("–", "-"),
        ("—", "-"),
        ("a", "a"),
        ("\u00e9", "\u00e9"),
    ),
)
def test_normalize(expected: str, typed: str):
    assert normalize(ord(expected)) == ord(typed)


def test_printable():
    assert is_printable(ord("a"))
    assert is_printable(ord("’"))
    assert not is_printable(BACKSPACE)
    assert not is_printable(ord(" "))
