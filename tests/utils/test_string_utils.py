import pytest

from utils.string_utils import StringUtils


@pytest.mark.parametrize(
    ("value", "expected"),
    [("", True), ("   ", True), ("\n\t", True), (None, True), (3, True), ("a", False), (" a ", False)],
)
def test_is_blank(value: object, expected: bool) -> None:
    assert StringUtils.is_blank(value) is expected


def test_normalize_text_lowercases_and_trims() -> None:
    assert StringUtils.normalize_text("  Save  Changes ") == "save  changes"
    assert StringUtils.normalize_text("ÉTÉ") == "été"


def test_ensure_str() -> None:
    assert StringUtils.ensure_str(None) == ""
    assert StringUtils.ensure_str("x") == "x"


def test_shorten() -> None:
    assert StringUtils.shorten("abc", limit=5) == "abc"
    assert StringUtils.shorten("abcdefgh", limit=3) == "abc..."
