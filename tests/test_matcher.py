import pytest

from patkit.errors import AbortError
from patkit.matcher import glob_match, match
from patkit.pattern import compile_pattern
from patkit.patterntext import convert_glob


def _m(source, text):
    return match(text, compile_pattern(source))


def _g(glob, name):
    return glob_match(name, compile_pattern(convert_glob(glob)))


@pytest.mark.parametrize("text", ["acd", "bcd", "bcdeeeee", "xxacdzz"])
def test_documented_class_and_repeat_examples(text):
    assert _m("[ab]cde*", text) is True


def test_documented_class_example_rejects_other_start():
    assert _m("[ab]cde*", "ccd") is False


@pytest.mark.parametrize(
    "needle, text",
    [
        ("abc", "xxabcxx"),
        ("abc", "abx"),
        ("hello", "say hello there"),
        ("zz", "abcdef"),
        ("a", "a"),
    ],
)
def test_plain_literals_behave_like_substring_search(needle, text):
    assert _m(needle, text) == (needle in text)


def test_bol_anchor_only_at_start():
    assert _m("^abc", "abcdef") is True
    assert _m("^abc", "xabc") is False


def test_eol_anchor():
    assert _m("abc$", "xxabc") is True
    assert _m("abc$", "abc\n") is True
    assert _m("abc$", "abcd") is False


def test_newline_is_end_of_line_only_when_last():
    assert _m("x$", "x\ny") is False


def test_wild_does_not_match_newline():
    assert _m("a.c", "abc") is True
    assert _m("a.c", "a\nc") is False


def test_digit_classes():
    assert _m("\\d+", "abc123") is True
    assert _m("\\d", "abc") is False
    assert _m("\\D", "123") is False
    assert _m("\\D", "12a") is True


def test_whitespace_classes():
    assert _m("\\s", "a b") is True
    assert _m("\\s", "ab") is False
    assert _m("\\S", "   ") is False


def test_word_classes():
    assert _m("\\w", "!!!") is False
    assert _m("\\w", "!_") is True
    assert _m("\\W", "abc") is False


def test_character_classes():
    assert _m("[abc]", "xyzb") is True
    assert _m("[abc]", "xyz") is False
    assert _m("[^abc]", "abc") is False
    assert _m("[^abc]", "abd") is True


def test_range_in_class():
    assert _m("[a-c]x", "bx") is True
    assert _m("[a-c]x", "dx") is False


def test_zero_or_one():
    assert _m("colou?r", "color") is True
    assert _m("colou?r", "colour") is True
    assert _m("colou?r", "colr") is False


def test_zero_or_more():
    assert _m("ab*c", "ac") is True
    assert _m("ab*c", "abbbc") is True
    assert _m("ab*c", "abd") is False


def test_one_or_more_backtracks():
    assert _m("a+ab", "aab") is True
    assert _m("a+ab", "b") is False
    assert _m("x+", "y") is False


def test_wild_star_backtracks():
    assert _m(".*x", "abcx") is True
    assert _m(".*x", "abc") is False


def test_escaped_tab_literal():
    assert _m("a\\tb", "a\tb") is True
    assert _m("a\\tb", "atb") is False


def test_escaped_meta_is_literal():
    assert _m("a\\.b", "a.b") is True
    assert _m("a\\.b", "axb") is False


def test_empty_text_never_matches():
    assert _m("a*", "") is False


def test_match_missing_arguments():
    with pytest.raises(AbortError):
        match(None, compile_pattern("a"))
    with pytest.raises(AbortError):
        match("a", None)


def test_glob_star_suffix():
    assert _g("*.c", "main.c") is True
    assert _g("*.c", "main.h") is False


def test_glob_hides_dot_files():
    assert _g("*.c", ".hidden.c") is False


def test_glob_explicit_leading_dot():
    assert _g(".*", ".bashrc") is True


def test_glob_question_mark():
    assert _g("a?c", "abc") is True
    assert _g("a?c", "abbc") is False


def test_default_glob():
    assert _g(None, "readme") is True
    assert _g("", ".profile") is False


def test_glob_match_anchored_at_start():
    pat = compile_pattern("main")
    assert glob_match("main.c", pat) is True
    assert glob_match("xmain.c", pat) is False


def test_glob_match_missing_arguments():
    with pytest.raises(AbortError):
        glob_match(None, compile_pattern("a"))