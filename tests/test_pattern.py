import pytest

from patkit.errors import AbortError
from patkit.pattern import (
    QUANTIFIERS,
    CompiledPattern,
    PatCode,
    compile_pattern,
    expand_range,
    pattern_source,
    validate_compiled_pattern,
)


def lit(ch):
    return [PatCode.LIT, 1, ord(ch)]


def test_expand_range_documented_examples():
    assert expand_range("[0-9]") == "[0123456789]"
    assert expand_range("[abc-f]") == "[abcdef]"


def test_expand_range_leaves_text_outside_classes():
    assert expand_range("a-z") == "a-z"
    assert expand_range("x[a-c]y-z") == "x[abc]y-z"


def test_expand_range_keeps_escapes():
    assert expand_range("[\\-x]") == "[\\-x]"


def test_compile_literals():
    pat = compile_pattern("abc")
    assert validate_compiled_pattern(pat, lit("a") + lit("b") + lit("c") + [PatCode.END, 0])
    assert pat.codes[-1] == PatCode.END


def test_compile_anchors():
    pat = compile_pattern("^a$")
    assert validate_compiled_pattern(pat, [PatCode.BOL] + lit("a") + [PatCode.EOL, PatCode.END])


def test_anchor_characters_in_middle_are_literals():
    pat = compile_pattern("a^b$c")
    expected = lit("a") + lit("^") + lit("b") + lit("$") + lit("c") + [PatCode.END]
    assert validate_compiled_pattern(pat, expected)


def test_compile_character_class():
    pat = compile_pattern("[abc]")
    expected = [PatCode.CCLASS, 3, ord("a"), ord("b"), ord("c"), PatCode.END]
    assert validate_compiled_pattern(pat, expected)


def test_compile_negated_class():
    pat = compile_pattern("[^abc]")
    expected = [PatCode.NOT_CCLASS, 3, ord("a"), ord("b"), ord("c"), PatCode.END]
    assert validate_compiled_pattern(pat, expected)


def test_class_with_range_is_expanded():
    pat = compile_pattern("[a-e]")
    expected = [PatCode.CCLASS, 5] + [ord(c) for c in "abcde"] + [PatCode.END]
    assert validate_compiled_pattern(pat, expected)


def test_class_escapes():
    pat = compile_pattern("[\\t\\]]")
    expected = [PatCode.CCLASS, 2, ord("\t"), ord("]"), PatCode.END]
    assert validate_compiled_pattern(pat, expected)


def test_quantifier_moves_before_last_literal():
    pat = compile_pattern("ab*")
    expected = lit("a") + [PatCode.REP0M] + lit("b") + [PatCode.END]
    assert validate_compiled_pattern(pat, expected)


def test_quantifier_after_class():
    pat = compile_pattern("[ab]+c?")
    expected = (
        [PatCode.REP1M, PatCode.CCLASS, 2, ord("a"), ord("b"), PatCode.REP01]
        + lit("c")
        + [PatCode.END]
    )
    assert validate_compiled_pattern(pat, expected)


def test_shorthand_classes_and_wild():
    pat = compile_pattern("\\d\\D\\s\\S\\w\\W.")
    expected = [
        PatCode.DIG, PatCode.NOT_DIG, PatCode.WS, PatCode.NOT_WS,
        PatCode.WC, PatCode.NOT_WC, PatCode.WILD, PatCode.END,
    ]
    assert validate_compiled_pattern(pat, expected)


def test_escaped_characters_become_literals():
    pat = compile_pattern("\\n\\*\\.")
    expected = lit("\n") + lit("*") + lit(".") + [PatCode.END]
    assert validate_compiled_pattern(pat, expected)


def test_end_of_class_markers_are_dropped():
    pat = compile_pattern("[ab][cd]")
    assert PatCode.END_OF not in pat.codes[::1] or pat.codes.count(PatCode.END_OF) == 0
    assert pat.codes.count(PatCode.CCLASS) == 2


@pytest.mark.parametrize(
    "source",
    ["[]", "[^]", "a]", "a|b", "a{2}", "a}", "(a)", "a)", "a\\", "*a", "a**"],
)
def test_invalid_patterns_abort(source):
    with pytest.raises(AbortError):
        compile_pattern(source)


def test_pattern_source_keeps_raw_text():
    pat = compile_pattern("[a-c]x")
    assert pattern_source(pat) == "[a-c]x"
    assert pat.source == "[a-c]x"


def test_pattern_source_of_invalid():
    assert pattern_source(None) == "not a valid pattern"
    assert pattern_source("abc") == "not a valid pattern"


def test_validate_rejects_mismatch_and_invalid():
    pat = compile_pattern("ab")
    assert not validate_compiled_pattern(pat, lit("b"))
    assert not validate_compiled_pattern(None, [])
    too_long = list(pat.codes) + [0, 0]
    assert not validate_compiled_pattern(pat, too_long)


def test_validate_accepts_prefix():
    pat = compile_pattern("ab")
    assert validate_compiled_pattern(pat, lit("a"))
    assert validate_compiled_pattern(pat, [])


@pytest.mark.parametrize("source", ["abc", "^[a-z]+\\d*x?$", "[^xy]\\w.", "a\\.b"])
def test_item_walk_reaches_end(source):
    pat = compile_pattern(source)
    index = 0
    steps = 0
    while pat.codes[index] != PatCode.END:
        assert pat.codes[index] in set(PatCode)
        index = pat.next_index(index)
        steps += 1
    assert index == len(pat.codes) - 1
    assert steps > 0


def test_quantifier_is_followed_by_item():
    pat = compile_pattern("a+b*[cd]?")
    quantifiers = []
    followers = []
    index = 0
    while pat.codes[index] != PatCode.END:
        if pat.codes[index] in QUANTIFIERS:
            quantifiers.append(pat.codes[index])
            followers.append(pat.codes[index + 1])
        index = pat.next_index(index)
    assert quantifiers == [PatCode.REP1M, PatCode.REP0M, PatCode.REP01]
    assert followers == [PatCode.LIT, PatCode.LIT, PatCode.CCLASS]


def test_item_length_of_literal_and_class():
    pat = compile_pattern("[abc]d")
    assert pat.item_length(0) == 5
    assert pat.next_index(0) == 5
    assert pat.item_length(5) == 3


def test_compiled_pattern_equality():
    assert compile_pattern("a*b") == compile_pattern("a*b")
    assert isinstance(compile_pattern("a"), CompiledPattern) and compile_pattern("a") != compile_pattern("b")