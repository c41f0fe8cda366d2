"""Matching text against patterns built by compile_pattern.

A plain match looks for the pattern anywhere in the text. A glob match
must start at the first character and keeps names that begin with a
period hidden unless the pattern asks for a leading period.
"""

from __future__ import annotations

import string
from collections.abc import Callable

from .errors import abort_if
from .pattern import CompiledPattern, PatCode

_NO_MATCH = -1

_WHITESPACE = frozenset(" \t\n\r\f\v")
_DIGITS = frozenset(string.digits)
_WORD = frozenset(string.ascii_letters + string.digits + "_")


def _is_digit(char: str) -> bool:
    return char in _DIGITS


def _is_whitespace(char: str) -> bool:
    return char in _WHITESPACE


def _is_word_char(char: str) -> bool:
    return char in _WORD


_CHAR_TESTS: dict[int, Callable[[str], bool]] = {
    PatCode.WILD: lambda c: c != "\n",
    PatCode.DIG: _is_digit,
    PatCode.NOT_DIG: lambda c: not _is_digit(c),
    PatCode.WS: _is_whitespace,
    PatCode.NOT_WS: lambda c: not _is_whitespace(c),
    PatCode.WC: _is_word_char,
    PatCode.NOT_WC: lambda c: not _is_word_char(c),
    PatCode.FF: lambda c: c == "\f",
    PatCode.LF: lambda c: c == "\n",
    PatCode.TAB: lambda c: c == "\t",
}


def _code_name(code: int) -> str:
    try:
        return PatCode(code).name
    except ValueError:
        return "!!!ERROR!!!"


def _match_item(
    text: str, pos: int, pat: CompiledPattern, index: int
) -> int | None:
    """Match one item at *pos*; return the position after it, or None."""
    code = pat.codes[index]

    # End of text only satisfies an end of line anchor.
    if pos >= len(text):
        return pos if code == PatCode.EOL else None

    char = text[pos]

    if code == PatCode.EOL:
        # A newline is end of line only when it is the last character.
        if char == "\n" and pos + 1 == len(text):
            return pos + 1
        return None

    if code == PatCode.BOL:
        return pos if pos == 0 else None

    test = _CHAR_TESTS.get(code)
    if test is not None:
        return pos + 1 if test(char) else None

    if code == PatCode.LIT:
        return pos + 1 if pat.codes[index + 2] == ord(char) else None

    if code in (PatCode.CCLASS, PatCode.NOT_CCLASS):
        count = pat.codes[index + 1]
        found = ord(char) in pat.codes[index + 2:index + 2 + count]
        if found == (code == PatCode.CCLASS):
            return pos + 1
        return None

    abort_if(
        True,
        f"pat match_this_item unknown pattern type code in: {code} {_code_name(code)}",
    )
    return None


def _greedy(
    text: str, pos: int, pat: CompiledPattern, index: int
) -> tuple[int, bool]:
    """Consume as many matches of one item as possible.

    Returns the position reached and whether the item matched at all.
    """
    matched = False
    while True:
        after = _match_item(text, pos, pat, index)
        if after is None:
            return pos, matched
        matched = True
        if after == pos:
            return pos, matched
        pos = after


def _match_from(text: str, start: int, pat: CompiledPattern, index: int) -> int:
    """Match the pattern from item *index* at *start*.

    Returns *start* when the rest of the pattern matches, otherwise -1.
    """
    pos = start
    while pat.codes[index] != PatCode.END:
        code = pat.codes[index]

        if code == PatCode.REP0M:
            quantified = pat.next_index(index)
            rest = pat.next_index(quantified)
            end, matched = _greedy(text, pos, pat, quantified)
            if not matched:
                index = rest
                continue
            for back in range(end, pos - 1, -1):
                if _match_from(text, back, pat, rest) != _NO_MATCH:
                    return start
            return _NO_MATCH

        if code == PatCode.REP01:
            quantified = pat.next_index(index)
            rest = pat.next_index(quantified)
            after = _match_item(text, pos, pat, quantified)
            if after is not None and _match_from(text, after, pat, rest) > 0:
                return start
            index = rest
            continue

        if code == PatCode.REP1M:
            quantified = pat.next_index(index)
            rest = pat.next_index(quantified)
            if _match_item(text, pos, pat, quantified) is None:
                return _NO_MATCH
            end, _ = _greedy(text, pos, pat, quantified)
            for back in range(end, pos, -1):
                if _match_from(text, back, pat, rest) != _NO_MATCH:
                    return start
            return _NO_MATCH

        if code == PatCode.REP_COUNT:
            return _NO_MATCH

        after = _match_item(text, pos, pat, index)
        if after is None:
            return _NO_MATCH
        pos = after
        index = pat.next_index(index)

    return start


def _check_arguments(text: object, pat: object, caller: str) -> None:
    abort_if(
        text is None or not isinstance(pat, CompiledPattern),
        f"pat {caller} missing arguments",
    )


def match(text: str, pat: CompiledPattern) -> bool:
    """Return True if the pattern is found anywhere in *text*.

    Matching is tried at each position in turn; an empty text never matches.
    """
    _check_arguments(text, pat, "match")
    return any(
        _match_from(text, start, pat, 0) != _NO_MATCH
        for start in range(len(text))
    )


def glob_match(text: str, pat: CompiledPattern) -> bool:
    """Return True if *text*, taken as a file name, matches from its start.

    Names beginning with a period match only when the pattern's first
    literal, after any start of line anchor, is itself a period. Whether
    the whole name is consumed is not checked.
    """
    _check_arguments(text, pat, "glob_match")
    if not text.startswith("."):
        return _match_from(text, 0, pat, 0) == 0

    index = 0
    if pat.codes[index] == PatCode.BOL:
        index = pat.next_index(index)
    if pat.codes[index] == PatCode.LIT and pat.codes[index + 2] == ord("."):
        return _match_from(text, 0, pat, 0) == 0
    return False