"""Compilation of a small regular expression dialect into a flat item buffer.

A compiled pattern is a sequence of integer slots. Every item starts with a
PatCode; literals and character classes are followed by a count and that many
character codes. Quantifiers are moved ahead of the item they repeat, and the
buffer always ends with PatCode.END.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum

from .errors import abort_if


class PatCode(IntEnum):
    """Item codes stored in a compiled pattern."""

    BEG = 1
    BOL = 11
    EOL = 12
    CCLASS = 21
    NOT_CCLASS = 22
    END_OF = 23
    GROUP = 25
    END_GROUP = 26
    LIT = 31
    WILD = 32
    LF = 33
    TAB = 34
    FF = 35
    REP0M = 41
    REP1M = 42
    REP01 = 43
    REP_COUNT = 44
    END_REP = 49
    OR = 51
    ESC = 81
    WS = 82
    NOT_WS = 83
    WC = 84
    NOT_WC = 85
    DIG = 86
    NOT_DIG = 87
    END = 99


QUANTIFIERS = frozenset(
    {PatCode.REP0M, PatCode.REP1M, PatCode.REP01, PatCode.REP_COUNT}
)

_WITH_PAYLOAD = frozenset({PatCode.CCLASS, PatCode.NOT_CCLASS, PatCode.LIT})

_ESCAPE_CLASSES = {
    "s": PatCode.WS,
    "S": PatCode.NOT_WS,
    "w": PatCode.WC,
    "W": PatCode.NOT_WC,
    "d": PatCode.DIG,
    "D": PatCode.NOT_DIG,
}

_C_ESCAPES = {"n": "\n", "t": "\t", "f": "\f"}

_SINGLE_SLOT = {
    ".": PatCode.WILD,
    "*": PatCode.REP0M,
    "+": PatCode.REP1M,
    "?": PatCode.REP01,
}

_UNSUPPORTED = {
    "|": "pat compile_pattern or | not yet implemented.",
    "{": "pat compile_pattern repeat counts {m,n} not yet implemented.",
    "}": "pat compile_pattern repeat counts {m,n} not yet implemented.",
    "(": "pat compile_pattern grouping via () not yet implemented.",
    ")": "pat compile_pattern grouping via () not yet implemented.",
}


@dataclass(frozen=True)
class CompiledPattern:
    """A compiled pattern: the original source and the item buffer."""

    source: str
    codes: tuple[int, ...]

    def item_length(self, index: int) -> int:
        """Number of slots taken by the item starting at *index*."""
        code = self.codes[index]
        if code in _WITH_PAYLOAD:
            return 2 + self.codes[index + 1]
        if code == PatCode.REP_COUNT:
            return 2
        return 1

    def next_index(self, index: int) -> int:
        """Index of the item following the one at *index*."""
        return index + self.item_length(index)


@dataclass
class _Item:
    code: PatCode
    chars: list[int] = field(default_factory=list)

    def slots(self) -> list[int]:
        if self.code in _WITH_PAYLOAD:
            return [int(self.code), len(self.chars), *self.chars]
        return [int(self.code)]


def expand_range(raw: str) -> str:
    """Return *raw* with every range inside a character class spelled out.

    ``[abc-f]`` becomes ``[abcdef]``. Escaped characters are copied with
    their backslash untouched.
    """
    out: list[str] = []
    in_class = False
    pos = 0
    while pos < len(raw):
        ch = raw[pos]
        if ch == "\\":
            out.append(raw[pos:pos + 2])
            pos += 2
            continue
        if in_class and ch == "-":
            low = ord(raw[pos - 1]) + 1
            high = ord(raw[pos + 1]) if pos + 1 < len(raw) else 0
            out.extend(chr(code) for code in range(low, high))
            pos += 1
            continue
        if in_class and ch == "]":
            in_class = False
        if not in_class and ch == "[":
            in_class = True
        out.append(ch)
        pos += 1
    return "".join(out)


def _parse(text: str) -> list[_Item]:
    """First pass: turn the expanded source into items in source order."""
    items: list[_Item] = []
    in_class = False
    pos = 0
    last = len(text) - 1
    while pos < len(text):
        ch = text[pos]

        if in_class:
            if ch == "]":
                items.append(_Item(PatCode.END_OF))
                in_class = False
            else:
                if ch == "\\":
                    pos += 1
                    abort_if(
                        pos > last,
                        "pat compile_pattern backslash escape can not be the last "
                        "character of a search string",
                    )
                    ch = _C_ESCAPES.get(text[pos], text[pos])
                items[-1].chars.append(ord(ch))
            pos += 1
            continue

        if ch == "^" and pos == 0:
            items.append(_Item(PatCode.BOL))
            pos += 1
        elif ch == "$" and pos == last:
            items.append(_Item(PatCode.EOL))
            pos += 1
        elif ch == "[":
            negated = text[pos + 1:pos + 2] == "^"
            first = text[pos + 2:pos + 3] if negated else text[pos + 1:pos + 2]
            abort_if(
                first == "]",
                "pat compile_pattern empty character class found in source string",
            )
            in_class = True
            items.append(_Item(PatCode.NOT_CCLASS if negated else PatCode.CCLASS))
            pos += 2 if negated else 1
        elif ch == "\\":
            abort_if(
                pos == last,
                "pat compile_pattern backslash escape can not be the last "
                "character of a search string",
            )
            escaped = text[pos + 1]
            if escaped in _ESCAPE_CLASSES:
                items.append(_Item(_ESCAPE_CLASSES[escaped]))
            else:
                literal = _C_ESCAPES.get(escaped, escaped)
                items.append(_Item(PatCode.LIT, [ord(literal)]))
            pos += 2
        elif ch == "]":
            abort_if(
                True,
                "pat compile_pattern error parsing pattern unexpected close class ]",
            )
        elif ch in _SINGLE_SLOT:
            items.append(_Item(_SINGLE_SLOT[ch]))
            pos += 1
        elif ch in _UNSUPPORTED:
            abort_if(True, _UNSUPPORTED[ch])
        else:
            items.append(_Item(PatCode.LIT, [ord(ch)]))
            pos += 1
    return items


def _reorganize(items: list[_Item]) -> list[_Item]:
    """Second pass: put quantifiers ahead of their item and drop class ends."""
    result: list[_Item] = []
    index = 0
    while index < len(items):
        current = items[index]
        abort_if(
            current.code in QUANTIFIERS,
            "pat reorganize_pattern_buffer optimize error, should not see a "
            "quantifier here.",
        )
        following = index + 1
        if following < len(items) and items[following].code == PatCode.END_OF:
            following += 1
        quantified = (
            following < len(items) and items[following].code in QUANTIFIERS
        )
        if quantified:
            result.append(items[following])
            following += 1
        result.append(current)
        index = following
    return result


def compile_pattern(source: str) -> CompiledPattern:
    """Compile a match string into a CompiledPattern.

    Raises AbortError for constructs the dialect rejects: empty classes,
    a stray ``]``, a trailing backslash, misplaced quantifiers and the
    unimplemented ``|``, ``{}`` and ``()`` operators.
    """
    items = _reorganize(_parse(expand_range(source)))
    slots = [slot for item in items for slot in item.slots()]
    slots.append(int(PatCode.END))
    return CompiledPattern(source=source, codes=tuple(slots))


def pattern_source(pat: CompiledPattern | None) -> str:
    """Return the source string a pattern was compiled from."""
    if not isinstance(pat, CompiledPattern):
        return "not a valid pattern"
    return pat.source


def validate_compiled_pattern(
    pat: CompiledPattern | None, expected: Sequence[int]
) -> bool:
    """Check that the pattern's item buffer starts with *expected*.

    The buffer is treated as followed by a single zero slot after its END.
    """
    if not isinstance(pat, CompiledPattern):
        return False
    buffer = (*pat.codes, 0)
    if len(expected) > len(buffer):
        return False
    return all(have == want for have, want in zip(buffer, expected))