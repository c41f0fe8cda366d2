"""Text views of compiled patterns and conversion of file name globs."""

from __future__ import annotations

from .errors import abort_if
from .pattern import QUANTIFIERS, CompiledPattern, PatCode

_INVALID = "not a valid pattern"

_DISPLAY = {
    PatCode.BEG: ">>>BEGIN PATTERN",
    PatCode.END: "<<<END PATTERN",
    PatCode.FF: "\\f FORM FEED",
    PatCode.LF: "\\n LINE FEED",
    PatCode.LIT: "   LITERAL",
    PatCode.TAB: "\\t TAB",
    PatCode.BOL: "^  BOL",
    PatCode.CCLASS: "[  BEGIN CLASS",
    PatCode.DIG: "\\d DIGIT",
    PatCode.END_OF: "]  END CLASS",
    PatCode.END_GROUP: ")  END GROUP",
    PatCode.EOL: "$  EOL",
    PatCode.GROUP: "(  GROUP",
    PatCode.NOT_CCLASS: "[^ BEGIN NEGATED CLASS",
    PatCode.NOT_DIG: "\\D NOT DIGIT",
    PatCode.NOT_WC: "\\D NOT WORD CHARACTER",
    PatCode.NOT_WS: "\\S NOT WHITESPACE",
    PatCode.OR: "|  OR",
    PatCode.REP01: "?  ZERO OR ONE",
    PatCode.REP0M: "*  REPEAT ZERO OR MORE",
    PatCode.REP1M: "+  REPEAT ONE OR MORE",
    PatCode.REP_COUNT: "{  REPEAT COUNT",
    PatCode.END_REP: "}  END REPEAT COUNT",
    PatCode.WC: "\\w WORD CHARACTER",
    PatCode.WILD: ".  WILD",
    PatCode.WS: "\\s WHITESPACE",
}

_PLAIN_LINE = frozenset({
    PatCode.BEG, PatCode.BOL, PatCode.EOL, PatCode.WILD, PatCode.END,
    PatCode.END_OF, PatCode.DIG, PatCode.NOT_DIG, PatCode.WC,
    PatCode.NOT_WC, PatCode.WS, PatCode.NOT_WS, PatCode.REP0M,
    PatCode.REP1M, PatCode.REP01,
})

_WITH_CHARS = frozenset({PatCode.CCLASS, PatCode.NOT_CCLASS, PatCode.LIT})

_SIMPLE_TEXT = {
    PatCode.BOL: "^",
    PatCode.EOL: "$",
    PatCode.WILD: ".",
    PatCode.WS: "\\s",
    PatCode.NOT_WS: "\\S",
    PatCode.WC: "\\w",
    PatCode.NOT_WC: "\\W",
    PatCode.DIG: "\\d",
    PatCode.NOT_DIG: "\\D",
    PatCode.LF: "\\n",
    PatCode.TAB: "\\t",
    PatCode.FF: "\\f",
}

_QUANTIFIER_TEXT = {
    PatCode.REP0M: "*",
    PatCode.REP1M: "+",
    PatCode.REP01: "?",
}

_C_ESCAPE_TEXT = {"\n": "\\n", "\t": "\\t", "\f": "\\f"}

_LITERAL_META = frozenset(".*+?[]\\|(){}^$")
_CLASS_META = frozenset("]\\-^[")


def _display(code: int) -> str:
    try:
        return _DISPLAY[PatCode(code)]
    except ValueError:
        return "!!!ERROR!!!"


def _escape(char: str, meta: frozenset[str]) -> str:
    if char in _C_ESCAPE_TEXT:
        return _C_ESCAPE_TEXT[char]
    if char in meta:
        return "\\" + char
    return char


def _item_text(pat: CompiledPattern, index: int) -> str:
    code = pat.codes[index]
    if code in _SIMPLE_TEXT:
        return _SIMPLE_TEXT[PatCode(code)]
    if code in _WITH_CHARS:
        count = pat.codes[index + 1]
        chars = [chr(c) for c in pat.codes[index + 2:index + 2 + count]]
        if code == PatCode.LIT:
            return "".join(_escape(ch, _LITERAL_META) for ch in chars)
        opener = "[" if code == PatCode.CCLASS else "[^"
        body = "".join(_escape(ch, _CLASS_META) for ch in chars)
        return f"{opener}{body}]"
    abort_if(True, f"pat decompile_pattern cannot render item: {code} {_display(code)}")
    return ""


def decompile_pattern(pat: CompiledPattern | None) -> str:
    """Rebuild a match string from the item buffer of a compiled pattern.

    The result may differ from the stored source (ranges come back expanded,
    escapes are normalised) but compiles to the same buffer.
    """
    if not isinstance(pat, CompiledPattern):
        return _INVALID
    parts: list[str] = []
    pending: str | None = None
    index = 0
    while pat.codes[index] != PatCode.END:
        code = pat.codes[index]
        if code in QUANTIFIERS:
            abort_if(
                code not in _QUANTIFIER_TEXT,
                f"pat decompile_pattern cannot render item: {code} {_display(code)}",
            )
            pending = _QUANTIFIER_TEXT[PatCode(code)]
        else:
            parts.append(_item_text(pat, index))
            if pending is not None:
                parts.append(pending)
                pending = None
        index = pat.next_index(index)
    return "".join(parts)


def _char_text(code: int) -> str:
    char = chr(code)
    if char >= " ":
        return char
    if char in _C_ESCAPE_TEXT:
        return _C_ESCAPE_TEXT[char]
    return f"?? {code:x} ??"


def format_compiled_pattern(pat: CompiledPattern) -> str:
    """Return a readable listing of a compiled pattern, one item per line."""
    lines = ["compiled pattern: ", f"{0:3d} {_display(PatCode.BEG)}"]
    index = 0
    while True:
        code = pat.codes[index]
        line = f"{index + 1:3d} {_display(code)}"
        if code in _WITH_CHARS:
            count = pat.codes[index + 1]
            chars = "".join(
                _char_text(c) for c in pat.codes[index + 2:index + 2 + count]
            )
            line += f" {count} {chars}"
        else:
            abort_if(
                code not in _PLAIN_LINE,
                "pat print_compiled_pattern error detected in compiled pattern buffer",
            )
        lines.append(line)
        if code == PatCode.END:
            break
        index = pat.next_index(index)
    return "\n".join(lines) + "\n"


def print_compiled_pattern(pat: CompiledPattern) -> None:
    """Print the listing from format_compiled_pattern on standard output."""
    print(format_compiled_pattern(pat), end="")


def convert_glob(glob: str | None) -> str:
    """Convert a file name glob into a match string for compile_pattern.

    ``*`` becomes ``.*``, ``?`` becomes ``.``, ``.`` is escaped and
    ``[...]`` groups pass through unchanged. The result is anchored at both
    ends. An empty or missing glob matches names not starting with a period.
    """
    if not glob:
        return "^[^.]*$"
    out = ["^"]
    pos = 0
    while pos < len(glob):
        ch = glob[pos]
        if ch == "*":
            out.append(".*")
            pos += 1
        elif ch == "?":
            out.append(".")
            pos += 1
        elif ch == ".":
            out.append("\\.")
            pos += 1
        elif ch == "[":
            while pos < len(glob) and glob[pos] != "]":
                if glob[pos] == "\\":
                    abort_if(
                        pos + 1 >= len(glob),
                        "pat convert_glob improperly constructed [] in glob string",
                    )
                    out.append(glob[pos])
                    pos += 1
                out.append(glob[pos])
                pos += 1
        else:
            out.append(ch)
            pos += 1
    out.append("$")
    return "".join(out)