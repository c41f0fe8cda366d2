# patkit

A small library with no dependencies. It has three parts:

- **Patterns** (`patkit.pattern`, `patkit.matcher`, `patkit.patterntext`): a compact subset of regular expressions. It also converts file name globs into that pattern language.
- **Ordered key:value store** (`patkit.kvstore`): keys are kept sorted by a three-way comparison function that you supply.
- **Allocation tracking** (`patkit.alloctrace`): it hands out byte blocks, records where each one was requested, and reports blocks that were never freed and frees of blocks it does not know.

Fatal conditions raise `patkit.errors.AbortError`, a `RuntimeError` subclass. Its `message` attribute holds the reason.

## Installation

```
pip install .
```

## Patterns

```python
from patkit.pattern import compile_pattern, pattern_source
from patkit.matcher import match, glob_match
from patkit.patterntext import convert_glob, decompile_pattern, print_compiled_pattern

pat = compile_pattern("^[a-c]x+y?$")
match("bxxx", pat)            # True
pattern_source(pat)           # "^[a-c]x+y?$"
print_compiled_pattern(pat)   # one line per item on standard output

glob = compile_pattern(convert_glob("*.txt"))   # "^.*\\.txt$"
glob_match("notes.txt", glob)    # True
glob_match(".hidden.txt", glob)  # False
```

### The pattern language

| Token | Meaning |
|-------|---------|
| `.` | any single character except newline |
| `*` `+` `?` | zero or more, one or more, or zero or one of the item just before it |
| `^` | start of line, but only as the first character; elsewhere it is a literal |
| `$` | end of line, but only as the last character; elsewhere it is a literal |
| `[...]` | any one character in the class |
| `[^...]` | any one character not in the class |
| `a-f` | inside a class, a range of characters |
| `\s \S \w \W \d \D` | whitespace, word characters (letters, digits, `_`) and digits, each with its negation |
| `\n \t \f` | newline, tab and form feed, both in and out of classes |
| `\x` | any other escaped character is taken literally |

Some rules about anchors and quantifiers:

- A quantifier applies to the single item before it.
- `$` also matches a newline, but only when that newline is the last character of the text.

`compile_pattern` raises `AbortError` for:

- an empty class;
- a stray `]`;
- a trailing backslash;
- grouping `()`, alternation `|` and counted repeats `{m,n}`, none of which are supported.

### Compiled patterns

`compile_pattern` returns a frozen `CompiledPattern`. It has two fields:

- `source`: the original string.
- `codes`: a tuple of integer slots whose item codes are the `PatCode` enum.

Quantifier slots come before the item they repeat, and the buffer ends with `PatCode.END`.

Other functions in `patkit.pattern`:

- `expand_range(raw)` spells out class ranges. For example, `[a-d]` becomes `[abcd]`.
- `validate_compiled_pattern(pat, expected)` checks that `pat.codes` begins with the given slots.

### Turning compiled patterns back into text

`patkit.patterntext` provides these functions:

- `decompile_pattern(pat)` rebuilds a match string from the buffer. Ranges come back expanded and escapes are normalised.
- `format_compiled_pattern(pat)` returns the readable listing as a string.
- `print_compiled_pattern(pat)` prints that listing.
- `convert_glob(glob)` turns a glob into a match string, anchored at both ends:
  - `*` becomes `.*` and `?` becomes `.`;
  - `.` is escaped;
  - `[...]` groups pass through unchanged;
  - an empty glob gives `^[^.]*$`.

### Matching

- `match(text, pat)` is true if the pattern matches starting at any position in `text`. An empty text never matches.
- `glob_match(text, pat)` must match from the first character. A name starting with `.` matches only if the pattern's first literal, after any `^`, is a period. It does not check by itself that the whole name was consumed. Patterns from `convert_glob` end with `$`, which does.

## Key:value store

```python
from patkit.kvstore import KeyValueStore

store = KeyValueStore(lambda a, b: (a > b) - (a < b))
store.put("bravo", 1)   # returns 1
store.put("alpha", 0)
store.get("alpha")      # 0
store.get("zulu")       # None
store.keys()            # ["alpha", "bravo"]
store.values()          # [0, 1]
len(store)              # 2
store.delete("bravo")   # True
store.reset()           # 1, the number of pairs removed
store.is_empty()        # True
```

Putting an existing key replaces its value. Keys may not be `None`: `get`, `put` and `delete` raise `AbortError` for a `None` key.

## Allocation tracking

```python
import io
from patkit.alloctrace import AllocationTracker, TraceFlags

log = io.StringIO()
with AllocationTracker(100, TraceFlags.FULL, log, "user") as tracker:
    block = tracker.allocate(16, "demo.py", 3)        # a bytearray of 16 bytes
    zeroed = tracker.allocate_zeroed(4, 8, "demo.py", 4)
    tracker.free(block, "demo.py", 5)                 # True
    tracker.free(block, "demo.py", 6)                 # False, reported as a duplicate free
print(log.getvalue())   # the termination report lists `zeroed` as leaked
```

### What gets reported

`TraceFlags` chooses what is written to the report stream, which is standard error when none is given:

- `ALLOCS` and `FREES` trace each call.
- `DUP_FREES` and `LEAKS` report errors.
- `TRACE`, `ERRORS` and `FULL` combine them.
- `SILENT` reports nothing.

### Terminating

`terminate()` writes the leak report and summary, then returns the number of leaked blocks. Leaving a `with` block calls it. After termination, the tracker stops tracking:

- `allocate` returns untracked blocks;
- `free` returns `False`.

### Errors and status

Running out of table entries raises `AbortError`. So does calling `terminate()` twice.

Three properties show the tracker's state:

- `active`;
- `odometer`, the number of tracked allocations so far;
- `outstanding`, the number of tracked blocks not yet freed.

### What it does not track

The tracker only tracks blocks it hands out itself. It does not hook into or measure Python's own memory management.

## Running the tests

```
pip install ".[test]"
pytest
```