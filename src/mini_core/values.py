"""Value types for MINI documents.

Every value kind knows how to parse its own source text and how to format
itself back.  ``format(parse(x)) == x`` holds for canonical spellings; the
integer style recorded at parse time decides the radix used on write.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, Iterator, Union

from .errors import ErrorKind, MiniError
from .lexical import is_integer_decimal, remove_all


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# nested arrays are parsed recursively, one level per bracket pair
MAX_ARRAY_DEPTH = 64

_HEX_RE = re.compile(r"[+-]?(0[xX])?[0-9A-Fa-f]+")
_BIN_RE = re.compile(r"[+-]?[01]+")


class ValueKind(Enum):
    String = auto()
    Int = auto()
    Bool = auto()
    Float = auto()
    Array = auto()


class IntStyle(Enum):
    Decimal = auto()
    Hexadecimal = auto()
    Binary = auto()


# ---------------------------------------------------------------------------
# String
# ---------------------------------------------------------------------------

_ESCAPES = {'"': '"', "n": "\n", "t": "\t", "r": "\r", "\\": "\\"}
_REVERSE_ESCAPES = {'"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r", "\\": "\\\\"}


@dataclass
class StringValue:
    value: str = ""
    comments: list[str] = field(default_factory=list)

    kind: ClassVar[ValueKind] = ValueKind.String

    @classmethod
    def parse(cls, raw: str) -> StringValue:
        """Parse the text between the quotes, expanding escape sequences."""
        out: list[str] = []
        i = 0
        while i < len(raw):
            c = raw[i]
            if c == "\\":
                if i + 1 >= len(raw):
                    raise MiniError(ErrorKind.BAD_ESCAPE_SEQUENCE, "'\\' at end of string")
                nxt = raw[i + 1]
                if nxt not in _ESCAPES:
                    raise MiniError(
                        ErrorKind.UNKNOWN_ESCAPE_SEQUENCE,
                        f"unknown escape sequence '\\{nxt}'",
                    )
                out.append(_ESCAPES[nxt])
                i += 2
                continue
            if c == '"':
                raise MiniError(ErrorKind.UNESCAPED_STRING_VALUE, "unescaped '\"' in string")
            out.append(c)
            i += 1
        return cls("".join(out))

    def format(self) -> str:
        return '"' + "".join(_REVERSE_ESCAPES.get(c, c) for c in self.value) + '"'

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Int
# ---------------------------------------------------------------------------

@dataclass
class IntValue:
    value: int = 0
    style: IntStyle = IntStyle.Decimal
    comments: list[str] = field(default_factory=list)

    kind: ClassVar[ValueKind] = ValueKind.Int

    @classmethod
    def parse(cls, raw: str) -> IntValue:
        """Parse ``123``, ``1_000``, ``1Ah`` (hexadecimal) or ``101b`` (binary)."""
        text = remove_all(raw, "_")
        if not text:
            raise MiniError(ErrorKind.INTEGER_VALUE_INVALID, "empty integer value")

        suffix = text[-1]
        if suffix == "h":
            digits, style, base, pattern = text[:-1], IntStyle.Hexadecimal, 16, _HEX_RE
        elif suffix == "b":
            digits, style, base, pattern = text[:-1], IntStyle.Binary, 2, _BIN_RE
        else:
            if not is_integer_decimal(text):
                raise MiniError(ErrorKind.INTEGER_VALUE_INVALID, f"invalid decimal integer: {raw}")
            digits, style, base, pattern = text, IntStyle.Decimal, 10, None

        if pattern is not None and not pattern.fullmatch(digits):
            raise MiniError(ErrorKind.INTEGER_VALUE_INVALID, f"invalid integer: {raw}")

        value = int(digits, base)
        if not INT64_MIN <= value <= INT64_MAX:
            raise MiniError(ErrorKind.INTEGER_VALUE_OUT_OF_RANGE, f"integer out of range: {raw}")
        return cls(value, style)

    def format(self) -> str:
        v = self.value
        if not INT64_MIN <= v <= INT64_MAX:
            raise MiniError(ErrorKind.INTEGER_VALUE_OUT_OF_RANGE, f"integer out of range: {v}")
        sign = "-" if v < 0 else ""
        if self.style is IntStyle.Decimal:
            return str(v)
        if self.style is IntStyle.Hexadecimal:
            return f"{sign}{abs(v):x}h"
        if self.style is IntStyle.Binary:
            # zero formats as "0b", never an empty mantissa
            return f"{sign}{abs(v):b}b"
        raise MiniError(ErrorKind.INTEGER_STYLE_INVALID, f"unknown integer style: {self.style!r}")

    def __str__(self) -> str:
        return str(self.value)


# ---------------------------------------------------------------------------
# Bool
# ---------------------------------------------------------------------------

@dataclass
class BoolValue:
    value: bool = False
    comments: list[str] = field(default_factory=list)

    kind: ClassVar[ValueKind] = ValueKind.Bool

    @classmethod
    def parse(cls, raw: str) -> BoolValue:
        if raw == "true":
            return cls(True)
        if raw == "false":
            return cls(False)
        raise MiniError(ErrorKind.BOOLEAN_VALUE_INVALID, f"invalid boolean: {raw}")

    def format(self) -> str:
        return "true" if self.value else "false"

    def __str__(self) -> str:
        return self.format()


# ---------------------------------------------------------------------------
# Float
# ---------------------------------------------------------------------------

@dataclass
class FloatValue:
    value: float = 0.0
    comments: list[str] = field(default_factory=list)

    kind: ClassVar[ValueKind] = ValueKind.Float

    @classmethod
    def parse(cls, raw: str) -> FloatValue:
        """Parse ``3.14f``; the trailing ``f`` is optional here."""
        text = raw[:-1] if raw.endswith("f") else raw
        try:
            return cls(float(text))
        except ValueError:
            raise MiniError(ErrorKind.FLOAT_VALUE_INVALID, f"invalid float: {raw}") from None

    def format(self) -> str:
        # repr() is the shortest text that reads back to the same double
        return repr(float(self.value)) + "f"

    def __str__(self) -> str:
        return repr(float(self.value))


# ---------------------------------------------------------------------------
# Array
# ---------------------------------------------------------------------------

@dataclass
class ArrayValue:
    value: list[Value] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)

    kind: ClassVar[ValueKind] = ValueKind.Array

    @classmethod
    def parse(cls, raw: str) -> ArrayValue:
        if len(raw) < 2 or raw[0] != "[" or raw[-1] != "]":
            raise MiniError(ErrorKind.ARRAY_NOT_ENCLOSED, f"expected '[...]': {raw}")

        items = [parse_value(elem) for elem in split_array_elements(raw)]
        check_homogeneous(items)
        return cls(items)

    def format(self) -> str:
        check_homogeneous(self.value)
        return "[" + ", ".join(v.format() for v in self.value) + "]"

    def get(self, index: int) -> Value | None:
        """Element at *index*, or ``None`` when out of range."""
        if 0 <= index < len(self.value):
            return self.value[index]
        return None

    def __len__(self) -> int:
        return len(self.value)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.value)

    def __getitem__(self, index: int) -> Value:
        return self.value[index]

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.value) + "]"


Value = Union[StringValue, IntValue, BoolValue, FloatValue, ArrayValue]


def split_array_elements(raw: str) -> list[str]:
    """Split ``[a, b, [c, d], "e,f"]`` into its top-level element texts.

    Whitespace outside strings is dropped; inside strings a backslash and
    the character after it are kept so the element parser can unescape them.
    """
    elements: list[str] = []
    current: list[str] = []
    depth = 0
    in_string = False
    last = len(raw) - 1
    i = 0

    while i <= last:
        c = raw[i]
        if in_string:
            current.append(c)
            if c == "\\" and i < last:
                current.append(raw[i + 1])
                i += 1
            elif c == '"':
                in_string = False
        elif c == '"':
            in_string = True
            current.append(c)
        elif c == "[":
            depth += 1
            if depth > MAX_ARRAY_DEPTH:
                raise MiniError(
                    ErrorKind.FORMAT_ERROR,
                    f"array nested deeper than {MAX_ARRAY_DEPTH} levels",
                )
            if depth > 1:
                current.append(c)
        elif c == "]":
            depth -= 1
            if depth < 0 or (depth == 0 and i != last):
                raise MiniError(ErrorKind.ARRAY_BRACKETS_UNBALANCED, f"unbalanced brackets: {raw}")
            if depth >= 1:
                current.append(c)
        elif c == "," and depth == 1:
            elements.append("".join(current))
            current = []
        elif c not in " \t":
            current.append(c)
        i += 1

    if depth != 0:
        raise MiniError(ErrorKind.ARRAY_BRACKETS_UNBALANCED, f"unbalanced brackets: {raw}")
    if current:
        elements.append("".join(current))
    return elements


def check_homogeneous(items: list[Value]) -> None:
    """Raise unless every item has the same kind as the first."""
    if not items:
        return
    kind = items[0].kind
    for item in items[1:]:
        if item.kind is not kind:
            raise MiniError(
                ErrorKind.ARRAY_DATA_TYPE_INCONSISTENCY,
                f"array mixes {kind.name} and {item.kind.name}",
            )


# ---------------------------------------------------------------------------
# Generic dispatch
# ---------------------------------------------------------------------------

def parse_value(raw: str) -> Value:
    """Pick a value kind from the shape of *raw* and parse it.

    - ``"..."``         → StringValue
    - ``true``/``false`` → BoolValue
    - ``...f``          → FloatValue
    - ``[...]``         → ArrayValue
    - anything else     → IntValue
    """
    if not raw:
        raise MiniError(ErrorKind.VALUE_EMPTY, "empty value")

    if raw[0] == '"':
        if len(raw) < 2 or raw[-1] != '"':
            raise MiniError(ErrorKind.MISSING_QUOTE, f"expected closing '\"': {raw}")
        return StringValue.parse(raw[1:-1])
    if raw in ("true", "false"):
        return BoolValue.parse(raw)

    last = raw[-1]
    if last == "f":
        return FloatValue.parse(raw)
    if last == "]":
        return ArrayValue.parse(raw)
    return IntValue.parse(raw)


def format_value(value: Value) -> str:
    match value:
        case StringValue() | IntValue() | BoolValue() | FloatValue() | ArrayValue():
            return value.format()
    raise MiniError(ErrorKind.INVALID_DATA_TYPE, f"not a MINI value: {type(value).__name__}")
