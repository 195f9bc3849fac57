"""Error kinds and the exception raised by the MINI engine."""

from __future__ import annotations

from enum import Enum, auto


class ErrorKind(Enum):
    # Lookup / tree
    KEY_NOT_PRESENT = auto()
    KEY_ALREADY_PRESENT = auto()
    SECTION_NOT_PRESENT = auto()
    SECTION_ALREADY_PRESENT = auto()
    INVALID_DATA_TYPE = auto()

    # I/O
    FILE_IO_ERROR = auto()

    # Values
    FORMAT_ERROR = auto()
    ARRAY_DATA_TYPE_INCONSISTENCY = auto()
    BAD_ESCAPE_SEQUENCE = auto()
    UNKNOWN_ESCAPE_SEQUENCE = auto()
    UNESCAPED_STRING_VALUE = auto()
    VALUE_EMPTY = auto()
    INTEGER_VALUE_INVALID = auto()
    INTEGER_VALUE_OUT_OF_RANGE = auto()
    INTEGER_STYLE_INVALID = auto()
    FLOAT_VALUE_INVALID = auto()
    BOOLEAN_VALUE_INVALID = auto()
    ARRAY_NOT_ENCLOSED = auto()
    ARRAY_BRACKETS_UNBALANCED = auto()
    MISSING_QUOTE = auto()

    # Document structure
    INVALID_NAME = auto()
    SECTION_EXPECTED_CLOSING_BRACKET = auto()
    EMPTY_SECTION_NAME = auto()
    KEY_VALUE_PAIR_NOT_IN_SECTION = auto()
    EXPECTED_KEY_VALUE_PAIR = auto()
    KEY_EMPTY = auto()


class MiniError(Exception):
    """Raised for every parse, write, lookup and I/O failure.

    ``kind`` is always one of :class:`ErrorKind`; ``line`` is the 1-based
    source line for failures raised while parsing a document, else ``None``.
    """

    def __init__(self, kind: ErrorKind, message: str = "", line: int | None = None) -> None:
        self.kind = kind
        self.message = message
        self.line = line
        super().__init__(kind, message, line)

    def __str__(self) -> str:
        text = self.kind.name
        if self.message:
            text = f"{text}: {self.message}"
        if self.line is not None:
            text = f"line {self.line}: {text}"
        return text
