"""MINI Core: parser and writer for the MINI configuration format."""

from .document import Document, loads, dumps
from .fileio import load, dump
from .options import Options
from .section import Section
from .values import (
    ArrayValue,
    BoolValue,
    FloatValue,
    IntStyle,
    IntValue,
    StringValue,
    Value,
    ValueKind,
    format_value,
    parse_value,
)
from .errors import ErrorKind, MiniError

__all__ = [
    "loads",
    "dumps",
    "load",
    "dump",
    "Document",
    "Options",
    "Section",
    "Value",
    "ValueKind",
    "IntStyle",
    "StringValue",
    "IntValue",
    "BoolValue",
    "FloatValue",
    "ArrayValue",
    "parse_value",
    "format_value",
    "ErrorKind",
    "MiniError",
]
