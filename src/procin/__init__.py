"""procin — typed reading of whitespace-delimited input."""

from .config import ReaderConfig
from .context import InputContext, stdin_context
from .environment import Environment
from .errors import (
    ConfigurationError,
    ExhaustedError,
    KindError,
    KindSyntaxError,
    MalformedError,
    ProcinError,
    ReadError,
    UnboundNameError,
    UnderflowError,
    UnknownKindError,
)
from .grammar import parse_declarations, parse_kind
from .inputs import Binding, Bindings, Input, input_values
from .model import (
    BOOL,
    BYTES,
    CHAR,
    CHARS,
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    ISIZE,
    ISIZE1,
    MARKER,
    STRING,
    U8,
    U16,
    U32,
    U64,
    U128,
    USIZE,
    USIZE1,
    Marker,
    Readable,
    SeqKind,
    TupleKind,
    as_kind,
    read_value,
)
from .output import flush_output, output, outputln
from .source import AutoSource, LineSource, OnceSource, Source
from .typedef import MemberDef, TypeDef, define_aggregate, kind_field, readable

__all__ = [
    "input_values",
    "Input",
    "Binding",
    "Bindings",
    "read_value",
    "as_kind",
    "Readable",
    "TupleKind",
    "SeqKind",
    "Marker",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "USIZE",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "ISIZE",
    "F32",
    "F64",
    "BOOL",
    "CHAR",
    "STRING",
    "CHARS",
    "BYTES",
    "USIZE1",
    "ISIZE1",
    "MARKER",
    "Source",
    "OnceSource",
    "LineSource",
    "AutoSource",
    "InputContext",
    "stdin_context",
    "ReaderConfig",
    "Environment",
    "TypeDef",
    "MemberDef",
    "readable",
    "kind_field",
    "define_aggregate",
    "parse_kind",
    "parse_declarations",
    "output",
    "outputln",
    "flush_output",
    "ProcinError",
    "ConfigurationError",
    "ReadError",
    "ExhaustedError",
    "MalformedError",
    "UnderflowError",
    "KindError",
    "KindSyntaxError",
    "UnknownKindError",
    "UnboundNameError",
]
