"""IR type hierarchy, IR naming constants and lexer/parser attribute records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum

IR_GLOBAL_VARNAME_PREFIX = "@"
IR_LOCAL_VARNAME_PREFIX = "%l"
IR_TEMP_VARNAME_PREFIX = "%t"
IR_MEM_VARNAME_PREFIX = "%m"
IR_LABEL_PREFIX = ".L"

IR_KEYWORD_DECLARE = "declare"
IR_KEYWORD_DEFINE = "define"
IR_KEYWORD_ADD_I = "add"
IR_KEYWORD_SUB_I = "sub"


class TypeID(IntEnum):
    """Identifies the kind of an IR type."""

    FLOAT = 0
    VOID = 1
    LABEL = 2
    TOKEN = 3
    INTEGER = 4
    FUNCTION = 5
    POINTER = 6
    ARRAY = 7


class Type(ABC):
    """Base of all IR types; instances are shared and compared by identity."""

    def __init__(self, type_id: TypeID = TypeID.VOID) -> None:
        self.type_id = TypeID(type_id)

    def is_void_type(self) -> bool:
        return self.type_id is TypeID.VOID

    def is_label_type(self) -> bool:
        return self.type_id is TypeID.LABEL

    def is_function_type(self) -> bool:
        return self.type_id is TypeID.FUNCTION

    def is_integer_type(self) -> bool:
        return self.type_id is TypeID.INTEGER

    def is_float_type(self) -> bool:
        return self.type_id is TypeID.FLOAT

    def is_int1_byte(self) -> bool:
        """True for the one-bit boolean integer type."""
        return False

    def is_int32_type(self) -> bool:
        """True for the 32-bit int type."""
        return False

    def is_pointer_type(self) -> bool:
        return self.type_id is TypeID.POINTER

    def is_array_type(self) -> bool:
        return self.type_id is TypeID.ARRAY

    @property
    def size(self) -> int:
        """Bytes occupied in memory, or -1 when the type has no size."""
        return -1

    @abstractmethod
    def __str__(self) -> str:
        """The type as written in the IR."""


class BasicType(IntEnum):
    """Basic types named in the source language."""

    NONE = 0
    VOID = 1
    INT = 2
    BOOL = 3
    FLOAT = 4
    MAX = 5


@dataclass
class DigitIntAttr:
    """An unsigned integer literal passed from the lexer to the parser."""

    val: int
    lineno: int


@dataclass
class DigitRealAttr:
    """A real-number literal passed from the lexer to the parser."""

    val: float
    lineno: int


@dataclass
class VarIdAttr:
    """An identifier (variable or function name) with its line."""

    id: str
    lineno: int


@dataclass
class TypeAttr:
    """A basic type keyword with its line."""

    type: BasicType
    lineno: int