"""ARM32 platform facts: register names, immediate and displacement limits."""

from __future__ import annotations

from typing import List

from .types import Type
from .values import RegVariable

#: Scratch register used when an immediate or offset does not fit an instruction.
ARM32_TMP_REG_NO = 10

#: Stack pointer and frame pointer register numbers.
ARM32_SP_REG_NO = 13
ARM32_FP_REG_NO = 11

#: Link register number.
ARM32_LX_REG_NO = 14

#: Number of machine registers, r0-r15.
MAX_REG_NUM = 16

#: Number of general registers available to the allocator, r0-r10.
MAX_USABLE_REG_NUM = 11

#: Assembly names of the registers, indexed by register number.
REG_NAME = (
    "r0",
    "r1",
    "r2",
    "r3",
    "r4",
    "r5",
    "r6",
    "r7",
    "r8",
    "r9",
    "r10",
    "fp",
    "ip",
    "sp",
    "lr",
    "pc",
)

_MASK32 = 0xFFFFFFFF


def _rotate_left_two(num: int) -> int:
    """Rotate a 32-bit value left by two bits."""
    return ((num << 2) | (num >> 30)) & _MASK32


def _encodable(num: int) -> bool:
    """True if num is an 8-bit value rotated right by an even amount."""
    value = num & _MASK32
    for _ in range(16):
        if value <= 0xFF:
            return True
        value = _rotate_left_two(value)
    return False


def const_expr(num: int) -> bool:
    """True if num or its negation is a valid ARM data-processing immediate."""
    return _encodable(num) or _encodable(-num)


def is_disp(num: int) -> bool:
    """True if num is a valid load/store displacement."""
    return -4096 < num < 4096


def is_reg(name: str) -> bool:
    """True if name is the assembly name of a register."""
    return name in REG_NAME


def register_values(int_type: Type) -> List[RegVariable]:
    """One register-bound value per machine register, all of the given type."""
    return [RegVariable(int_type, name, no) for no, name in enumerate(REG_NAME)]