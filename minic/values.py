"""IR values: constants, globals, parameters, locals and storage locations."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Tuple

from .types import IR_GLOBAL_VARNAME_PREFIX, Type


class _Value:
    """Common state of every IR value."""

    def __init__(self, type: Type) -> None:
        self.type = type
        self.name = ""
        self._ir_name = ""
        self.reg_id = -1
        self.load_reg_id = -1

    @property
    def ir_name(self) -> str:
        return self._ir_name

    @ir_name.setter
    def ir_name(self, value: str) -> None:
        self._ir_name = value

    def memory_addr(self) -> Optional[Tuple[int, int]]:
        """Base register and offset when the value lives in memory, else None."""
        return None


class _StackSlot(_Value):
    """A value that may be given a base-register + offset address."""

    def __init__(self, type: Type) -> None:
        super().__init__(type)
        self._base_reg_no = -1
        self._offset = 0

    def memory_addr(self) -> Optional[Tuple[int, int]]:
        if self._base_reg_no == -1:
            return None
        return self._base_reg_no, self._offset

    def set_memory_addr(self, reg_id: int, offset: int) -> None:
        self._base_reg_no = reg_id
        self._offset = offset


class Constant(_Value):
    """A value that cannot change at run time."""


class LinkageType(IntEnum):
    EXTERNAL = 0
    INTERNAL = 1


class VisibilityType(IntEnum):
    DEFAULT = 0
    HIDDEN = 1
    PROTECTED = 2


class GlobalValue(Constant):
    """A globally visible entity such as a function or a global variable."""

    def __init__(self, type: Type, name: str) -> None:
        super().__init__(type)
        self.name = name
        self._ir_name = IR_GLOBAL_VARNAME_PREFIX + name
        self.linkage = LinkageType.EXTERNAL
        self.visibility = VisibilityType.DEFAULT
        self.alignment = 4

    @property
    def ir_name(self) -> str:
        return self._ir_name

    def is_function(self) -> bool:
        return False

    def is_global_variable(self) -> bool:
        return False

    @property
    def declare_ir_name(self) -> str:
        if self.is_global_variable():
            return self._ir_name + " = 0"
        return self._ir_name


class ConstInt(Constant):
    """A 32-bit signed integer constant."""

    def __init__(self, value: int, type: Type) -> None:
        super().__init__(type)
        self.value = ((value + 2**31) % 2**32) - 2**31
        self.name = str(self.value)

    @property
    def ir_name(self) -> str:
        return self.name


class FormalParam(_StackSlot):
    """A function's formal parameter."""

    def __init__(self, type: Type, name: str) -> None:
        super().__init__(type)
        self.name = name

    def memory_addr(self) -> Optional[Tuple[int, int]]:
        return super().memory_addr()

    def set_memory_addr(self, reg_id: int, offset: int) -> None:
        super().set_memory_addr(reg_id, offset)


class LocalVariable(_StackSlot):
    """A variable declared inside a function, at a given scope level."""

    def __init__(self, type: Type, name: str, scope_level: int) -> None:
        super().__init__(type)
        self.name = name
        self._scope_level = scope_level

    @property
    def scope_level(self) -> int:
        return self._scope_level

    def memory_addr(self) -> Optional[Tuple[int, int]]:
        return super().memory_addr()

    def set_memory_addr(self, reg_id: int, offset: int) -> None:
        super().set_memory_addr(reg_id, offset)


class MemVariable(_StackSlot):
    """A value that always lives in memory."""

    def __init__(self, type: Type) -> None:
        super().__init__(type)

    def memory_addr(self) -> Tuple[int, int]:
        return self._base_reg_no, self._offset

    def set_memory_addr(self, reg_id: int, offset: int) -> None:
        super().set_memory_addr(reg_id, offset)


class RegVariable(_Value):
    """A value bound to a fixed machine register."""

    def __init__(self, type: Type, name: str, reg_id: int) -> None:
        super().__init__(type)
        self.name = name
        self.reg_id = reg_id

    @property
    def ir_name(self) -> str:
        return self.name


class GlobalVariable(GlobalValue):
    """A global variable, addressed by its symbol name."""

    def __init__(self, type: Type, name: str) -> None:
        super().__init__(type, name)
        self.alignment = 4
        self._in_bss_section = True

    def is_global_variable(self) -> bool:
        return True

    def is_in_bss_section(self) -> bool:
        """True when uninitialised or initialised to all zeros."""
        return self._in_bss_section

    @property
    def scope_level(self) -> int:
        return 0