"""ARM32 instruction sequences: emission helpers and assembly text output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, TextIO

from .platform import (
    ARM32_FP_REG_NO,
    ARM32_SP_REG_NO,
    REG_NAME,
    const_expr,
    is_disp,
)
from .values import ConstInt, GlobalVariable


@dataclass
class ArmInst:
    """One ARM32 assembly instruction, label or comment."""

    opcode: str
    result: str = ""
    arg1: str = ""
    arg2: str = ""
    cond: str = ""
    addition: str = ""
    dead: bool = False

    def replace(
        self,
        opcode: str,
        result: str = "",
        arg1: str = "",
        arg2: str = "",
        cond: str = "",
        addition: str = "",
    ) -> None:
        """Overwrite the instruction's contents in place."""
        self.opcode = opcode
        self.result = result
        self.arg1 = arg1
        self.arg2 = arg2
        self.cond = cond
        self.addition = addition

    def set_dead(self) -> None:
        """Mark the instruction so that it produces no output."""
        self.dead = True

    @property
    def is_label(self) -> bool:
        return self.result == ":"

    def render(self) -> str:
        """The instruction as assembly text; empty when dead or a placeholder."""
        if self.dead or not self.opcode:
            return ""

        text = self.opcode + self.cond
        if self.result:
            text += self.result if self.result == ":" else " " + self.result
        for part in (self.arg1, self.arg2, self.addition):
            if part:
                text += "," + part
        return text


class ILocArm32:
    """An ordered sequence of ARM32 instructions for one function."""

    def __init__(self) -> None:
        self.code: List[ArmInst] = []

    def _emit(self, *fields: str) -> ArmInst:
        inst = ArmInst(*fields)
        self.code.append(inst)
        return inst

    def comment(self, text: str) -> None:
        """Append an assembly comment."""
        self._emit("@", text)

    def to_str(self, num: int, flag: bool = True) -> str:
        """Decimal text of num, prefixed with '#' when flag is set."""
        return ("#" if flag else "") + str(num)

    def label(self, name: str) -> None:
        """Append a label definition."""
        self._emit(name, ":")

    def inst(self, op: str, rs: str, *args: str) -> None:
        """Append an instruction with a result and up to two source operands."""
        if len(args) > 2:
            raise TypeError(f"at most two source operands, got {len(args)}")
        self._emit(op, rs, *args)

    def load_imm(self, rs_reg_no: int, constant: int) -> None:
        """Load a 32-bit immediate with movw and, when needed, movt."""
        reg = REG_NAME[rs_reg_no]
        self._emit("movw", reg, "#:lower16:" + str(constant))
        if (constant >> 16) & 0xFFFF:
            self._emit("movt", reg, "#:upper16:" + str(constant))

    def load_symbol(self, rs_reg_no: int, name: str) -> None:
        """Load the address of a symbol."""
        reg = REG_NAME[rs_reg_no]
        self._emit("movw", reg, "#:lower16:" + name)
        self._emit("movt", reg, "#:upper16:" + name)

    def load_base(self, rs_reg_no: int, base_reg_no: int, disp: int) -> None:
        """Load from base register plus displacement."""
        rs_reg = REG_NAME[rs_reg_no]
        base = REG_NAME[base_reg_no]
        if is_disp(disp):
            if disp:
                base += "," + self.to_str(disp)
        else:
            self.load_imm(rs_reg_no, disp)
            base += "," + rs_reg
        self._emit("ldr", rs_reg, "[" + base + "]")

    def store_base(
        self, src_reg_no: int, base_reg_no: int, disp: int, tmp_reg_no: int
    ) -> None:
        """Store to base register plus displacement, using tmp for large offsets."""
        base = REG_NAME[base_reg_no]
        if is_disp(disp):
            if disp:
                base += "," + self.to_str(disp)
        else:
            self.load_imm(tmp_reg_no, disp)
            base += "," + REG_NAME[tmp_reg_no]
        self._emit("str", REG_NAME[src_reg_no], "[" + base + "]")

    def mov_reg(self, rs_reg_no: int, src_reg_no: int) -> None:
        """Copy one register to another."""
        self._emit("mov", REG_NAME[rs_reg_no], REG_NAME[src_reg_no])

    @staticmethod
    def _require_addr(var):
        addr = var.memory_addr()
        if addr is None:
            raise ValueError(f"value {var.name!r} has no register and no memory address")
        return addr

    def load_var(self, rs_reg_no: int, var) -> None:
        """Bring the value of var into register rs_reg_no."""
        if isinstance(var, ConstInt):
            self.load_imm(rs_reg_no, var.value)
        elif var.reg_id != -1:
            if var.reg_id != rs_reg_no:
                self._emit("mov", REG_NAME[rs_reg_no], REG_NAME[var.reg_id])
        elif isinstance(var, GlobalVariable):
            self.load_symbol(rs_reg_no, var.name)
            reg = REG_NAME[rs_reg_no]
            self._emit("ldr", reg, "[" + reg + "]")
        else:
            base_reg_no, offset = self._require_addr(var)
            self.load_base(rs_reg_no, base_reg_no, offset)

    def lea_var(self, rs_reg_no: int, var) -> None:
        """Load the stack address of var into register rs_reg_no."""
        base_reg_no, offset = self._require_addr(var)
        self.lea_stack(rs_reg_no, base_reg_no, offset)

    def store_var(self, src_reg_no: int, var, tmp_reg_no: int) -> None:
        """Store register src_reg_no into var, using tmp_reg_no if needed."""
        if var.reg_id != -1:
            if var.reg_id != src_reg_no:
                self._emit("mov", REG_NAME[var.reg_id], REG_NAME[src_reg_no])
        elif isinstance(var, GlobalVariable):
            self.load_symbol(tmp_reg_no, var.name)
            self._emit("str", REG_NAME[src_reg_no], "[" + REG_NAME[tmp_reg_no] + "]")
        else:
            base_reg_no, offset = self._require_addr(var)
            self.store_base(src_reg_no, base_reg_no, offset, tmp_reg_no)

    def lea_stack(self, rs_reg_no: int, base_reg_no: int, offset: int) -> None:
        """Compute base register plus offset into rs_reg_no."""
        rs_name = REG_NAME[rs_reg_no]
        base_name = REG_NAME[base_reg_no]
        if const_expr(offset):
            self._emit("add", rs_name, base_name, self.to_str(offset))
        else:
            self.load_imm(rs_reg_no, offset)
            self._emit("add", rs_name, base_name, rs_name)

    def alloc_stack(self, frame_size: int, tmp_reg_no: int) -> None:
        """Set up the frame pointer and reserve frame_size bytes of stack."""
        if frame_size == 0:
            return
        self.mov_reg(ARM32_FP_REG_NO, ARM32_SP_REG_NO)
        if const_expr(frame_size):
            self._emit("sub", "sp", "sp", self.to_str(frame_size))
        else:
            self.load_imm(tmp_reg_no, frame_size)
            self._emit("sub", "sp", "sp", REG_NAME[tmp_reg_no])

    def call_fun(self, name: str) -> None:
        """Call a function by name."""
        self._emit("bl", name)

    def nop(self) -> None:
        """Append an empty placeholder instruction."""
        self._emit("")

    def jump(self, label: str) -> None:
        """Unconditional branch to a label."""
        self._emit("b", label)

    def output(self, file: TextIO, output_empty: bool = False) -> None:
        """Write the sequence as assembly text to file."""
        for arm in self.code:
            text = arm.render()
            if arm.is_label:
                file.write(text + "\n")
            elif text:
                file.write("\t" + text + "\n")
            elif output_empty:
                file.write("\n")

    def delete_unused_label(self) -> None:
        """Mark labels that no live branch targets as dead."""
        labels = [
            arm
            for arm in self.code
            if not arm.dead and arm.opcode.startswith(".") and arm.is_label
        ]
        for label in labels:
            used = any(
                not arm.dead and arm.opcode.startswith("b") and arm.result == label.opcode
                for arm in self.code
            )
            if not used:
                label.set_dead()