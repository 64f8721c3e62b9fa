"""A naive register allocator over the usable ARM32 registers r0-r10."""

from __future__ import annotations

from typing import FrozenSet, List, Optional, Set

from .platform import MAX_USABLE_REG_NUM


class SimpleRegisterAllocator:
    """Hands out load registers, spilling the earliest holder when none is free."""

    def __init__(self) -> None:
        self._occupied: Set[int] = set()
        self._used: Set[int] = set()
        self._holders: List = []

    @staticmethod
    def _check(no: int) -> None:
        if not 0 <= no < MAX_USABLE_REG_NUM:
            raise IndexError(f"register {no} is outside r0-r{MAX_USABLE_REG_NUM - 1}")

    def _mark(self, no: int) -> None:
        self._occupied.add(no)
        self._used.add(no)

    def allocate(self, var=None, no: int = -1) -> int:
        """Give var a load register, preferring no; return the register number.

        A value that already holds a load register keeps it. When every
        register is taken, the value that took one earliest is spilled.
        """
        if var is not None and var.load_reg_id != -1:
            return var.load_reg_id

        regno = -1
        if no != -1:
            self._check(no)
            if no not in self._occupied:
                regno = no
        if regno == -1:
            regno = next(
                (k for k in range(MAX_USABLE_REG_NUM) if k not in self._occupied),
                -1,
            )

        if regno != -1:
            self._mark(regno)
        else:
            if not self._holders:
                raise RuntimeError("no free register and no value to spill")
            oldest = self._holders.pop(0)
            regno = oldest.load_reg_id
            oldest.load_reg_id = -1

        if var is not None:
            var.load_reg_id = regno
            self._holders.append(var)

        return regno

    def allocate_register(self, no: int) -> None:
        """Take register no, spilling any value that holds it."""
        self._check(no)
        if no in self._occupied:
            self.free_register(no)
        self._mark(no)

    def free(self, var) -> None:
        """Release the load register held by var, if any."""
        if var is None or var.load_reg_id == -1:
            return
        self._occupied.discard(var.load_reg_id)
        self._holders.remove(var)
        var.load_reg_id = -1

    def free_register(self, no: int) -> None:
        """Release register no and detach the value holding it; -1 is ignored."""
        if no == -1:
            return
        self._occupied.discard(no)
        holder: Optional[object] = next(
            (val for val in self._holders if val.load_reg_id == no), None
        )
        if holder is not None:
            holder.load_reg_id = -1
            self._holders.remove(holder)

    def is_occupied(self, no: int) -> bool:
        """True if register no is currently taken."""
        return no in self._occupied

    def used_registers(self) -> FrozenSet[int]:
        """Every register that has been taken at some point."""
        return frozenset(self._used)