import io

import pytest

from minic.iloc import ArmInst, ILocArm32
from minic.types import Type, TypeID
from minic.values import ConstInt, GlobalVariable, LocalVariable, RegVariable


class _IntType(Type):
    def __init__(self):
        super().__init__(TypeID.INTEGER)

    @property
    def size(self):
        return 4

    def __str__(self):
        return "i32"


INT = _IntType()


def renders(iloc):
    return [inst.render() for inst in iloc.code]


def test_label_renders_without_space():
    assert ArmInst(".L1", ":").render() == ".L1:"


def test_dead_and_empty_render_nothing():
    inst = ArmInst("mov", "r0", "r1")
    inst.set_dead()
    assert inst.dead is True
    assert inst.render() == ""
    assert ArmInst("").render() == ""


def test_cond_follows_opcode():
    text = ArmInst("b", "x", cond="eq").render()
    assert text.startswith("beq ")
    assert text.endswith("x")


def test_replace_matches_fresh_instruction():
    inst = ArmInst("nop")
    inst.replace("add", "r0", "r1", "r2", "", "lsl #2")
    assert inst.render() == ArmInst("add", "r0", "r1", "r2", "", "lsl #2").render()
    assert inst.opcode == "add"


def test_to_str():
    iloc = ILocArm32()
    assert iloc.to_str(-16) == "#-16"
    assert iloc.to_str(5, False) == "5"


def test_load_base_small_and_zero_offset():
    iloc = ILocArm32()
    iloc.load_base(8, 11, -16)
    iloc.load_base(8, 11, 0)
    assert renders(iloc)[0] == "ldr r8,[fp,#-16]"
    assert renders(iloc)[1] == "ldr r8,[fp]"


def test_load_base_large_offset_uses_register():
    iloc = ILocArm32()
    iloc.load_base(8, 11, -4096)
    assert [i.opcode for i in iloc.code] == ["movw", "movt", "ldr"]
    assert iloc.code[-1].render() == "ldr r8,[fp,r8]"


def test_store_base():
    iloc = ILocArm32()
    iloc.store_base(8, 11, -16, 9)
    assert iloc.code[-1].render() == "str r8,[fp,#-16]"
    iloc.store_base(8, 11, -5000, 9)
    assert iloc.code[-1].render() == "str r8,[fp,r9]"


def test_load_imm_small_and_large():
    iloc = ILocArm32()
    iloc.load_imm(0, 100)
    assert len(iloc.code) == 1
    assert iloc.code[0].opcode == "movw"
    assert iloc.code[0].arg1.endswith(str(100))
    iloc.load_imm(0, 0x12345)
    assert [i.opcode for i in iloc.code[1:]] == ["movw", "movt"]


def test_load_var_const():
    iloc = ILocArm32()
    iloc.load_var(8, ConstInt(100, INT))
    assert iloc.code[0].opcode == "movw"
    assert iloc.code[0].result == "r8"


def test_load_var_register():
    iloc = ILocArm32()
    iloc.load_var(8, RegVariable(INT, "r2", 2))
    assert renders(iloc) == ["mov r8,r2"]
    iloc.load_var(2, RegVariable(INT, "r2", 2))
    assert len(iloc.code) == 1


def test_load_var_global():
    iloc = ILocArm32()
    iloc.load_var(8, GlobalVariable(INT, "a"))
    assert [i.opcode for i in iloc.code] == ["movw", "movt", "ldr"]
    assert iloc.code[0].arg1 == "#:lower16:a"
    assert iloc.code[2].arg1 == "[r8]"


def test_load_var_local_on_stack():
    iloc = ILocArm32()
    var = LocalVariable(INT, "x", 1)
    var.set_memory_addr(11, -16)
    iloc.load_var(8, var)
    assert renders(iloc) == ["ldr r8,[fp,#-16]"]


def test_load_var_without_location_raises():
    iloc = ILocArm32()
    with pytest.raises(ValueError):
        iloc.load_var(8, LocalVariable(INT, "x", 1))


def test_store_var_register():
    iloc = ILocArm32()
    iloc.store_var(8, RegVariable(INT, "r8", 8), 10)
    assert iloc.code == []
    iloc.store_var(8, RegVariable(INT, "r2", 2), 10)
    assert renders(iloc) == ["mov r2,r8"]


def test_store_var_global_uses_tmp_register():
    iloc = ILocArm32()
    iloc.store_var(8, GlobalVariable(INT, "a"), 10)
    assert [i.opcode for i in iloc.code] == ["movw", "movt", "str"]
    assert iloc.code[0].result == "r10"
    assert iloc.code[2].arg1 == "[r10]"


def test_lea_var_and_lea_stack():
    iloc = ILocArm32()
    var = LocalVariable(INT, "x", 1)
    var.set_memory_addr(11, -16)
    iloc.lea_var(8, var)
    assert renders(iloc) == ["add r8,fp,#-16"]
    iloc.lea_stack(8, 11, 257)
    assert iloc.code[-1].render() == "add r8,fp,r8"
    with pytest.raises(ValueError):
        iloc.lea_var(8, LocalVariable(INT, "y", 1))


def test_alloc_stack():
    iloc = ILocArm32()
    iloc.alloc_stack(0, 10)
    assert iloc.code == []
    iloc.alloc_stack(16, 10)
    assert renders(iloc) == ["mov fp,sp", "sub sp,sp,#16"]
    big = ILocArm32()
    big.alloc_stack(257, 8)
    assert big.code[-1].render() == "sub sp,sp,r8"


def test_call_jump_comment_nop():
    iloc = ILocArm32()
    iloc.call_fun("f")
    iloc.jump(".L3")
    iloc.comment("note")
    iloc.nop()
    assert (iloc.code[0].opcode, iloc.code[0].result) == ("bl", "f")
    assert (iloc.code[1].opcode, iloc.code[1].result) == ("b", ".L3")
    assert iloc.code[2].render() == "@ note"
    assert iloc.code[3].render() == ""


def test_inst_rejects_extra_operands():
    iloc = ILocArm32()
    iloc.inst("add", "r0", "r1", "r2")
    assert iloc.code[0].arg2 == "r2"
    with pytest.raises(TypeError):
        iloc.inst("add", "r0", "r1", "r2", "r3")


def test_delete_unused_label():
    iloc = ILocArm32()
    iloc.label(".L1")
    iloc.label(".L2")
    iloc.jump(".L1")
    iloc.delete_unused_label()
    assert iloc.code[0].dead is False
    assert iloc.code[1].dead is True


def test_output_formats_labels_and_instructions():
    iloc = ILocArm32()
    iloc.label(".L1")
    iloc.jump(".L1")
    out = io.StringIO()
    iloc.output(out)
    assert out.getvalue() == f"{iloc.code[0].render()}\n\t{iloc.code[1].render()}\n"


def test_output_empty_lines_only_when_asked():
    iloc = ILocArm32()
    iloc.nop()
    quiet = io.StringIO()
    iloc.output(quiet)
    assert quiet.getvalue() == ""
    loud = io.StringIO()
    iloc.output(loud, True)
    assert loud.getvalue() == "\n"