# minic

Building blocks for a compiler of a small C subset that targets 32-bit ARM.
The package is a library only. It has no command-line tool and no
dependencies outside the standard library.

## Modules

- `minic.types`
  - `TypeID` and the abstract base class `Type`. `Type` provides the
    `is_*_type()` checks, `size` and `__str__`.
  - `BasicType`, the type keywords the front end knows.
  - The lexer-to-parser attribute records `DigitIntAttr`, `DigitRealAttr`,
    `VarIdAttr` and `TypeAttr`.
  - The IR naming constants, such as `IR_GLOBAL_VARNAME_PREFIX` (`"@"`) and
    `IR_LABEL_PREFIX` (`".L"`).
- `minic.values` holds the IR values. Each value carries `reg_id` and
  `load_reg_id`, which are -1 when no register is assigned. Where a value has
  a memory address, `memory_addr()` returns it as `(base_reg, offset)`.
  - `ConstInt` wraps its value to a signed 32-bit integer, and its IR name is
    the number.
  - `GlobalValue` / `GlobalVariable`: the IR name is `@name`, the alignment is
    4, and `is_in_bss_section()` is true.
  - `FormalParam` and `LocalVariable` have an address only after
    `set_memory_addr()`.
  - `MemVariable` always reports an address.
  - `RegVariable` is bound to a fixed register.
- `minic.platform` holds ARM32 facts.
  - Register constants: `REG_NAME`, `ARM32_SP_REG_NO`, `ARM32_FP_REG_NO`,
    `ARM32_LX_REG_NO` and `ARM32_TMP_REG_NO`.
  - `const_expr(num)` is true if `num` or `-num` is an 8-bit value rotated
    by an even amount.
  - `is_disp(num)` is true for offsets in the range -4095..4095.
  - `is_reg(name)` recognises register names.
  - `register_values(int_type)` returns one `RegVariable` per register.
- `minic.allocator`: `SimpleRegisterAllocator` hands out load registers from
  r0–r10.
  - `allocate(var, no)` gives `var` a register, preferring `no`. When every
    register is taken, it spills the value that took one earliest.
  - `allocate_register(no)` takes a register outright.
  - `free()` and `free_register()` release registers.
  - `is_occupied()` and `used_registers()` report what is taken now and what
    has ever been taken.
- `minic.iloc` holds `ArmInst` and `ILocArm32`, an ordered list of ARM32
  instructions.
  - `ILocArm32` emits labels, comments, generic instructions,
    `movw`/`movt` immediates, symbol addresses, base+offset loads and stores,
    moves, frame set-up (`alloc_stack`), calls, jumps and no-ops.
  - `load_var` / `store_var` / `lea_var` choose the right form for constants,
    register values, globals and stack values. They raise `ValueError` for a
    value with neither a register nor an address.
  - `delete_unused_label()` marks labels that no branch targets as dead.
  - `output(file, output_empty)` writes the assembly text.
- `minic.syntax_tree` holds `AstOperatorType`, `AstNode` and the helper
  constructors:
  - `create_contain_node`, `create_func_def` and `create_func_def_from_attrs`
  - `create_func_call` and `create_type_node`
  - `create_var_decl_node`, `create_var_decl_stmt_node` and
    `add_var_decl_node`

  Helpers that turn a `TypeAttr` into a type take a `type_map` from
  `BasicType` to `Type`. `BasicType.INT` maps to the int type, and every other
  keyword maps to the void type. They raise `ValueError` if the needed entry
  is missing.
- `minic.graph`
  - `node_name(node)` gives the label for a node.
  - `ast_to_dot(root)` renders a tree as Graphviz DOT text.
  - `output_ast(root, file_path)` writes that text to a file.

## Example

```python
import sys

from minic.iloc import ILocArm32

iloc = ILocArm32()
iloc.label(".L0")
iloc.load_imm(0, 42)
iloc.jump(".L0")
iloc.call_fun("putint")
iloc.delete_unused_label()
iloc.output(sys.stdout, False)
```

prints

```
.L0:
	movw r0,#:lower16:42
	b .L0
	bl putint
```

## What the package does not do

- It has no lexer or parser. Nothing reads C source. Syntax trees are built
  by calling the helpers in `minic.syntax_tree`.
- It does not generate IR from a syntax tree.
- It does not select instructions for whole functions and does not write
  complete assembly files. `ILocArm32` is the instruction sequence such a
  step would fill.
- It defines no concrete IR types. `Type` is abstract, so callers subclass
  it, for example to make an int type with `size` 4.
- `output_ast` writes DOT text only. It does not render images, so use
  Graphviz's own tools for that.

## Installation

```
pip install .
```

## Running the tests

```
pip install .[test]
pytest
```