"""Render an abstract syntax tree as a Graphviz DOT description."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from .syntax_tree import AstNode, AstOperatorType

_OPERATOR_NAMES: Dict[AstOperatorType, str] = {
    AstOperatorType.BLOCK: "block",
    AstOperatorType.RETURN: "return",
    AstOperatorType.COMPILE_UNIT: "compile-unit",
    AstOperatorType.FUNC_FORMAL_PARAMS: "formal-params",
    AstOperatorType.VAR_DECL: "var-decl",
    AstOperatorType.VAR_INIT: "var-init",
    AstOperatorType.DECL_STMT: "decl-stmt",
    AstOperatorType.ADD: "+",
    AstOperatorType.SUB: "-",
    AstOperatorType.ASSIGN: "=",
    AstOperatorType.FUNC_REAL_PARAMS: "real-params",
    AstOperatorType.UNARY_MINUS: "-",
    AstOperatorType.MUL: "*",
    AstOperatorType.DIV: "/",
    AstOperatorType.MOD: "%",
    AstOperatorType.LT: "<",
    AstOperatorType.GT: ">",
    AstOperatorType.LE: "<=",
    AstOperatorType.GE: ">=",
    AstOperatorType.EQ: "==",
    AstOperatorType.NEQ: "!=",
    AstOperatorType.LOGICAL_AND: "&&",
    AstOperatorType.LOGICAL_OR: "||",
    AstOperatorType.LOGICAL_NOT: "!",
    AstOperatorType.IF: "if",
    AstOperatorType.IF_ELSE: "if-else",
    AstOperatorType.WHILE: "while",
    AstOperatorType.BREAK: "break",
    AstOperatorType.CONTINUE: "continue",
    AstOperatorType.FUNC_FORMAL_PARAM: "formal-param",
    AstOperatorType.ARRAY_DECL: "array-decl",
    AstOperatorType.ARRAY_DIMS: "array-dims",
    AstOperatorType.ARRAY_INIT: "array-init",
    AstOperatorType.ARRAY_ACCESS: "array-access",
}

_LEAF_ATTRS = (
    ("fontcolor", "black"),
    ("fontname", "SimSun"),
    ("shape", "record"),
    ("style", "filled"),
    ("fillcolor", "yellow"),
)


def _as_int32(value: int) -> int:
    return ((value + 2**31) % 2**32) - 2**31


def node_name(node: AstNode) -> str:
    """The text shown for a node: its value for leaves, its operator otherwise."""
    kind = node.node_type
    if kind is AstOperatorType.LEAF_LITERAL_UINT:
        return str(_as_int32(node.integer_val))
    if kind is AstOperatorType.LEAF_LITERAL_FLOAT:
        return f"{node.float_val:.6f}"
    if kind is AstOperatorType.LEAF_VAR_ID:
        return node.name
    if kind is AstOperatorType.LEAF_TYPE:
        return str(node.type)
    if kind is AstOperatorType.FUNC_DEF:
        return "func-def: " + node.name
    if kind is AstOperatorType.FUNC_CALL:
        return "func-call: " + node.name
    return _OPERATOR_NAMES.get(kind, "unknown")


def _quote(text: str, record: bool = False) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    if record:
        for ch in "{}|<>":
            escaped = escaped.replace(ch, "\\" + ch)
    return '"' + escaped + '"'


class _DotBuilder:
    def __init__(self) -> None:
        self.lines: List[str] = []
        self._count = 0

    def _new_id(self) -> str:
        node_id = f"n{self._count}"
        self._count += 1
        return node_id

    def visit(self, node: Optional[AstNode]) -> Optional[str]:
        if node is None:
            return None
        if node.is_leaf_node():
            return self._leaf(node)
        return self._internal(node)

    def _leaf(self, node: AstNode) -> str:
        node_id = self._new_id()
        attrs = [f"{key}={_quote(value)}" for key, value in _LEAF_ATTRS[:2]]
        attrs.append(f"label={_quote(node_name(node), record=True)}")
        attrs.extend(f"{key}={_quote(value)}" for key, value in _LEAF_ATTRS[2:])
        self.lines.append(f"  {node_id} [{', '.join(attrs)}];")
        return node_id

    def _internal(self, node: AstNode) -> str:
        son_ids = [son_id for son_id in map(self.visit, node.sons) if son_id]
        node_id = self._new_id()
        self.lines.append(
            f"  {node_id} [label={_quote(node_name(node))}, shape=\"ellipse\"];"
        )
        self.lines.extend(f"  {node_id} -> {son_id};" for son_id in son_ids)
        return node_id


def ast_to_dot(root: Optional[AstNode]) -> str:
    """A directed DOT graph of the tree; children are emitted before parents."""
    builder = _DotBuilder()
    builder.visit(root)
    lines = ["digraph ast {", '  dpi="600";', *builder.lines, "}"]
    return "\n".join(lines) + "\n"


def output_ast(root: Optional[AstNode], file_path: Union[str, Path]) -> None:
    """Write the DOT description of the tree to file_path."""
    Path(file_path).write_text(ast_to_dot(root), encoding="utf-8")