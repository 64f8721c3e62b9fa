"""Abstract syntax tree nodes and the helpers a parser uses to build them."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterator, List, Mapping, Optional

from .types import BasicType, DigitIntAttr, Type, TypeAttr, VarIdAttr


class AstOperatorType(IntEnum):
    """Kinds of AST nodes: leaves first, then internal operators."""

    LEAF_LITERAL_UINT = 0
    LEAF_LITERAL_FLOAT = 1
    LEAF_VAR_ID = 2
    LEAF_TYPE = 3

    COMPILE_UNIT = 4
    FUNC_DEF = 5
    FUNC_FORMAL_PARAMS = 6
    FUNC_FORMAL_PARAM = 7
    FUNC_CALL = 8
    FUNC_REAL_PARAMS = 9
    BLOCK = 10
    COMPOUNDSTMT = 10
    RETURN = 11
    ASSIGN = 12
    DECL_STMT = 13
    VAR_INIT = 14
    VAR_DECL = 15
    ARRAY_DECL = 16
    ARRAY_DIMS = 17
    ARRAY_INIT = 18
    ARRAY_ACCESS = 19
    ADD = 20
    SUB = 21
    MUL = 22
    DIV = 23
    MOD = 24
    UNARY_MINUS = 25
    LT = 26
    GT = 27
    LE = 28
    GE = 29
    EQ = 30
    NEQ = 31
    LOGICAL_AND = 32
    LOGICAL_OR = 33
    LOGICAL_NOT = 34
    IF = 35
    IF_ELSE = 36
    WHILE = 37
    BREAK = 38
    CONTINUE = 39
    MAX = 40


_LEAF_TYPES = frozenset(
    {
        AstOperatorType.LEAF_LITERAL_UINT,
        AstOperatorType.LEAF_LITERAL_FLOAT,
        AstOperatorType.LEAF_VAR_ID,
        AstOperatorType.LEAF_TYPE,
    }
)


class AstNode:
    """A node of the abstract syntax tree."""

    def __init__(
        self,
        node_type: AstOperatorType,
        type: Optional[Type] = None,
        line_no: int = -1,
    ) -> None:
        self.node_type = AstOperatorType(node_type)
        self.type = type
        self.line_no = line_no
        self.integer_val = 0
        self.float_val = 0.0
        self.name = ""
        self.parent: Optional[AstNode] = None
        self.sons: List[AstNode] = []
        self.val = None
        self.need_scope = True

    def __repr__(self) -> str:
        return (
            f"AstNode({self.node_type.name}, name={self.name!r}, "
            f"line_no={self.line_no}, sons={len(self.sons)})"
        )

    def __iter__(self) -> Iterator["AstNode"]:
        return iter(self.sons)

    def is_leaf_node(self) -> bool:
        """True for literal, identifier and type leaves."""
        return self.node_type in _LEAF_TYPES

    def insert_son_node(self, node: Optional["AstNode"]) -> "AstNode":
        """Append node as the last child, ignoring None; return self."""
        if node is not None:
            node.parent = self
            self.sons.append(node)
        return self

    @classmethod
    def new(cls, node_type: AstOperatorType, *args: Optional["AstNode"]) -> "AstNode":
        """Create an internal node; children are taken up to the first None."""
        parent = cls(node_type)
        for node in args:
            if node is None:
                break
            parent.insert_son_node(node)
        return parent

    @classmethod
    def from_digit(cls, attr: DigitIntAttr) -> "AstNode":
        """Create an unsigned integer literal leaf."""
        node = cls(AstOperatorType.LEAF_LITERAL_UINT, None, attr.lineno)
        node.integer_val = attr.val & 0xFFFFFFFF
        return node

    @classmethod
    def from_var_id(cls, attr: VarIdAttr) -> "AstNode":
        """Create an identifier leaf from a lexer attribute."""
        return cls.from_id(attr.id, attr.lineno)

    @classmethod
    def from_id(cls, name: str, line_no: int) -> "AstNode":
        """Create an identifier leaf."""
        node = cls(AstOperatorType.LEAF_VAR_ID, None, line_no)
        node.name = name
        return node

    @classmethod
    def from_type(cls, type: Type) -> "AstNode":
        """Create a type leaf."""
        return cls(AstOperatorType.LEAF_TYPE, type, -1)


def create_contain_node(
    node_type: AstOperatorType,
    first_child: Optional[AstNode] = None,
    second_child: Optional[AstNode] = None,
    third_child: Optional[AstNode] = None,
) -> AstNode:
    """Create an internal node with up to three children, skipping None."""
    node = AstNode(node_type)
    for child in (first_child, second_child, third_child):
        node.insert_son_node(child)
    return node


def create_func_def(
    type_node: AstNode,
    name_node: AstNode,
    block_node: Optional[AstNode] = None,
    params_node: Optional[AstNode] = None,
) -> AstNode:
    """Create a function definition: return type, name, parameters, body."""
    node = AstNode(AstOperatorType.FUNC_DEF, type_node.type, name_node.line_no)
    node.name = name_node.name
    if params_node is None:
        params_node = AstNode(AstOperatorType.FUNC_FORMAL_PARAMS)
    if block_node is None:
        block_node = AstNode(AstOperatorType.BLOCK)
    for child in (type_node, name_node, params_node, block_node):
        node.insert_son_node(child)
    return node


def type_attr_to_type(attr: TypeAttr, type_map: Mapping[BasicType, Type]) -> Type:
    """Map a basic type keyword to its IR type: int stays int, anything else is void."""
    key = BasicType.INT if attr.type == BasicType.INT else BasicType.VOID
    try:
        return type_map[key]
    except KeyError:
        raise ValueError(f"no IR type given for {key.name}") from None


def create_type_node(attr: TypeAttr, type_map: Mapping[BasicType, Type]) -> AstNode:
    """Create a type leaf from a basic type keyword."""
    return AstNode.from_type(type_attr_to_type(attr, type_map))


def create_func_def_from_attrs(
    type_attr: TypeAttr,
    id_attr: VarIdAttr,
    block_node: Optional[AstNode],
    params_node: Optional[AstNode],
    type_map: Mapping[BasicType, Type],
) -> AstNode:
    """Create a function definition from lexer attributes."""
    type_node = create_type_node(type_attr, type_map)
    id_node = AstNode.from_id(id_attr.id, id_attr.lineno)
    return create_func_def(type_node, id_node, block_node, params_node)


def create_func_call(
    funcname_node: AstNode, params_node: Optional[AstNode] = None
) -> AstNode:
    """Create a function call: name and actual parameters."""
    node = AstNode(AstOperatorType.FUNC_CALL)
    node.name = funcname_node.name
    if params_node is None:
        params_node = AstNode(AstOperatorType.FUNC_REAL_PARAMS)
    node.insert_son_node(funcname_node)
    node.insert_son_node(params_node)
    return node


def create_var_decl_node(type: Optional[Type], id_attr: VarIdAttr) -> AstNode:
    """Create a variable declaration holding a type leaf and a name leaf."""
    type_node = AstNode.from_type(type)
    id_node = AstNode.from_id(id_attr.id, id_attr.lineno)
    decl_node = create_contain_node(AstOperatorType.VAR_DECL, type_node, id_node)
    decl_node.type = type
    return decl_node


def create_var_decl_stmt_node(first_child: Optional[AstNode] = None) -> AstNode:
    """Create a declaration statement, taking its type from the first declaration."""
    stmt_node = create_contain_node(AstOperatorType.DECL_STMT)
    if first_child is not None:
        stmt_node.type = first_child.type
        stmt_node.insert_son_node(first_child)
    return stmt_node


def add_var_decl_node(stmt_node: AstNode, id_attr: VarIdAttr) -> AstNode:
    """Append another variable of the statement's type; return the statement."""
    decl_node = create_var_decl_node(stmt_node.type, id_attr)
    stmt_node.insert_son_node(decl_node)
    return stmt_node