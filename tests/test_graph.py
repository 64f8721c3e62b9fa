import pytest

from minic.graph import ast_to_dot, node_name, output_ast
from minic.syntax_tree import (
    AstNode,
    AstOperatorType,
    create_contain_node,
    create_func_call,
    create_func_def,
)
from minic.types import DigitIntAttr, Type, TypeID


class _IntType(Type):
    def __init__(self):
        super().__init__(TypeID.INTEGER)

    def __str__(self):
        return "i32"


def _sample_tree():
    a = AstNode.from_id("a", 1)
    b = AstNode.from_digit(DigitIntAttr(2, 1))
    add = create_contain_node(AstOperatorType.ADD, a, b)
    ret = create_contain_node(AstOperatorType.RETURN, add)
    block = create_contain_node(AstOperatorType.BLOCK, ret)
    return create_func_def(
        AstNode.from_type(_IntType()), AstNode.from_id("main", 1), block
    )


@pytest.mark.parametrize(
    "kind, expected",
    [
        (AstOperatorType.ADD, "+"),
        (AstOperatorType.BLOCK, "block"),
        (AstOperatorType.COMPILE_UNIT, "compile-unit"),
        (AstOperatorType.LOGICAL_AND, "&&"),
        (AstOperatorType.IF_ELSE, "if-else"),
        (AstOperatorType.ARRAY_ACCESS, "array-access"),
        (AstOperatorType.MAX, "unknown"),
    ],
)
def test_operator_names(kind, expected):
    assert node_name(AstNode(kind)) == expected


def test_uint_literal_shown_as_signed():
    node = AstNode.from_digit(DigitIntAttr(4294967295, 3))
    assert node_name(node) == "-1"
    assert node_name(AstNode.from_digit(DigitIntAttr(42, 3))) == "42"


def test_float_literal_six_decimals():
    node = AstNode(AstOperatorType.LEAF_LITERAL_FLOAT)
    node.float_val = 1.5
    assert node_name(node) == "1.500000"


def test_leaf_names_for_id_and_type():
    assert node_name(AstNode.from_id("count", 2)) == "count"
    assert node_name(AstNode.from_type(_IntType())) == "i32"


def test_func_def_and_call_names():
    func = _sample_tree()
    assert node_name(func) == "func-def: main"
    call = create_func_call(AstNode.from_id("putint", 4))
    assert node_name(call) == "func-call: putint"


def test_dot_node_and_edge_counts():
    tree = _sample_tree()
    dot = ast_to_dot(tree)
    total = sum(1 for _ in _walk(tree))
    assert dot.count(" -> ") == total - 1
    assert dot.count("[label=") + dot.count("fontcolor=") == total
    assert dot.startswith("digraph ast {")
    assert dot.rstrip().endswith("}")
    assert 'dpi="600"' in dot


def _walk(node):
    yield node
    for son in node:
        yield from _walk(son)


def test_children_declared_before_parent():
    tree = create_contain_node(
        AstOperatorType.ADD, AstNode.from_id("x", 1), AstNode.from_id("y", 1)
    )
    dot = ast_to_dot(tree)
    assert dot.index('label="x"') < dot.index('label="y"') < dot.index('label="+"')
    assert "n2 -> n0;" in dot
    assert "n2 -> n1;" in dot


def test_leaf_styling():
    dot = ast_to_dot(AstNode.from_id("v", 1))
    assert 'shape="record"' in dot
    assert 'fillcolor="yellow"' in dot
    assert "ellipse" not in dot


def test_internal_node_is_ellipse_even_without_children():
    dot = ast_to_dot(AstNode(AstOperatorType.BREAK))
    assert 'label="break", shape="ellipse"' in dot
    assert " -> " not in dot


def test_empty_tree():
    dot = ast_to_dot(None)
    assert dot == 'digraph ast {\n  dpi="600";\n}\n'


def test_quotes_escaped():
    node = AstNode(AstOperatorType.FUNC_CALL)
    node.name = 'a"b'
    dot = ast_to_dot(node)
    assert 'label="func-call: a\\"b"' in dot


def test_output_ast_writes_dot(tmp_path):
    tree = _sample_tree()
    path = tmp_path / "ast.dot"
    output_ast(tree, path)
    assert path.read_text(encoding="utf-8") == ast_to_dot(tree)


def test_output_ast_accepts_str_path(tmp_path):
    path = tmp_path / "tree"
    output_ast(AstNode(AstOperatorType.RETURN), str(path))
    assert 'label="return"' in path.read_text(encoding="utf-8")