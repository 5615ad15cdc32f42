from __future__ import annotations

from pad_compiler import build_diagram, transform
from pad_compiler.schema.models import CommandNode, IfNode, SequenceNode

DEPTH = 300
ARMS = 400


def _nested_ifs_rust(depth: int) -> str:
    return "fn deep() {" + " if c { " * depth + "leaf();" + " }" * depth + " }"


def _else_if_chain_rust(arms: int) -> str:
    chain = " else ".join(f"if x == {i} {{ arm{i}(); }}" for i in range(arms))
    return f"fn pick(x: i32) {{ {chain} }}"


def _function_body(root: SequenceNode) -> SequenceNode:
    (block,) = root.children
    (body,) = block.children
    return body


def test_deeply_nested_ifs_lower_to_nested_if_nodes() -> None:
    body = _function_body(build_diagram(_nested_ifs_rust(DEPTH), "rust"))

    node = body.children[0]
    levels = 0
    while isinstance(node, IfNode):
        levels += 1
        assert node.condition == "c"
        assert node.else_block is None
        (node,) = node.then_block.children
    assert levels == DEPTH
    assert node == CommandNode(label="leaf()")


def test_deeply_nested_ifs_encode_without_error() -> None:
    payload = transform(_nested_ifs_rust(DEPTH), "rust")

    assert payload.startswith('{"type":"sequence","children":[{"type":"block","label":"fn deep()"')
    assert payload.count('{"type":"if","condition":"c"') == DEPTH
    assert '"type":"error"' not in payload


def test_long_else_if_chain_nests_every_arm() -> None:
    body = _function_body(build_diagram(_else_if_chain_rust(ARMS), "rust"))

    node = body.children[0]
    conditions = []
    while node is not None:
        assert isinstance(node, IfNode)
        conditions.append(node.condition)
        node = node.else_block
    assert conditions == [f"x == {i}" for i in range(ARMS)]


def test_long_else_if_chain_encodes_without_error() -> None:
    payload = transform(_else_if_chain_rust(ARMS), "rust")

    assert payload.startswith('{"type":"sequence"')
    assert payload.count('"type":"if"') == ARMS
    assert payload.count('"else_block":') == ARMS - 1
    assert '"type":"error"' not in payload


def test_deeply_nested_javascript_ifs() -> None:
    source = "function deep() {" + " if (c) { " * DEPTH + "leaf();" + " }" * DEPTH + " }"

    payload = transform(source, "javascript")

    assert payload.startswith('{"type":"sequence"')
    assert payload.count('{"type":"if","condition":"c"') == DEPTH
    assert '{"type":"command","label":"leaf();"}' in payload
