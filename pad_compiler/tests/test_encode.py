from __future__ import annotations

import json

import pytest
from pydantic import ValidationError
from pad_compiler.compiler.encode import decode, encode
from pad_compiler.errors import EncodingError
from pad_compiler.schema.models import (
    BlockNode,
    CommandNode,
    ErrorNode,
    IfNode,
    LoopNode,
    SequenceNode,
)


def test_tag_is_written_first_and_absent_else_is_omitted() -> None:
    node = IfNode(condition="ok", then_block=SequenceNode())

    assert encode(node) == '{"type":"if","condition":"ok","then_block":{"type":"sequence","children":[]}}'


def test_error_node_encoding() -> None:
    assert encode(ErrorNode(message="No function found")) == (
        '{"type":"error","message":"No function found"}'
    )


def test_decode_restores_a_full_tree() -> None:
    tree = SequenceNode(
        children=[
            BlockNode(
                label="fn main()",
                children=[
                    SequenceNode(
                        children=[
                            CommandNode(label="let x = 1;"),
                            LoopNode(
                                condition="for i in 0..3",
                                body=SequenceNode(
                                    children=[
                                        IfNode(
                                            condition="i > 1",
                                            then_block=SequenceNode(children=[CommandNode(label="a()")]),
                                            else_block=IfNode(
                                                condition="i > 0",
                                                then_block=SequenceNode(),
                                            ),
                                        )
                                    ]
                                ),
                            ),
                        ]
                    )
                ],
            )
        ]
    )

    assert decode(encode(tree)) == tree


def test_decode_rejects_unknown_variant() -> None:
    with pytest.raises(EncodingError) as excinfo:
        decode('{"type":"switch","cases":[]}')

    assert "Invalid PAD payload" in str(excinfo.value)


def test_decode_rejects_missing_required_field() -> None:
    with pytest.raises(EncodingError):
        decode('{"type":"loop","condition":"x"}')


def test_serialization_failure_returns_parseable_fallback() -> None:
    # model_construct skips validation, so the label is not a string.
    broken = CommandNode.model_construct(label=object())

    payload = json.loads(encode(broken))

    assert payload["type"] == "error"
    assert payload["message"].startswith("Serialization error: ")
    assert "object" in payload["message"]


def test_strings_are_escaped_and_unicode_is_kept() -> None:
    node = CommandNode(label='println!("h\u00e9 \\ {}", x);')

    assert encode(node) == '{"type":"command","label":"println!(\\"h\u00e9 \\\\ {}\\", x);"}'


def test_deep_tree_encodes_exactly() -> None:
    depth = 2000
    node = CommandNode(label="x")
    for _ in range(depth):
        node = SequenceNode(children=[node])

    expected = '{"type":"sequence","children":[' * depth + '{"type":"command","label":"x"}' + "]}" * depth
    assert encode(node) == expected


def test_indented_encoding_matches_json_dumps() -> None:
    node = IfNode(
        condition="ok",
        then_block=SequenceNode(children=[CommandNode(label="a()"), LoopNode(condition="x", body=SequenceNode())]),
        else_block=CommandNode(label="b()"),
    )

    assert encode(node, indent=2) == json.dumps(json.loads(encode(node)), indent=2)


def test_nodes_are_frozen() -> None:
    node = CommandNode(label="a()")

    with pytest.raises(ValidationError):
        node.label = "b()"


def test_nodes_reject_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        CommandNode(label="a()", extra="nope")
