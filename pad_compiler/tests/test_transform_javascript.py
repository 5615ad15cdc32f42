from __future__ import annotations

import json
from typing import Any

from pad_compiler import transform


def _body(source: str) -> list[dict[str, Any]]:
    root = json.loads(transform(source, "javascript"))
    assert root["type"] == "sequence", root
    return root["children"][0]["children"][0]["children"]


def test_function_declaration_maps_to_block() -> None:
    root = json.loads(
        transform(
            """
            function main() {
                let i = 0;
                while (i < 3) {
                    console.log("Count: " + i);
                    i++;
                }
                greet();
            }

            function greet() {
                console.log("Hello from JS!");
            }
            """,
            "javascript",
        )
    )

    assert [child["label"] for child in root["children"]] == ["fn main()", "fn greet()"]
    main_body = root["children"][0]["children"][0]["children"]
    assert main_body == [
        {"type": "command", "label": "let i = 0;"},
        {
            "type": "loop",
            "condition": "i < 3",
            "body": {
                "type": "sequence",
                "children": [
                    {"type": "command", "label": 'console.log("Count: " + i);'},
                    {"type": "command", "label": "i++;"},
                ],
            },
        },
        {"type": "command", "label": "greet();"},
    ]


def test_if_with_single_statement_branches() -> None:
    (node,) = _body("function f(x) { if (x > 0) a(); else b(); }")

    assert node == {
        "type": "if",
        "condition": "x > 0",
        "then_block": {"type": "command", "label": "a();"},
        "else_block": {"type": "command", "label": "b();"},
    }


def test_else_if_nests_under_else_block() -> None:
    (node,) = _body("function f(x) { if (x) { a(); } else if (y) { b(); } }")

    assert node["else_block"]["type"] == "if"
    assert node["else_block"]["condition"] == "y"
    assert "else_block" not in node["else_block"]


def test_classic_for_loop_condition() -> None:
    (node,) = _body("function f() { for (let i = 0; i < 3; i++) { g(i); } }")

    assert node["type"] == "loop"
    assert node["condition"] == "for (let i = 0; i < 3; i++)"
    assert node["body"]["children"] == [{"type": "command", "label": "g(i);"}]


def test_endless_for_loop_condition() -> None:
    (node,) = _body("function f() { for (;;) { tick(); } }")

    assert node["condition"] == "for (;;)"


def test_for_of_loop_condition() -> None:
    (node,) = _body("function f(xs) { for (const x of xs) { use(x); } }")

    assert node["type"] == "loop"
    assert node["condition"] == "for (const x of xs)"


def test_return_and_other_statements_are_commands() -> None:
    body = _body("function f() { do { x(); } while (y); return 1; }")

    assert body == [
        {"type": "command", "label": "do { x(); } while (y);"},
        {"type": "command", "label": "return 1;"},
    ]


def test_source_without_functions_reports_error() -> None:
    assert json.loads(transform("const x = 1;", "javascript")) == {
        "type": "error",
        "message": "No function found",
    }


def test_syntax_error_reports_parse_error() -> None:
    root = json.loads(transform("function f( {", "javascript"))

    assert root["type"] == "error"
    assert root["message"].startswith("Parse error: ")
