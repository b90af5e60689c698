from pathlib import Path

import pytest
from padline_tree_sitter import ASTWalker, JSParser, dialect_for_path


def find_all(root, node_type):
    found = []
    ASTWalker.walk(root, lambda node: found.append(node) if node.type == node_type else None)
    return found


def test_program_body_holds_top_level_statements():
    result = JSParser().parse_string("const a = 1;\nfoo();\n")

    assert result.errors == []
    assert result.program.type == "Program"
    assert [n.type for n in result.program.body] == ["VariableDeclaration", "ExpressionStatement"]
    assert result.program.range == (0, len(result.source))


def test_node_locations_are_one_based_lines():
    result = JSParser().parse_string("foo();\n  bar();")
    second = result.program.body[1]

    assert second.loc.start.line == 2
    assert second.loc.start.column == 2
    assert second.loc.end.line == 2


def test_variable_declaration_kinds():
    result = JSParser().parse_string("var a;\nlet b;\nconst c = 1;")

    assert [n.kind for n in result.program.body] == ["var", "let", "const"]


def test_parentheses_are_not_nodes():
    result = JSParser().parse_string("(function () {})();")
    call = result.program.body[0].expression

    assert call.type == "CallExpression"
    assert call.callee.type == "FunctionExpression"


def test_switch_cases_belong_to_switch_statement():
    result = JSParser().parse_string("switch (x) {\n  case 1:\n    a();\n  default:\n    b();\n}")
    switch = result.program.body[0]

    cases = [c for c in switch.children if c.type == "SwitchCase"]
    assert len(cases) == 2
    assert all(c.parent is switch for c in cases)


def test_optional_call_is_wrapped_in_chain_expression():
    result = JSParser().parse_string("a?.b();")
    expression = result.program.body[0].expression

    assert expression.type == "ChainExpression"
    assert expression.expression.type == "CallExpression"


def test_labeled_statement_body():
    result = JSParser().parse_string("outer: for (;;) { break outer; }")
    labeled = result.program.body[0]

    assert labeled.type == "LabeledStatement"
    assert labeled.body.type == "ForStatement"


def test_typescript_declarations():
    code = "interface A {\n  foo(): void;\n}\ntype B = string;\nenum C { X }\n"
    result = JSParser("typescript").parse_string(code)

    assert result.errors == []
    assert [n.type for n in result.program.body] == [
        "TSInterfaceDeclaration",
        "TSTypeAliasDeclaration",
        "TSEnumDeclaration",
    ]
    signatures = find_all(result.program, "TSMethodSignature")
    assert len(signatures) == 1
    assert signatures[0].parent.type == "TSInterfaceBody"


def test_namespace_body_is_module_block():
    result = JSParser("typescript").parse_string("namespace N {\n  const a = 1;\n}\n")
    blocks = find_all(result.program, "TSModuleBlock")

    assert len(blocks) == 1
    assert blocks[0].body[0].type == "VariableDeclaration"


def test_syntax_errors_are_reported():
    result = JSParser().parse_string("const = ;")

    assert result.errors
    assert result.errors[0].startswith("1:")


def test_non_ascii_source_uses_string_offsets():
    code = 'const s = "héllo";\nfoo();'
    result = JSParser().parse_string(code)
    second = result.program.body[1]

    assert code[second.range[0] : second.range[1]] == "foo();"


def test_parse_file(tmp_path):
    file_path = tmp_path / "a.js"
    file_path.write_text("foo();\r\nbar();\r\n", newline="")

    result = JSParser().parse_file(file_path)

    assert result.source == "foo();\r\nbar();\r\n"
    assert result.program.body[1].loc.start.line == 2


def test_dialect_for_path():
    assert dialect_for_path(Path("a.js")) == "javascript"
    assert dialect_for_path(Path("a.mjs")) == "javascript"
    assert dialect_for_path(Path("a.ts")) == "typescript"
    assert dialect_for_path(Path("a.tsx")) == "tsx"
    assert dialect_for_path(Path("a.txt")) == "javascript"


def test_unknown_dialect():
    with pytest.raises(ValueError):
        JSParser("coffeescript")


def test_method_body_sits_under_function_expression():
    result = JSParser().parse_string("class A {\n  m() {\n    a();\n  }\n}")
    block = find_all(result.program, "BlockStatement")[0]

    assert block.body[0].type == "ExpressionStatement"
    assert block.parent.type == "FunctionExpression"
    assert block.parent.parent.type == "MethodDefinition"


def test_walker_calls_leave_after_children():
    program = JSParser().parse_string("if (x) {\n  a();\n}").program
    events = []

    ASTWalker.walk(
        program,
        lambda node: events.append(("enter", node.type)),
        lambda node: events.append(("leave", node.type)),
    )

    assert events[0] == ("enter", "Program")
    assert events[-1] == ("leave", "Program")
    assert events.index(("leave", "ExpressionStatement")) < events.index(("leave", "BlockStatement"))
