from padline_linter.scope import ScopeTracker
from padline_tree_sitter import JSParser


def test_visit_returns_previous_sibling():
    program = JSParser().parse_string("a();\nb();\nc();").program
    scopes = ScopeTracker()
    scopes.enter()

    first, second, third = program.body
    assert scopes.visit(first) is None
    assert scopes.visit(second) is first
    assert scopes.visit(third) is second


def test_frames_are_independent():
    program = JSParser().parse_string("a();\nif (x) {\n  b();\n}\nc();").program
    first, if_statement, last = program.body
    block = if_statement.children[-1]
    inner = block.body[0]

    scopes = ScopeTracker()
    scopes.enter()
    scopes.visit(first)
    assert scopes.visit(if_statement) is first

    scopes.enter()
    assert scopes.visit(inner) is None
    scopes.exit()

    assert scopes.visit(last) is if_statement


def test_nodes_outside_sibling_lists_are_ignored():
    program = JSParser().parse_string("if (x) {}").program
    block = program.body[0].children[-1]

    scopes = ScopeTracker()
    scopes.enter()
    assert not ScopeTracker.is_eligible(block)
    assert scopes.visit(block) is None
    assert scopes.current.prev_node is None


def test_visit_without_frame():
    program = JSParser().parse_string("a();").program
    assert ScopeTracker().visit(program.body[0]) is None


def test_exit_on_empty_stack_is_ignored():
    scopes = ScopeTracker()
    scopes.exit()
    assert scopes.current is None

    scopes.enter()
    scopes.exit()
    scopes.exit()
    assert scopes.current is None
