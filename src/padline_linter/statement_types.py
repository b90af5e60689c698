"""Statement-shape vocabulary used on both sides of a padding rule.

Every ``StatementType`` maps to a predicate over ``(node, source_code)``.
Keyword shapes check the node type and the literal first token, since
several ESTree types can be reached from more than one keyword. Shapes
that may span lines also get ``singleline-``/``multiline-`` variants built
by wrapping the base predicate.
"""

from enum import Enum
from typing import AbstractSet, Callable, Dict, Iterable, Union

from padline_tree_sitter import Node, SourceCode, Token

Predicate = Callable[[Node, SourceCode], bool]


class StatementType(str, Enum):
    ANY = "*"
    BLOCK_LIKE = "block-like"
    EXPRESSION = "expression"
    RETURN = "return"
    EXPORT = "export"
    VAR = "var"
    LET = "let"
    CONST = "const"
    USING = "using"
    TYPE = "type"
    SINGLELINE_BLOCK_LIKE = "singleline-block-like"
    SINGLELINE_EXPRESSION = "singleline-expression"
    SINGLELINE_RETURN = "singleline-return"
    SINGLELINE_EXPORT = "singleline-export"
    SINGLELINE_VAR = "singleline-var"
    SINGLELINE_LET = "singleline-let"
    SINGLELINE_CONST = "singleline-const"
    SINGLELINE_USING = "singleline-using"
    SINGLELINE_TYPE = "singleline-type"
    MULTILINE_BLOCK_LIKE = "multiline-block-like"
    MULTILINE_EXPRESSION = "multiline-expression"
    MULTILINE_RETURN = "multiline-return"
    MULTILINE_EXPORT = "multiline-export"
    MULTILINE_VAR = "multiline-var"
    MULTILINE_LET = "multiline-let"
    MULTILINE_CONST = "multiline-const"
    MULTILINE_USING = "multiline-using"
    MULTILINE_TYPE = "multiline-type"
    DIRECTIVE = "directive"
    IIFE = "iife"
    BLOCK = "block"
    EMPTY = "empty"
    FUNCTION = "function"
    TS_METHOD = "ts-method"
    BREAK = "break"
    CASE = "case"
    CLASS = "class"
    CONTINUE = "continue"
    DEBUGGER = "debugger"
    DEFAULT = "default"
    DO = "do"
    FOR = "for"
    IF = "if"
    IMPORT = "import"
    SWITCH = "switch"
    THROW = "throw"
    TRY = "try"
    WHILE = "while"
    WITH = "with"
    ENUM = "enum"
    INTERFACE = "interface"
    FUNCTION_OVERLOAD = "function-overload"


StatementTypeRef = Union[StatementType, AbstractSet[StatementType]]

FUNCTION_TYPES = frozenset({"FunctionDeclaration", "FunctionExpression", "ArrowFunctionExpression"})


def is_semicolon_token(token: Token) -> bool:
    return token.value == ";" and token.type == "Punctuator"


def is_not_semicolon_token(token: Token) -> bool:
    return token.value != ";" and token.type == "Punctuator"


def is_closing_brace_token(token: Token) -> bool:
    return token.value == "}" and token.type == "Punctuator"


def is_single_line(node: Node) -> bool:
    return node.loc.start.line == node.loc.end.line


def is_parenthesized(node: Node, source_code: SourceCode) -> bool:
    previous_token = source_code.get_token_before(node)
    next_token = source_code.get_token_after(node)
    return (
        previous_token is not None
        and next_token is not None
        and previous_token.value == "("
        and previous_token.range[1] <= node.range[0]
        and next_token.value == ")"
        and next_token.range[0] >= node.range[1]
    )


def skip_chain_expression(node: Node) -> Node:
    if node is not None and node.type == "ChainExpression":
        return node.expression
    return node


def is_iife_statement(node: Node, source_code: SourceCode = None) -> bool:
    if node.type != "ExpressionStatement" or node.expression is None:
        return False

    expression = skip_chain_expression(node.expression)
    if expression.type == "UnaryExpression" and expression.argument is not None:
        expression = skip_chain_expression(expression.argument)

    if expression.type != "CallExpression" or expression.callee is None:
        return False

    callee = expression.callee
    while callee.type == "SequenceExpression" and callee.expressions:
        callee = callee.expressions[-1]
    return callee.type in FUNCTION_TYPES


def is_block_like_statement(node: Node, source_code: SourceCode) -> bool:
    if node.type == "DoWhileStatement" and node.body is not None and node.body.type == "BlockStatement":
        return True

    if is_iife_statement(node):
        return True

    last_token = source_code.get_last_token(node, filter=is_not_semicolon_token)
    if last_token is None or not is_closing_brace_token(last_token):
        return False

    belonging_node = source_code.get_node_by_range_index(last_token.range[0])
    return belonging_node is not None and belonging_node.type in ("BlockStatement", "SwitchStatement")


def _is_top_level_expression_statement(node: Node) -> bool:
    if node.type != "ExpressionStatement" or node.parent is None:
        return False
    parent = node.parent
    if parent.type == "Program":
        return True
    return parent.type == "BlockStatement" and parent.parent is not None and parent.parent.type in FUNCTION_TYPES


def _is_directive(node: Node, source_code: SourceCode) -> bool:
    return (
        _is_top_level_expression_statement(node)
        and node.expression is not None
        and node.expression.type == "Literal"
        and isinstance(node.expression.value, str)
        and not is_parenthesized(node.expression, source_code)
    )


def is_directive_prologue(node: Node, source_code: SourceCode) -> bool:
    """A directive, and every statement before it in the same body is one too"""
    if not _is_directive(node, source_code) or not isinstance(node.parent.body, list):
        return False

    for sibling in node.parent.body:
        if sibling is node:
            break
        if not _is_directive(sibling, source_code):
            return False
    return True


def is_expression(node: Node, source_code: SourceCode) -> bool:
    return node.type == "ExpressionStatement" and not is_directive_prologue(node, source_code)


def is_using(node: Node, source_code: SourceCode) -> bool:
    return node.type == "VariableDeclaration" and node.kind in ("using", "await using")


def keyword_tester(node_types: Union[str, Iterable[str]], keyword: str) -> Predicate:
    types = frozenset([node_types] if isinstance(node_types, str) else node_types)

    def test(node: Node, source_code: SourceCode) -> bool:
        if node.type not in types:
            return False
        first_token = source_code.get_first_token(node)
        return first_token is not None and first_token.value == keyword

    return test


def node_type_tester(node_type: str) -> Predicate:
    return lambda node, source_code: node.type == node_type


def singleline(test: Predicate) -> Predicate:
    return lambda node, source_code: test(node, source_code) and is_single_line(node)


def multiline(test: Predicate) -> Predicate:
    return lambda node, source_code: test(node, source_code) and not is_single_line(node)


MAYBE_MULTILINE_TESTS: Dict[StatementType, Predicate] = {
    StatementType.BLOCK_LIKE: is_block_like_statement,
    StatementType.EXPRESSION: is_expression,
    StatementType.RETURN: keyword_tester("ReturnStatement", "return"),
    StatementType.EXPORT: keyword_tester(
        ("ExportAllDeclaration", "ExportDefaultDeclaration", "ExportNamedDeclaration"), "export"
    ),
    StatementType.VAR: keyword_tester("VariableDeclaration", "var"),
    StatementType.LET: keyword_tester("VariableDeclaration", "let"),
    StatementType.CONST: keyword_tester("VariableDeclaration", "const"),
    StatementType.USING: is_using,
    StatementType.TYPE: keyword_tester("TSTypeAliasDeclaration", "type"),
}

STATEMENT_TESTS: Dict[StatementType, Predicate] = {
    StatementType.ANY: lambda node, source_code: True,
    StatementType.DIRECTIVE: is_directive_prologue,
    StatementType.IIFE: is_iife_statement,
    StatementType.BLOCK: node_type_tester("BlockStatement"),
    StatementType.EMPTY: node_type_tester("EmptyStatement"),
    StatementType.FUNCTION: node_type_tester("FunctionDeclaration"),
    StatementType.TS_METHOD: node_type_tester("TSMethodSignature"),
    StatementType.BREAK: keyword_tester("BreakStatement", "break"),
    StatementType.CASE: keyword_tester("SwitchCase", "case"),
    StatementType.CLASS: keyword_tester("ClassDeclaration", "class"),
    StatementType.CONTINUE: keyword_tester("ContinueStatement", "continue"),
    StatementType.DEBUGGER: keyword_tester("DebuggerStatement", "debugger"),
    StatementType.DEFAULT: keyword_tester(("SwitchCase", "ExportDefaultDeclaration"), "default"),
    StatementType.DO: keyword_tester("DoWhileStatement", "do"),
    StatementType.FOR: keyword_tester(("ForStatement", "ForInStatement", "ForOfStatement"), "for"),
    StatementType.IF: keyword_tester("IfStatement", "if"),
    StatementType.IMPORT: keyword_tester("ImportDeclaration", "import"),
    StatementType.SWITCH: keyword_tester("SwitchStatement", "switch"),
    StatementType.THROW: keyword_tester("ThrowStatement", "throw"),
    StatementType.TRY: keyword_tester("TryStatement", "try"),
    StatementType.WHILE: keyword_tester(("WhileStatement", "DoWhileStatement"), "while"),
    StatementType.WITH: keyword_tester("WithStatement", "with"),
    StatementType.ENUM: keyword_tester("TSEnumDeclaration", "enum"),
    StatementType.INTERFACE: keyword_tester("TSInterfaceDeclaration", "interface"),
    StatementType.FUNCTION_OVERLOAD: node_type_tester("TSDeclareFunction"),
}

for _base, _test in MAYBE_MULTILINE_TESTS.items():
    STATEMENT_TESTS[_base] = _test
    STATEMENT_TESTS[StatementType(f"singleline-{_base.value}")] = singleline(_test)
    STATEMENT_TESTS[StatementType(f"multiline-{_base.value}")] = multiline(_test)


class StatementClassifier:
    """Matches statement nodes of one source unit against ``StatementType`` references"""

    def __init__(self, source_code: SourceCode):
        self.source_code = source_code

    def match(self, node: Node, statement_type: StatementTypeRef) -> bool:
        while node.type == "LabeledStatement" and node.body is not None:
            node = node.body

        if isinstance(statement_type, StatementType):
            return STATEMENT_TESTS[statement_type](node, self.source_code)
        return any(STATEMENT_TESTS[member](node, self.source_code) for member in statement_type)
