"""Conversion of tree-sitter JavaScript/TypeScript trees into ESTree-shaped nodes.

tree-sitter keeps every syntactic detail (parentheses, switch bodies, the
``declare`` wrapper) as its own node; ESTree folds several of these into
their owner. The builder below applies those foldings so lint rules written
against ESTree semantics see the node shapes they expect, and it also
produces the flat token and comment lists used by ``SourceCode``.
"""

import re
from typing import Callable, Dict, List, Optional, Tuple

from tree_sitter import Node as TSNode

from .node_types import Node, Token
from .source_code import LineIndex

TYPE_MAP: Dict[str, str] = {
    "program": "Program",
    "expression_statement": "ExpressionStatement",
    "variable_declaration": "VariableDeclaration",
    "lexical_declaration": "VariableDeclaration",
    "using_declaration": "VariableDeclaration",
    "variable_declarator": "VariableDeclarator",
    "statement_block": "BlockStatement",
    "if_statement": "IfStatement",
    "for_statement": "ForStatement",
    "while_statement": "WhileStatement",
    "do_statement": "DoWhileStatement",
    "try_statement": "TryStatement",
    "catch_clause": "CatchClause",
    "switch_statement": "SwitchStatement",
    "switch_case": "SwitchCase",
    "switch_default": "SwitchCase",
    "return_statement": "ReturnStatement",
    "throw_statement": "ThrowStatement",
    "break_statement": "BreakStatement",
    "continue_statement": "ContinueStatement",
    "debugger_statement": "DebuggerStatement",
    "with_statement": "WithStatement",
    "labeled_statement": "LabeledStatement",
    "empty_statement": "EmptyStatement",
    "function_declaration": "FunctionDeclaration",
    "generator_function_declaration": "FunctionDeclaration",
    "function_expression": "FunctionExpression",
    "function": "FunctionExpression",
    "generator_function": "FunctionExpression",
    "arrow_function": "ArrowFunctionExpression",
    "class_declaration": "ClassDeclaration",
    "abstract_class_declaration": "ClassDeclaration",
    "class": "ClassExpression",
    "class_body": "ClassBody",
    "class_static_block": "StaticBlock",
    "method_definition": "MethodDefinition",
    "import_statement": "ImportDeclaration",
    "new_expression": "NewExpression",
    "unary_expression": "UnaryExpression",
    "update_expression": "UpdateExpression",
    "binary_expression": "BinaryExpression",
    "assignment_expression": "AssignmentExpression",
    "augmented_assignment_expression": "AssignmentExpression",
    "await_expression": "AwaitExpression",
    "sequence_expression": "SequenceExpression",
    "member_expression": "MemberExpression",
    "subscript_expression": "MemberExpression",
    "object": "ObjectExpression",
    "array": "ArrayExpression",
    "template_string": "TemplateLiteral",
    "identifier": "Identifier",
    "string": "Literal",
    "number": "Literal",
    "regex": "Literal",
    "true": "Literal",
    "false": "Literal",
    "null": "Literal",
    # TypeScript
    "interface_declaration": "TSInterfaceDeclaration",
    "interface_body": "TSInterfaceBody",
    "object_type": "TSTypeLiteral",
    "type_alias_declaration": "TSTypeAliasDeclaration",
    "enum_declaration": "TSEnumDeclaration",
    "function_signature": "TSDeclareFunction",
    "method_signature": "TSMethodSignature",
    "property_signature": "TSPropertySignature",
    "module": "TSModuleDeclaration",
    "internal_module": "TSModuleDeclaration",
    "import_alias": "TSImportEqualsDeclaration",
}

COMMENT_TYPES = {"comment": "Block", "html_comment": "Line", "hash_bang_line": "Shebang"}
ATOMIC_TOKEN_TYPES = {"string": "String", "regex": "RegularExpression", "number": "Numeric"}
NAMED_LEAF_TOKEN_TYPES = {
    "true": "Boolean",
    "false": "Boolean",
    "null": "Null",
    "this": "Keyword",
    "super": "Keyword",
    "jsx_text": "JSXText",
}
MODULE_TYPES = ("module", "internal_module", "ambient_declaration")
CHAIN_LINK_FIELDS = {"call_expression": "function", "member_expression": "object", "subscript_expression": "object"}
WORD_PATTERN = re.compile(r"^#?[\w$]+$")


def _camel_case(ts_type: str) -> str:
    return "".join(part.capitalize() for part in ts_type.split("_"))


class ByteOffsets:
    """Translates tree-sitter UTF-8 byte offsets into string indices"""

    def __init__(self, text: str):
        self._table: Optional[List[int]] = None
        if not text.isascii():
            table = []
            for index, char in enumerate(text):
                table.extend([index] * len(char.encode("utf-8")))
            table.append(len(text))
            self._table = table

    def __call__(self, byte_offset: int) -> int:
        if self._table is None:
            return byte_offset
        return self._table[byte_offset]


class ESTreeBuilder:
    """Builds ``Node`` graphs and token lists from a tree-sitter tree"""

    def __init__(self, text: str, line_index: LineIndex):
        self.text = text
        self.line_index = line_index
        self.offset = ByteOffsets(text)
        self.tokens: List[Token] = []
        self.comments: List[Token] = []
        self._handlers: Dict[str, Callable[[TSNode, Node], None]] = {
            "expression_statement": self._expression_statement,
            "call_expression": self._call_expression,
            "unary_expression": self._unary_expression,
            "sequence_expression": self._sequence_expression,
            "labeled_statement": self._labeled_statement,
            "do_statement": self._do_statement,
            "switch_statement": self._switch_statement,
            "class_static_block": self._flattened_block,
            "statement_block": self._statement_block,
            "program": self._statement_list,
            "variable_declaration": self._variable_declaration,
            "lexical_declaration": self._variable_declaration,
            "using_declaration": self._variable_declaration,
            "method_definition": self._method_definition,
            "string": self._literal,
            "number": self._literal,
            "regex": self._literal,
            "true": self._literal,
            "false": self._literal,
            "null": self._literal,
        }

    # Offsets and locations

    def _range(self, ts: TSNode) -> Tuple[int, int]:
        return self.offset(ts.start_byte), self.offset(ts.end_byte)

    def _new_node(self, node_type: str, start: int, end: int, parent: Optional[Node]) -> Node:
        return Node(
            type=node_type,
            range=(start, end),
            loc=self.line_index.location(start, end),
            parent=parent,
        )

    # Tokens

    def collect_tokens(self, root: TSNode) -> None:
        self._collect(root)
        self.tokens.sort(key=lambda t: t.range[0])
        self.comments.sort(key=lambda t: t.range[0])

    def _push_token(self, target: List[Token], token_type: Optional[str], ts: TSNode) -> None:
        start, end = self._range(ts)
        if start == end:
            # tree-sitter inserts zero-width MISSING leaves during error recovery
            return
        value = self.text[start:end]
        target.append(
            Token(
                type=token_type or self._leaf_token_type(ts, value),
                value=value,
                range=(start, end),
                loc=self.line_index.location(start, end),
            )
        )

    def _collect(self, ts: TSNode) -> None:
        if ts.type in COMMENT_TYPES:
            token_type = COMMENT_TYPES[ts.type]
            if token_type == "Block" and self.text.startswith("//", self.offset(ts.start_byte)):
                token_type = "Line"
            self._push_token(self.comments, token_type, ts)
        elif ts.is_named and ts.type in ATOMIC_TOKEN_TYPES:
            self._push_token(self.tokens, ATOMIC_TOKEN_TYPES[ts.type], ts)
        elif ts.type == "template_string":
            for child in ts.children:
                if child.type == "template_substitution" or child.type in COMMENT_TYPES:
                    self._collect(child)
                else:
                    self._push_token(self.tokens, "Template", child)
        elif ts.child_count == 0:
            self._push_token(self.tokens, None, ts)
        else:
            for child in ts.children:
                self._collect(child)

    @staticmethod
    def _leaf_token_type(ts: TSNode, value: str) -> str:
        if ts.type in NAMED_LEAF_TOKEN_TYPES:
            return NAMED_LEAF_TOKEN_TYPES[ts.type]
        if not WORD_PATTERN.match(value):
            return "Punctuator"
        return "Identifier" if ts.is_named else "Keyword"

    # Nodes

    def build(self, root: TSNode) -> Node:
        program = self._new_node("Program", 0, len(self.text), None)
        self._statement_list(root, program)
        return program

    def convert(self, ts: TSNode, parent: Optional[Node]) -> Optional[Node]:
        """Convert one named tree-sitter node; returns None for skipped nodes"""
        if ts.type in COMMENT_TYPES or not ts.is_named:
            return None
        if ts.type == "parenthesized_expression":
            return self._parenthesized(ts, parent)
        if ts.type == "ambient_declaration":
            return self._ambient_declaration(ts, parent)
        if ts.type == "expression_statement":
            module = self._wrapped_module(ts)
            if module is not None:
                node = self.convert(module, parent)
                self._widen(node, ts)
                return node
        if ts.type in CHAIN_LINK_FIELDS and self._starts_chain(ts):
            return self._chain_expression(ts, parent)

        start, end = self._range(ts)
        node = self._new_node(self._node_type(ts), start, end, parent)
        handler = self._handlers.get(ts.type, self._generic)
        handler(ts, node)
        return node

    def _node_type(self, ts: TSNode) -> str:
        if ts.type == "for_in_statement":
            of = any(not c.is_named and c.type == "of" for c in ts.children)
            return "ForOfStatement" if of else "ForInStatement"
        if ts.type == "export_statement":
            if any(c.type in ("*", "namespace_export") for c in ts.children):
                return "ExportAllDeclaration"
            if any(not c.is_named and c.type == "default" for c in ts.children):
                return "ExportDefaultDeclaration"
            return "ExportNamedDeclaration"
        if ts.type == "statement_block" and ts.parent is not None and ts.parent.type in MODULE_TYPES:
            return "TSModuleBlock"
        if ts.type == "object_type" and ts.parent is not None and ts.parent.type == "interface_declaration":
            return "TSInterfaceBody"
        if ts.type == "call_expression":
            arguments = ts.child_by_field_name("arguments")
            if arguments is not None and arguments.type == "template_string":
                return "TaggedTemplateExpression"
            return "CallExpression"
        return TYPE_MAP.get(ts.type, _camel_case(ts.type))

    def _convert_children(self, ts: TSNode, node: Node) -> List[Node]:
        converted = []
        for child in ts.named_children:
            child_node = self.convert(child, node)
            if child_node is not None:
                converted.append(child_node)
        node.children.extend(converted)
        return converted

    def _generic(self, ts: TSNode, node: Node) -> None:
        self._convert_children(ts, node)

    def _widen(self, node: Optional[Node], ts: TSNode) -> None:
        if node is None:
            return
        start, end = self._range(ts)
        node.range = (start, end)
        node.loc = self.line_index.location(start, end)

    def _field(self, ts: TSNode, node: Node, name: str) -> Optional[Node]:
        """Find the converted child that came from field ``name``"""
        field = ts.child_by_field_name(name)
        if field is None:
            return None
        start = self.offset(field.start_byte)
        end = self.offset(field.end_byte)
        for child in node.children:
            if start <= child.range[0] and child.range[1] <= end:
                return child
        return None

    # Handlers

    def _statement_list(self, ts: TSNode, node: Node) -> None:
        node.body = self._convert_children(ts, node)

    def _statement_block(self, ts: TSNode, node: Node) -> None:
        self._statement_list(ts, node)

    def _flattened_block(self, ts: TSNode, node: Node) -> None:
        # ESTree keeps the braces and statements of a static block on the block itself
        node.body = []
        for child in ts.named_children:
            if child.type == "statement_block":
                node.body.extend(self._convert_children(child, node))
            else:
                self._push_child(child, node)

    def _push_child(self, child: TSNode, node: Node) -> None:
        child_node = self.convert(child, node)
        if child_node is not None:
            node.children.append(child_node)

    def _switch_statement(self, ts: TSNode, node: Node) -> None:
        for child in ts.named_children:
            if child.type == "switch_body":
                self._convert_children(child, node)
            else:
                self._push_child(child, node)

    def _expression_statement(self, ts: TSNode, node: Node) -> None:
        children = self._convert_children(ts, node)
        node.expression = children[0] if children else None

    def _parenthesized(self, ts: TSNode, parent: Optional[Node]) -> Optional[Node]:
        inner = [c for c in ts.named_children if c.type not in COMMENT_TYPES]
        if len(inner) != 1:
            start, end = self._range(ts)
            node = self._new_node("ParenthesizedExpression", start, end, parent)
            self._generic(ts, node)
            return node
        return self.convert(inner[0], parent)

    def _ambient_declaration(self, ts: TSNode, parent: Optional[Node]) -> Node:
        inner = [c for c in ts.named_children if c.type not in COMMENT_TYPES]
        if len(inner) == 1 and inner[0].type != "statement_block":
            node = self.convert(inner[0], parent)
            if node is not None:
                self._widen(node, ts)
                return node
        start, end = self._range(ts)
        node = self._new_node("TSModuleDeclaration", start, end, parent)
        self._generic(ts, node)
        return node

    @staticmethod
    def _wrapped_module(ts: TSNode) -> Optional[TSNode]:
        named = [c for c in ts.named_children if c.type not in COMMENT_TYPES]
        if len(named) == 1 and named[0].type == "internal_module":
            return named[0]
        return None

    def _variable_declaration(self, ts: TSNode, node: Node) -> None:
        self._convert_children(ts, node)
        if ts.type == "variable_declaration":
            node.kind = "var"
            return
        kind = ts.child_by_field_name("kind")
        if kind is not None and ts.type == "lexical_declaration":
            node.kind = self.text[self.offset(kind.start_byte) : self.offset(kind.end_byte)]
        else:
            # using_declaration marks only "await" as its kind field
            words = []
            for child in ts.children:
                if child.is_named or not WORD_PATTERN.match(child.type):
                    break
                words.append(child.type)
            node.kind = " ".join(words)

    def _labeled_statement(self, ts: TSNode, node: Node) -> None:
        self._convert_children(ts, node)
        node.body = self._field(ts, node, "body") or (node.children[-1] if node.children else None)

    def _do_statement(self, ts: TSNode, node: Node) -> None:
        self._convert_children(ts, node)
        node.body = self._field(ts, node, "body")

    def _unary_expression(self, ts: TSNode, node: Node) -> None:
        self._convert_children(ts, node)
        operator = ts.child_by_field_name("operator")
        if operator is not None:
            node.operator = operator.type
        node.argument = self._field(ts, node, "argument")

    def _call_expression(self, ts: TSNode, node: Node) -> None:
        self._convert_children(ts, node)
        node.callee = self._field(ts, node, "function")

    def _sequence_expression(self, ts: TSNode, node: Node) -> None:
        node.expressions = []
        self._flatten_sequence(ts, node)
        node.children.extend(node.expressions)

    def _flatten_sequence(self, ts: TSNode, node: Node) -> None:
        for child in ts.named_children:
            if child.type == "sequence_expression":
                self._flatten_sequence(child, node)
                continue
            child_node = self.convert(child, node)
            if child_node is not None:
                node.expressions.append(child_node)

    def _method_definition(self, ts: TSNode, node: Node) -> None:
        # ESTree models a method's parameters and body as a FunctionExpression value
        parameters = ts.child_by_field_name("parameters")
        body = ts.child_by_field_name("body")
        if parameters is None or body is None:
            self._generic(ts, node)
            return
        function_node = self._new_node(
            "FunctionExpression",
            self.offset(parameters.start_byte),
            self.offset(body.end_byte),
            node,
        )
        for child in ts.named_children:
            if child.start_byte < parameters.start_byte:
                self._push_child(child, node)
                continue
            if not node.children or node.children[-1] is not function_node:
                node.children.append(function_node)
            self._push_child(child, function_node)

    def _literal(self, ts: TSNode, node: Node) -> None:
        raw = self.text[node.range[0] : node.range[1]]
        node.raw = raw
        if ts.type == "string":
            node.value = raw[1:-1]

    # Optional chains

    def _starts_chain(self, ts: TSNode) -> bool:
        parent = ts.parent
        if parent is not None and parent.type in CHAIN_LINK_FIELDS:
            link = parent.child_by_field_name(CHAIN_LINK_FIELDS[parent.type])
            if link is not None and link.start_byte == ts.start_byte and link.end_byte == ts.end_byte:
                return False
        return self._has_optional_link(ts)

    def _has_optional_link(self, ts: Optional[TSNode]) -> bool:
        while ts is not None and ts.type in CHAIN_LINK_FIELDS:
            if any(c.type == "optional_chain" for c in ts.children):
                return True
            ts = ts.child_by_field_name(CHAIN_LINK_FIELDS[ts.type])
        return False

    def _chain_expression(self, ts: TSNode, parent: Optional[Node]) -> Node:
        start, end = self._range(ts)
        chain = self._new_node("ChainExpression", start, end, parent)
        inner = self._new_node(self._node_type(ts), start, end, chain)
        self._handlers.get(ts.type, self._generic)(ts, inner)
        chain.children.append(inner)
        chain.expression = inner
        return chain
