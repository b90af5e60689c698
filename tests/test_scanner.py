from padline_linter.scanner import BlankLineScanner, get_actual_last_token
from padline_tree_sitter import JSParser


def scan(code):
    result = JSParser().parse_string(code)
    prev_node, next_node = result.program.body[:2]
    pairs = BlankLineScanner(result.source_code).scan(prev_node, next_node)
    return [(left.value, right.value) for left, right in pairs]


def test_adjacent_lines_have_no_region():
    assert scan("a();\nb();") == []


def test_same_line_has_no_region():
    assert scan("a(); b();") == []


def test_single_blank_line():
    assert scan("a();\n\nb();") == [(";", "b")]


def test_several_blank_lines_are_one_region():
    assert scan("a();\n\n\n\nb();") == [(";", "b")]


def test_blank_lines_around_comment_are_separate_regions():
    assert scan("a();\n\n// note\n\nb();") == [(";", "// note"), ("// note", "b")]


def test_comment_on_its_own_line_is_not_a_blank_line():
    assert scan("a();\n// note\nb();") == []


def test_blank_line_after_trailing_comment():
    assert scan("a(); // note\n\nb();") == [("// note", "b")]


def test_whitespace_only_line_counts_as_blank():
    assert scan("a();\n   \nb();") == [(";", "b")]


def test_crlf_line_endings():
    assert scan("a();\r\n\r\nb();") == [(";", "b")]


def test_dangling_semicolon_is_not_the_boundary():
    result = JSParser().parse_string("foo()\n;[1, 2].forEach(bar)")
    first = result.program.body[0]

    assert result.source_code.get_last_token(first).value == ";"
    assert get_actual_last_token(first, result.source_code).value == ")"


def test_region_before_dangling_semicolon():
    assert scan("foo()\n\n;[1, 2].forEach(bar)") == [(")", ";")]


def test_semicolon_on_same_line_is_the_boundary():
    result = JSParser().parse_string("foo();\nbar();")
    first = result.program.body[0]

    assert get_actual_last_token(first, result.source_code).value == ";"
