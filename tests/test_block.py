"""Tests for Block rendering."""

from codeshape import Block, Format, block, clist, connected_block, fline, line, render


def test_empty_block():
    code = block("{", [], "}")
    assert str(code) == "{\n}"


def test_single_line_body():
    code = block("fn main() {", [line("foo();")], "}")
    assert render(code, Format(indent=4)) == "fn main() {\n    foo();\n}"


def test_custom_indent_and_tabs():
    code = block("trait A {", ["fn a();"], "}")
    assert render(code, Format(indent=3)) == "trait A {\n   fn a();\n}"
    assert render(code, Format.tab()) == "trait A {\n\tfn a();\n}"


def test_connected_else_block():
    code = block(
        "fn main() {",
        [
            block("if (foo) {", ['println!("Hello, world!");'], "}"),
            connected_block("else {", [fline("bar({});", "giz")], "}"),
        ],
        "}",
    )
    expected = "\n".join(
        [
            "fn main() {",
            "    if (foo) {",
            '        println!("Hello, world!");',
            "    } else {",
            "        bar(giz);",
            "    }",
            "}",
        ]
    )
    assert str(code) == expected


def test_connected_block_at_start_of_output_starts_a_line():
    code = connected_block("else {", ["x();"], "}")
    assert str(code) == "else {\n    x();\n}"


def test_connected_modifier_returns_new_block():
    base = block("else {", [], "}")
    joined = base.connected()
    assert joined.connect
    assert not base.connect


def test_forced_inline_block():
    assert str(block("{", ["a"], "}").inlined()) == "{ a }"
    assert str(block("{", ["a", "b"], "}").inlined()) == "{ a b }"


def test_forced_inline_empty_block():
    assert str(block("{", [], "}").inlined()) == "{ }"


def test_never_inline_overrides_intrinsic():
    inner = clist(",", ["1", "2"]).inlined()
    code = block("let x = [", [inner], "];").never_inline()
    assert str(code) == "let x = [\n    1, 2\n];"


def test_intrinsic_inline_needs_single_inline_child():
    one_inline = block("(", [clist(",", ["a", "b"]).inlined()], ")")
    assert one_inline.should_inline()
    assert str(one_inline) == "( a, b )"

    plain_line = block("(", ["a"], ")")
    assert not plain_line.should_inline()

    two_children = block(
        "(", [clist(",", ["a"]).inlined(), clist(",", ["b"]).inlined()], ")"
    )
    assert not two_children.should_inline()


def test_forced_inline_matches_intrinsic():
    """Forcing inline on a block that already inlines changes nothing."""
    body = [clist(",", ["1", "2", "3"]).inlined()]
    intrinsic = block("let b = {", body, "};")
    forced = block("let b = {", body, "};").inlined()
    assert str(intrinsic) == str(forced) == "let b = { 1, 2, 3 };"


def test_inline_when_receives_block():
    seen = []

    def short_body(b: Block) -> bool:
        seen.append(b)
        return len(b.body) == 1

    code = block("{", ["a"], "}").inline_when(short_body)
    assert str(code) == "{ a }"
    assert seen and seen[0] is code


def test_blank_lines_lose_their_indent():
    code = block("fn f() {", ["a();", line(), "b();", ""], "}")
    assert render(code) == "fn f() {\n    a();\n\n    b();\n\n}"


def test_nested_indentation():
    """Body lines of a block nested in N blocks get N+1 indent levels."""
    code = block(
        "a {", [block("b {", [block("c {", ["x"], "}")], "}")], "}"
    )
    assert render(code, Format(indent=2)).splitlines() == [
        "a {",
        "  b {",
        "    c {",
        "      x",
        "    }",
        "  }",
        "}",
    ]


def test_nested_blocks_with_inline_lists():
    def three_items(lst):
        return len(lst.body) == 3

    def body(inline_block):
        return [
            "let x = 1;",
            block(
                "let b = {",
                [clist(",", ["1", "2", "3"]).inline_when(three_items)],
                "};",
            ).inline_when(inline_block),
            block(
                "let b = {",
                [clist(",", ["1", "2", "3", "4"]).inline_when(three_items)],
                "};",
            ).inline_when(inline_block),
        ]

    code = block("while true {", body(Block.should_inline_intrinsic), "}")
    expected = "\n".join(
        [
            "while true {",
            "    let x = 1;",
            "    let b = { 1, 2, 3 };",
            "    let b = {",
            "        1,",
            "        2,",
            "        3,",
            "        4,",
            "    };",
            "}",
        ]
    )
    assert str(code) == expected


def test_block_size_hint():
    code = block("{", ["a", block("{", ["b"], "}")], "}")
    assert code.size_hint() == 6
    assert block("{", [], "}").size_hint() == 2


def test_block_body_accepts_single_item():
    assert block("{", "a", "}").body == block("{", ["a"], "}").body
