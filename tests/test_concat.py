from codeshape import Concat, block, clist, concat, line


def test_empty():
    assert concat() == Concat(())
    assert concat().is_empty()
    assert str(concat()) == ""


def test_one():
    assert concat(line("Hello, World!")) == Concat((line("Hello, World!"),))


def test_mixed():
    code = concat(
        "Hello, World!",
        block("if (x) {", ["y();"], "}"),
        line(),
        block("if (x2) {", ["y2();"], "}"),
    )
    assert str(code) == "Hello, World!\nif (x) {\n    y();\n}\n\nif (x2) {\n    y2();\n}"


def test_functions_separated_by_blank_line():
    code = concat(
        block("fn main() {", ["foo();"], "}"),
        line(),
        block("fn foo() {", ["bar();"], "}"),
    )
    assert str(code) == "fn main() {\n    foo();\n}\n\nfn foo() {\n    bar();\n}"


def test_connected_block_inside_concat():
    code = block(
        "{",
        [
            block("if (a) {", ["x();"], "}"),
            concat(block("else {", ["y();"], "}").connected(), "z();"),
        ],
        "}",
    )
    assert str(code).splitlines() == [
        "{",
        "    if (a) {",
        "        x();",
        "    } else {",
        "        y();",
        "    }",
        "    z();",
        "}",
    ]


def test_connect_passes_through_to_first_child():
    code = block("(", [concat("a", "b")], ")").inlined()
    assert str(code) == "( a\nb )"


def test_emptiness():
    assert concat(concat(), clist(",", [])).is_empty()
    assert not concat("").is_empty()
    assert not concat(block("{", [], "}")).is_empty()


def test_size_hint():
    assert concat("a", block("{", ["b"], "}"), concat()).size_hint() == 4
