from codeshape.fragment.buffer import append_line, append_to_last


def test_append_to_empty_buffer_ignores_connect():
    out = []
    append_line(out, "foo", True, "    ")
    assert out == ["    foo"]


def test_append_new_line_with_indent():
    out = ["a"]
    append_line(out, "b", False, "  ")
    assert out == ["a", "  b"]


def test_append_without_indent():
    out = []
    append_line(out, "b", False, "")
    assert out == ["b"]


def test_connect_adds_single_space():
    out = ["}"]
    append_line(out, "else {", True, "")
    assert out == ["} else {"]


def test_connect_onto_indent_only_line_has_no_space():
    out = ["    "]
    append_line(out, "x", True, "    ")
    assert out == ["    x"]


def test_connect_onto_empty_line_has_no_space():
    out = [""]
    append_line(out, "x", True, "    ")
    assert out == ["x"]


def test_whitespace_only_previous_line_is_blanked():
    """A blank line emitted at some indent must not keep trailing spaces."""
    out = ["fn main() {", "    "]
    append_line(out, "}", False, "")
    assert out == ["fn main() {", "", "}"]


def test_previous_line_with_content_is_kept():
    out = ["    foo"]
    append_line(out, "bar", False, "    ")
    assert out == ["    foo", "    bar"]


def test_embedded_newline_is_opaque():
    out = []
    append_line(out, "a\nb", False, "  ")
    assert out == ["  a\nb"]


def test_append_to_last():
    out = ["a"]
    append_to_last(out, ",")
    assert out == ["a,"]

    empty = []
    append_to_last(empty, ",")
    assert empty == []
