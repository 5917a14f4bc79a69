from romanmath.canonical import strip_separators, is_separator


def test_strips_ascii_spaces_everywhere():
    assert strip_separators(" X - V ") == "X-V"
    assert strip_separators("M CM") == "MCM"


def test_strips_unicode_separators():
    # NO-BREAK SPACE (Zs), LINE SEPARATOR (Zl), PARAGRAPH SEPARATOR (Zp)
    assert strip_separators("X\u00a0I\u2028I\u2029") == "XII"


def test_keeps_control_whitespace():
    assert strip_separators("X\tV\n") == "X\tV\n"


def test_none_is_empty():
    assert strip_separators(None) == ""


def test_is_separator():
    assert is_separator(" ")
    assert is_separator("\u3000")
    assert not is_separator("\t")
    assert not is_separator("X")
