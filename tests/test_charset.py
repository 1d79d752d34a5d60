import pytest

from glyphatlas.charset import Charset, CharsetError


def _parsed(text, **kwargs):
    charset = Charset()
    charset.parse(text, **kwargs)
    return charset


def test_ascii_has_printable_range():
    ascii_set = Charset.ascii()
    assert len(ascii_set) == 95
    assert 0x20 in ascii_set
    assert 0x7E in ascii_set
    assert 0x7F not in ascii_set
    assert 0x1F not in ascii_set


def test_add_remove_and_order():
    charset = Charset()
    charset.add(300)
    charset.add(5)
    charset.add(300)
    assert list(charset) == [5, 300]
    charset.remove(300)
    charset.remove(999)
    assert list(charset) == [5]


def test_string_literal():
    assert _parsed('"abc"') == Charset(ord(c) for c in "abc")


def test_utf8_string_literal():
    assert _parsed('"\u00e9\u4e2d"') == Charset([0xE9, 0x4E2D])


def test_numbers_decimal_and_hex():
    assert _parsed("65, 0x42 0X43;") == Charset([65, 0x42, 0x43])


def test_char_literal_and_escapes():
    assert _parsed(r"'a' '\n' '\s' '\t' '\''") == Charset(
        [ord("a"), ord("\n"), ord(" "), ord("\t"), ord("'")]
    )


def test_char_range():
    assert _parsed("['a', 'e']") == Charset(range(ord("a"), ord("e") + 1))


def test_numeric_range_with_spaces():
    assert _parsed("[ 0x30 ; 0x39 ]") == Charset(range(0x30, 0x39 + 1))


def test_mixed_range_bounds():
    assert _parsed("[65, 'C']") == Charset([65, 66, 67])


def test_byte_order_mark_accepted():
    assert _parsed(b"\xef\xbb\xbf65") == Charset([65])


def test_byte_order_mark_only_at_start():
    with pytest.raises(CharsetError):
        _parsed(b"65 \xef\xbb\xbf")


def test_include_ignored_when_parsing_string():
    assert _parsed('@include "other.txt" 65') == Charset([65])


@pytest.mark.parametrize(
    "text",
    [
        "'ab'",
        "''",
        "[65]",
        "[65, 70",
        "'a''b'",
        "65'a'",
        '"abc',
        "@foo",
        "@include other",
        "0xZZ",
        "12a",
        "]",
        "[[65, 66]]",
        "#",
        "[65 66]",
    ],
)
def test_malformed_input_raises(text):
    with pytest.raises(CharsetError):
        _parsed(text)


def test_char_literals_can_be_disabled():
    with pytest.raises(CharsetError):
        _parsed("'a'", disable_char_literals=True)
    with pytest.raises(CharsetError):
        _parsed('"a"', disable_char_literals=True)
    assert _parsed("97", disable_char_literals=True) == Charset([97])


def test_values_before_error_are_kept():
    charset = Charset()
    with pytest.raises(CharsetError):
        charset.parse('65 "unterminated')
    assert 65 in charset


def test_escaped_nul_ends_string():
    assert _parsed(r'"ab\0cd"') == Charset([ord("a"), ord("b")])


def test_load_with_include(tmp_path):
    sub = tmp_path / "sets"
    sub.mkdir()
    (sub / "more.txt").write_text('"B"', encoding="utf-8")
    main = sub / "main.txt"
    main.write_text('@include "more.txt"\n65\n', encoding="utf-8")
    charset = Charset()
    charset.load(main)
    assert charset == Charset([65, ord("B")])


def test_load_ignores_failing_include(tmp_path):
    main = tmp_path / "main.txt"
    main.write_text('@include "missing.txt" 70', encoding="utf-8")
    charset = Charset()
    charset.load(str(main))
    assert charset == Charset([70])


def test_load_reports_syntax_error(tmp_path):
    bad = tmp_path / "bad.txt"
    bad.write_text("[65", encoding="utf-8")
    with pytest.raises(CharsetError):
        Charset().load(bad)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Charset().load(tmp_path / "absent.txt")