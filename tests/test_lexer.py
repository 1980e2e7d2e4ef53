"""Test tokenizing of the CMap grammar: scalars, names, strings, containers, comments."""

import pytest

from pycmapproc.errors import CMapLexError
from pycmapproc.parser.cmap import TokenKind

from .conftest import assert_types, assert_values


class TestScalars:
    def test_booleans(self, lex):
        tokens = lex("true false")
        assert_types(tokens, ["BOOL", "BOOL"])
        assert_values(tokens, [True, False])

    def test_boolean_prefix_is_operator(self, lex):
        tokens = lex("trueish")
        assert_types(tokens, ["OP"])
        assert_values(tokens, ["trueish"])

    def test_integers(self, lex):
        tokens = lex("12 -3 +4 0")
        assert_types(tokens, ["INT", "INT", "INT", "INT"])
        assert_values(tokens, [12, -3, 4, 0])

    def test_reals(self, lex):
        tokens = lex("1.5 -.5 3. +0.25")
        assert_types(tokens, ["NUMBER"] * 4)
        assert_values(tokens, ["1.5", "-.5", "3.", "+0.25"])

    def test_version_number_is_one_token(self, lex):
        tokens = lex("10.004")
        assert_types(tokens, ["NUMBER"])
        assert tokens[0].value == "10.004"

    def test_operators(self, lex):
        tokens = lex("beginbfchar * ' \" endcmap")
        assert_types(tokens, ["OP"] * 5)
        assert_values(tokens, ["beginbfchar", "*", "'", '"', "endcmap"])


class TestNames:
    def test_simple(self, lex):
        tokens = lex("/Identity-H usecmap")
        assert_types(tokens, ["NAME", "OP"])
        assert tokens[0].value == b"Identity-H"

    def test_hex_escape(self, lex):
        tokens = lex("/A#20B /#2F")
        assert_values(tokens, [b"A B", b"/"])

    def test_empty_name(self, lex):
        tokens = lex("/ 1")
        assert_types(tokens, ["NAME", "INT"])
        assert tokens[0].value == b""

    def test_terminated_by_delimiter(self, lex):
        tokens = lex("/a(b)/c[1]")
        assert_types(tokens, ["NAME", "LIT", "NAME", "ARR"])
        assert_values(tokens[:3], [b"a", b"b", b"c"])

    def test_high_bytes_kept(self, lex):
        tokens = lex(b"/\xe9t\xe9")
        assert tokens[0].value == b"\xe9t\xe9"

    def test_str_is_utf8(self, lex):
        tokens = lex("/\u20ac")
        assert tokens[0].value == b"\xe2\x82\xac"


class TestLiteralStrings:
    def test_plain(self, lex):
        tokens = lex("(Adobe)")
        assert_types(tokens, ["LIT"])
        assert tokens[0].value == b"Adobe"

    def test_empty(self, lex):
        assert lex("()")[0].value == b""

    def test_balanced_parentheses_preserved(self, lex):
        assert lex("(a(b)c)")[0].value == b"a(b)c"

    def test_deeply_nested(self, lex):
        assert lex("(a(b(c))d)")[0].value == b"a(b(c))d"

    def test_escaped_parenthesis(self, lex):
        assert lex(r"(\()")[0].value == b"("
        assert lex(r"(\))")[0].value == b")"

    def test_escapes_inside_nested_group(self, lex):
        assert lex(r"(x(\)y)z)")[0].value == b"x()y)z"

    def test_nesting_has_no_depth_limit(self, lex):
        tokens = lex(b"(" * 5000 + b")" * 5000 + b" 1")
        assert_types(tokens, ["LIT", "INT"])
        assert tokens[0].value == b"(" * 4999 + b")" * 4999

    def test_escapes_at_depth(self, lex):
        assert lex(r"(((\101\n)))")[0].value == b"((A\n))"

    def test_unbalanced_deep_nesting(self, lex):
        with pytest.raises(CMapLexError):
            lex(b"(" * 5000 + b")" * 4999)

    def test_str_is_utf8(self, lex):
        assert lex("(\u20ac)")[0].value == b"\xe2\x82\xac"

    def test_single_character_escapes(self, lex):
        assert lex(r"(\n\r\t\b\f\\)")[0].value == b"\n\r\t\x08\x0c\\"

    def test_octal_escapes(self, lex):
        assert lex(r"(\101\60\0)")[0].value == b"A0\x00"

    def test_octal_escape_takes_at_most_three_digits(self, lex):
        assert lex(r"(\1012)")[0].value == b"A2"

    def test_octal_overflow_wraps(self, lex):
        assert lex(r"(\777)")[0].value == b"\xff"

    def test_line_continuation(self, lex):
        assert lex("(ab\\\ncd)")[0].value == b"abcd"
        assert lex("(ab\\\r\ncd)")[0].value == b"abcd"
        assert lex("(ab\\\rcd)")[0].value == b"abcd"

    def test_unknown_escape_drops_backslash(self, lex):
        assert lex(r"(\q)")[0].value == b"q"

    def test_raw_newline_kept(self, lex):
        assert lex("(a\nb)")[0].value == b"a\nb"

    def test_followed_by_tokens(self, lex):
        tokens = lex("(a) 1")
        assert_types(tokens, ["LIT", "INT"])


class TestHexStrings:
    def test_decoded(self, lex):
        tokens = lex("<0041> <> <aBcD>")
        assert_types(tokens, ["LIT", "LIT", "LIT"])
        assert_values(tokens, [b"\x00A", b"", b"\xab\xcd"])

    def test_same_kind_as_literal(self, lex):
        assert lex("<41>")[0].type == lex("(A)")[0].type
        assert lex("<41>")[0].value == lex("(A)")[0].value


class TestContainers:
    def test_array(self, lex):
        tokens = lex("[<01> /a [1 2]]")
        assert_types(tokens, ["ARR"])
        assert_types(tokens[0].value, ["LIT", "NAME", "ARR"])
        assert_values(tokens[0].value[2].value, [1, 2])

    def test_empty_array(self, lex):
        tokens = lex("[]")
        assert tokens[0].value == []

    def test_array_of_strings(self, lex):
        tokens = lex("[<0041> (B)]")
        assert_values(tokens[0].value, [b"\x00A", b"B"])

    def test_dictionary(self, lex):
        tokens = lex("<< /Registry (Adobe) /Supplement 0 >>")
        assert_types(tokens, ["DICT"])
        d = tokens[0].value
        assert sorted(d.keys()) == ["Registry", "Supplement"]
        assert d["Registry"].value == b"Adobe"
        assert d["Supplement"].value == 0

    def test_nested_dictionary(self, lex):
        tokens = lex("<</A <</B [1]>> >>")
        inner = tokens[0].value["A"]
        assert inner.type == "DICT"
        assert inner.value["B"].type == "ARR"

    def test_dictionary_next_to_hex_string(self, lex):
        tokens = lex("<</A <01>>> <02>")
        assert_types(tokens, ["DICT", "LIT"])
        assert tokens[0].value["A"].value == b"\x01"


class TestWhitespaceAndComments:
    def test_comments_skipped(self, lex):
        tokens = lex("% comment\n1 % another\n2")
        assert_values(tokens, [1, 2])

    def test_comment_at_end(self, lex):
        tokens = lex("1 %%EOF")
        assert_values(tokens, [1])

    def test_nul_is_whitespace(self, lex):
        tokens = lex(b"1\x002\x0c3")
        assert_values(tokens, [1, 2, 3])

    def test_empty_input(self, lex):
        assert lex("") == []
        assert lex("  % nothing\n") == []

    def test_line_numbers(self, lex):
        tokens = lex("1\n2\n(a\nb)\n/x")
        assert [t.lineno for t in tokens] == [1, 2, 3, 5]

    def test_line_endings(self, lex):
        tokens = lex("1\r2\r\n3\n4\r\r5")
        assert [t.lineno for t in tokens] == [1, 2, 3, 4, 6]

    def test_line_endings_in_literal(self, lex):
        tokens = lex("(a\rb\r\nc) /x")
        assert tokens[1].lineno == 3

    def test_bytes_and_str_agree(self, lex):
        a = lex(b"1 beginbfchar <01> <0041> endbfchar")
        b = lex("1 beginbfchar <01> <0041> endbfchar")
        assert [(t.type, t.value) for t in a] == [(t.type, t.value) for t in b]

    def test_no_state_between_calls(self, lex):
        lex("1\n2\n3")
        tokens = lex("x")
        assert tokens[0].lineno == 1
        assert tokens[0].lexpos == 0


class TestTokenKind:
    @pytest.mark.parametrize(
        "source, kind",
        [
            ("(a)", "LiteralString"),
            ("<61>", "LiteralString"),
            ("/a", "Name"),
            ("1.5", "Number"),
            ("1", "Integer"),
            ("[]", "Array"),
            ("def", "Operator"),
            ("true", "Boolean"),
            ("<< >>", "Dictionary"),
        ],
    )
    def test_kind_names(self, lex, source, kind):
        assert TokenKind(lex(source)[0]) == kind


class TestLexErrors:
    @pytest.mark.parametrize(
        "source",
        [
            "<0G>",
            "<123>",
            "(abc",
            "(abc\\",
            "[1 2",
            "]",
            ">>",
            ")",
            "{ }",
            "<< 1 2 >>",
            "<< /a >>",
            "/a#zz",
            "[1 >>",
            "<< /a 1 ]",
        ],
    )
    def test_rejected(self, lex, source):
        with pytest.raises(CMapLexError):
            lex(source)

    def test_position_reported(self, lex):
        with pytest.raises(CMapLexError) as exc:
            lex("1 2\n  }")
        assert exc.value.lineno == 2
        assert exc.value.lexpos == 6
        assert "line 2" in str(exc.value)

    def test_position_with_cr_line_endings(self, lex):
        with pytest.raises(CMapLexError) as exc:
            lex("1\r2\r  }")
        assert exc.value.lineno == 3
        assert exc.value.lexpos == 6

    def test_whole_input_fails(self, lex):
        # Nothing is returned for the part before the error
        with pytest.raises(CMapLexError):
            lex("1 begincodespacerange <00> <0G> endcodespacerange")
