"""Tests for binary-safe value rendering."""

import string

from leveldb_browser.render import render, pretty_json, reindent, mixed_content, b64_marker


class TestJson:
    """Test the JSON pretty-printing path."""

    def test_object_is_indented_two_spaces(self):
        """Compact JSON comes back two-space indented."""
        assert render(b'{"a":1}') == '{\n  "a": 1\n}'

    def test_nested_document_keeps_key_order(self):
        """Object member order is preserved."""
        out = render(b'{"z":[1,2],"a":{"b":null}}')
        assert out == ('{\n  "z": [\n    1,\n    2\n  ],\n'
                       '  "a": {\n    "b": null\n  }\n}')

    def test_non_ascii_kept_verbatim(self):
        """UTF-8 text inside JSON strings is not escaped."""
        assert render('{"k":"é"}'.encode()) == '{\n  "k": "é"\n}'

    def test_del_inside_string_is_escaped(self):
        """Control characters json leaves raw are escaped in the output."""
        out = render(b'["a\x7fb"]')
        assert "\x7f" not in out
        assert "\\u007f" in out

    def test_nan_is_not_json(self):
        """Python-only constants do not count as JSON."""
        assert pretty_json(b"NaN") is None
        assert render(b"[NaN]") == "[NaN]"

    def test_utf16_lookalike_is_not_json(self):
        """Bytes are only read as UTF-8, so '1\\x00' is binary-tagged text."""
        assert pretty_json(b"1\x00") is None
        assert render(b"1\x00") == "1[b64:AA]"

    def test_duplicate_members_are_all_shown(self):
        """Repeated object members are displayed as stored, not merged."""
        assert render(b'{"a":1,"a":2}') == '{\n  "a": 1,\n  "a": 2\n}'

    def test_out_of_range_number_kept_verbatim(self):
        """A number too large for a float is not turned into Infinity."""
        assert render(b'[1e400]') == '[\n  1e400\n]'

    def test_number_precision_kept(self):
        """Number literals are copied digit for digit."""
        assert render(b'[0.10000000000000000001, 1e5, -0]') == \
            '[\n  0.10000000000000000001,\n  1e5,\n  -0\n]'

    def test_huge_integer_is_still_json(self):
        """Integers beyond int() digit limits are recognised and kept."""
        digits = "9" * 5000
        assert render(f"[{digits}]".encode()) == f"[\n  {digits}\n]"

    def test_string_escapes_kept(self):
        """Escapes inside strings are not decoded."""
        assert render(b'{"k":"\\u00e9\\n"}') == '{\n  "k": "\\u00e9\\n"\n}'

    def test_whitespace_is_normalised(self):
        """Stored whitespace is replaced, empty containers stay compact."""
        assert render(b' {\r\n"a" :\t[ ],"b":{ } }\n') == '{\n  "a": [],\n  "b": {}\n}'
        assert render(b" 1") == "1"

    def test_reindent_handles_brackets_inside_strings(self):
        """Structural characters inside strings are left alone."""
        assert reindent('["{,:]\\"}"]') == '[\n  "{,:]\\"}"\n]'

    def test_invalid_json(self):
        """Truncated JSON falls through to mixed rendering unchanged."""
        assert render(b'{"a":') == '{"a":'


class TestMixedContent:
    """Test text/binary interleaving."""

    def test_null_between_letters(self):
        """A lone NUL becomes an unpadded base64 marker between the letters."""
        assert render(b"A\x00B") == "A[b64:AA]B"

    def test_binary_run_is_merged(self):
        """Consecutive non-printable bytes share one marker."""
        assert render(b"\x00\x01\x02") == "[b64:AAEC]"

    def test_printable_ascii_unchanged(self):
        """Printable ASCII never produces markers."""
        text = "".join(ch for ch in string.printable if ch not in string.whitespace or ch == " ")
        assert mixed_content(text.encode()) == text
        assert render(b"hello world") == "hello world"
        assert render(b"user:42/profile") == "user:42/profile"

    def test_control_characters_are_binary(self):
        """Newlines and tabs are control characters and get tagged."""
        assert render(b"a\nb") == "a[b64:Cg]b"
        assert render(b"a\tb\r\n") == "a[b64:CQ]b[b64:DQo]"

    def test_invalid_utf8(self):
        """Undecodable bytes are collected as raw bytes."""
        assert render(b"\xff\xfe") == "[b64://4]"
        assert render(b"ok\xffok") == "ok[b64:/w]ok"

    def test_truncated_multibyte_sequence(self):
        """A cut-off three-byte sequence is binary; the next char is kept."""
        assert render(b"\xe2\x82A") == "[b64:4oI]A"

    def test_encoded_surrogate_is_invalid(self):
        """UTF-8 encoded surrogates are not valid code points."""
        assert render(b"\xed\xa0\x80") == "[b64:7aCA]"

    def test_c1_control_keeps_its_utf8_bytes(self):
        """Valid but non-printable U+0085 is tagged with both of its bytes."""
        assert render("x\u0085y".encode()) == "x[b64:woU]y"

    def test_multibyte_text_kept(self):
        """Valid non-ASCII text passes through."""
        text = "héllo ✓ 日本"
        assert render(text.encode()) == text

    def test_mixed_binary_and_text(self):
        """Binary header followed by text."""
        assert render(b"\x01\x02hdr:\xffvalue") == "[b64:AQI]hdr:[b64:/w]value"


class TestRenderContract:
    """Test the totality and purity of render."""

    def test_empty_value_marker(self):
        """Empty values are shown as an explicit marker."""
        assert render(b"") == "(empty)"

    def test_deterministic(self):
        """Same input, same output."""
        data = bytes(range(256))
        assert render(data) == render(data)

    def test_never_fails_and_output_is_printable(self):
        """Every byte value renders, and no control chars reach the output."""
        for b in range(256):
            out = render(bytes([b]) + b"x" + bytes([b]))
            assert all(ch.isprintable() for ch in out), (b, out)

    def test_marker_alphabet(self):
        """Markers use the standard alphabet without padding."""
        assert b64_marker(b"\xfb\xff") == "[b64:+/8]"
        assert b64_marker(b"abc") == "[b64:YWJj]"
