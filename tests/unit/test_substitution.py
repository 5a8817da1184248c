"""Unit tests for placeholder substitution."""

from docx_template.strategies.template_engine.normalizer import join_placeholders
from docx_template.strategies.template_engine.substitution import (
    LINE_BREAK,
    escape_value,
    prepare_multiline,
    substitute,
    substitute_many,
    substitute_multiline,
)


class TestSubstitute:
    """Test suite for single-token substitution."""

    def test_replaces_every_occurrence(self):
        """Test that all occurrences of the placeholder are replaced."""
        text = "<w:t>{name} and {name}</w:t>"
        assert substitute(text, "name", "Ada") == "<w:t>Ada and Ada</w:t>"

    def test_absent_token_is_noop(self):
        """Test that substituting a missing placeholder returns the text unchanged."""
        text = "<w:t>Dear {name},</w:t>"
        assert substitute(text, "city", "London") == text

    def test_braces_added_to_name(self):
        """Test that the bare word is not replaced, only the braced form."""
        assert substitute("name {name}", "name", "Ada") == "name Ada"

    def test_non_string_value(self):
        """Test that numbers are inserted via str()."""
        assert substitute("{total}", "total", 42) == "42"

    def test_value_not_rescanned(self):
        """Test that a value containing placeholder syntax is inserted literally."""
        assert substitute("{a}", "a", "{a}{b}") == "{a}{b}"

    def test_split_token_replaced_after_normalization(self):
        """Test that a placeholder split by markup is replaced once joined."""
        text = join_placeholders("<w:t>Dear {na</w:t><w:t>me},</w:t>")
        assert substitute(text, "name", "Ada") == "<w:t>Dear Ada,</w:t>"


class TestEscaping:
    """Test suite for XML escaping of values."""

    RAW = """<b>Tom & "Jerry's"</b>"""

    def test_escape_value(self):
        """Test that all five special characters become entities."""
        assert escape_value(self.RAW) == (
            "&lt;b&gt;Tom &amp; &quot;Jerry&#x27;s&quot;&lt;/b&gt;"
        )

    def test_escaped_output_has_no_raw_characters(self):
        """Test that escaping leaves none of the special characters raw."""
        result = substitute("[{v}]", "v", self.RAW, escape=True)
        inserted = result[1:-1]

        for char in "<>\"'":
            assert char not in inserted
        assert inserted.replace("&amp;", "").replace("&lt;", "").replace(
            "&gt;", ""
        ).replace("&quot;", "").replace("&#x27;", "").count("&") == 0

    def test_unescaped_output_is_verbatim(self):
        """Test that escape=False inserts the value as is."""
        assert substitute("[{v}]", "v", self.RAW, escape=False) == f"[{self.RAW}]"


class TestSubstituteMany:
    """Test suite for mapping substitution."""

    def test_mapping(self):
        """Test that each pair in the mapping is applied."""
        assert substitute_many("{x}-{y}", {"x": "1", "y": "2"}) == "1-2"

    def test_mapping_order_independent(self):
        """Test that distinct names give the same result in any order."""
        assert substitute_many("{x}-{y}", {"y": "2", "x": "1"}) == "1-2"

    def test_escape_applies_to_all_values(self):
        """Test that the escape flag is passed to every pair."""
        assert substitute_many("{a}{b}", {"a": "<", "b": "&"}) == "&lt;&amp;"


class TestMultiline:
    """Test suite for multi-line values."""

    def test_line_breaks_between_segments(self):
        """Test that three lines give two line breaks and three segments in order."""
        fragment = prepare_multiline("a\nb\nc", escape=False)

        assert fragment.count("<w:br/>") == 2
        assert fragment.split(LINE_BREAK) == ["a", "b", "c"]

    def test_single_line_has_no_break(self):
        """Test that a value without newlines is unchanged."""
        assert prepare_multiline("plain", escape=False) == "plain"

    def test_windows_newlines(self):
        """Test that CRLF counts as a single line boundary."""
        assert prepare_multiline("a\r\nb", escape=False) == f"a{LINE_BREAK}b"

    def test_escape_before_markup(self):
        """Test that escaping happens before the break markup is added."""
        fragment = prepare_multiline("1 < 2\nR&D", escape=True)
        assert fragment == f"1 &lt; 2{LINE_BREAK}R&amp;D"

    def test_substitute_multiline(self):
        """Test that the prepared fragment replaces the placeholder."""
        text = "<w:r><w:t>{address}</w:t></w:r>"

        result = substitute_multiline(text, "address", "1 Main St\nLondon")

        assert result == (
            "<w:r><w:t>1 Main St</w:t><w:br/><w:t>London</w:t></w:r>"
        )
