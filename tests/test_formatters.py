#
# Object Printing - Formatters Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from objectprinting.formatters import fmt_type, fmt_value, truncate_text


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class Widget:
    pass


class BrokenRepr:
    def __repr__(self):
        raise RuntimeError("no repr")


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFmtType:

    @pytest.mark.parametrize("obj, style, expected", [
        pytest.param(42, "ascii", "<int>", id="instance-ascii"),
        pytest.param(int, "ascii", "<int>", id="type-ascii"),
        pytest.param(ValueError, "equal", "ValueError", id="type-equal"),
        pytest.param(Widget(), "equal", "Widget", id="instance-equal"),
    ])
    def test_styles(self, obj, style, expected):
        assert fmt_type(obj, style=style) == expected


class TestFmtValue:

    @pytest.mark.parametrize("obj, expected", [
        pytest.param(42, "42", id="int"),
        pytest.param("abc", "'abc'", id="str"),
        pytest.param(None, "None", id="none"),
        pytest.param([1, 2, 3], "<list: [1, 2, 3]>", id="list"),
    ])
    def test_ascii(self, obj, expected):
        assert fmt_value(obj) == expected

    def test_equal_style(self):
        assert fmt_value([1], style="equal") == "list=[1]"

    def test_angle_brackets_escaped(self):
        assert "\\>" in fmt_value(Widget())

    def test_truncated(self):
        assert fmt_value("hello world", max_repr=5) == "'hell..."

    def test_broken_repr(self):
        """Never raise on objects whose __repr__ fails."""
        text = fmt_value(BrokenRepr())
        assert text.startswith("<BrokenRepr:")
        assert "repr failed: RuntimeError" in text


class TestTruncateText:

    @pytest.mark.parametrize("text, max_len, expected", [
        pytest.param("Alexander", 3, "Ale...", id="cut"),
        pytest.param("Alex", 4, "Alex", id="exact-length"),
        pytest.param("Al", 4, "Al", id="shorter"),
        pytest.param("Alex", 0, "Alex", id="disabled"),
        pytest.param("Alex", -1, "Alex", id="negative"),
        pytest.param("", 3, "", id="empty"),
    ])
    def test_truncate(self, text, max_len, expected):
        assert truncate_text(text, max_len) == expected

    def test_custom_ellipsis(self):
        assert truncate_text("Alexander", 4, ellipsis="~") == "Alex~"
