"""Tests for renderer.py - Console and HTML display."""

import io
from decimal import Decimal

import pytest
from rich.console import Console

from gst_calc.calculator import Direction, SplitMode, compute
from gst_calc.renderer import (
    EMPTY_HISTORY_MESSAGE,
    Renderer,
    direction_label,
    format_amount,
    format_history_entry,
    format_rate,
    render_html,
    result_values,
    split_mode_label,
)


@pytest.fixture
def forward_split():
    return compute(
        100, 18, Direction.FORWARD_FROM_NET, SplitMode.SPLIT, timestamp="10:00:00 AM"
    )


@pytest.fixture
def reverse_unified():
    return compute(
        118, 18, Direction.REVERSE_FROM_GROSS, SplitMode.UNIFIED, timestamp="10:05:00 AM"
    )


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)


class TestFormatting:
    """Tests for value formatting helpers."""

    def test_format_amount(self):
        assert format_amount(Decimal("9")) == "9.00"
        assert format_amount(Decimal("84.7457")) == "84.75"
        assert format_amount(2.675) == "2.68"

    def test_format_amount_large(self):
        """Test amounts wider than the default decimal precision keep their cents."""
        assert format_amount(Decimal("1e28")) == "10000000000000000000000000000.00"
        assert format_amount("12345678901234567890123456789.005") == (
            "12345678901234567890123456789.01"
        )

    @pytest.mark.parametrize(
        "rate,expected",
        [
            (Decimal("18"), "18"),
            (Decimal("12.5"), "12.5"),
            (Decimal("12.50"), "12.5"),
            (Decimal("18.0"), "18"),
            (Decimal("100"), "100"),
            (Decimal("0"), "0"),
        ],
    )
    def test_format_rate(self, rate, expected):
        assert format_rate(rate) == expected

    def test_labels(self):
        assert direction_label(Direction.FORWARD_FROM_NET) == "Added GST"
        assert direction_label(Direction.REVERSE_FROM_GROSS) == "Removed GST"
        assert split_mode_label(SplitMode.SPLIT) == "CGST+SGST"
        assert split_mode_label(SplitMode.UNIFIED) == "IGST"


class TestResultValues:
    """Tests for result_values function."""

    def test_split(self, forward_split):
        assert result_values(forward_split) == {
            "Base Price": "100.00",
            "GST Amount": "18.00",
            "Gross Price": "118.00",
            "CGST": "9.00",
            "SGST": "9.00",
            "IGST": "0.00",
        }

    def test_unified(self, reverse_unified):
        values = result_values(reverse_unified)
        assert values["Base Price"] == "100.00"
        assert values["IGST"] == "18.00"
        assert values["CGST"] == "0.00"


class TestFormatHistoryEntry:
    """Tests for format_history_entry function."""

    def test_forward(self, forward_split):
        headline, amounts = format_history_entry(forward_split)
        assert headline == "10:00:00 AM - Added GST: 18% (CGST+SGST)"
        assert amounts == "Net: 100.00 | GST: 18.00 | Gross: 118.00"

    def test_reverse(self, reverse_unified):
        headline, _ = format_history_entry(reverse_unified)
        assert headline == "10:05:00 AM - Removed GST: 18% (IGST)"


class TestRenderer:
    """Tests for the console Renderer."""

    def test_show_result(self, console, forward_split):
        Renderer(console).show_result(forward_split)
        output = console.file.getvalue()
        assert "Added GST" in output
        assert "118.00" in output
        assert "CGST" in output

    def test_show_empty_history(self, console):
        """Test the placeholder for an empty history."""
        Renderer(console).show_history([])
        assert EMPTY_HISTORY_MESSAGE in console.file.getvalue()

    def test_show_history(self, console, forward_split, reverse_unified):
        """Test history entries are shown newest first."""
        Renderer(console).show_history([reverse_unified, forward_split])
        output = console.file.getvalue()
        assert EMPTY_HISTORY_MESSAGE not in output
        assert output.index("Removed GST") < output.index("Added GST")
        assert "Net: 100.00 | GST: 18.00 | Gross: 118.00" in output


class TestRenderHtml:
    """Tests for the HTML page."""

    def test_empty(self):
        html = render_html(None, [])
        assert "<!DOCTYPE html>" in html
        assert EMPTY_HISTORY_MESSAGE in html
        assert "No calculation yet." in html

    def test_with_result_and_history(self, forward_split, reverse_unified):
        html = render_html(reverse_unified, [reverse_unified, forward_split])
        assert html.count('class="history-item"') == 2
        assert "Removed GST" in html
        assert "CGST+SGST" in html
        assert EMPTY_HISTORY_MESSAGE not in html

    def test_escapes_text(self):
        """Test stored text is escaped in the page."""
        result = compute(
            1, 0, Direction.FORWARD_FROM_NET, SplitMode.SPLIT, timestamp="<b>noon</b>"
        )
        html = render_html(None, [result])
        assert "&lt;b&gt;noon&lt;/b&gt;" in html
        assert "<b>noon</b>" not in html
