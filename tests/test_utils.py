import math

from core.utils import dti_badge_label, format_currency, format_dti


def test_format_currency():
    assert format_currency(796040) == "$796,040"
    assert format_currency(1234.5) == "$1,235"
    assert format_currency(-2200) == "-$2,200"
    assert format_currency(-0.4) == "$0"
    assert format_currency(None) == "$0"
    assert format_currency(math.inf) == "N/A"


def test_format_dti():
    assert format_dti(4.04) == "4.0x"
    assert format_dti(12.46) == "12.5x"
    assert format_dti(0) == "0.0x"
    assert format_dti(math.inf) == "N/A"


def test_dti_badge_labels():
    assert dti_badge_label("green") == "Healthy"
    assert dti_badge_label("amber") == "Elevated"
    assert dti_badge_label("red") == "High"
