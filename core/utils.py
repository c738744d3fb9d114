"""Assorted display helpers."""

import math

from borrowpower.calculators import round_half_up
from borrowpower.models import DtiClassification

DTI_BADGE_LABELS = {"green": "Healthy", "amber": "Elevated", "red": "High"}


def format_currency(amount):
    """Format a dollar amount with no cents, e.g. ``-$1,234``."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return "$0"
    if math.isinf(value) or math.isnan(value):
        return "N/A"
    rounded = round_half_up(value)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.0f}"


def format_dti(dti):
    """Show a DTI ratio as ``5.2x``; an unbounded ratio has no meaningful multiple."""
    if math.isinf(dti):
        return "N/A"
    return f"{dti:.1f}x"


def dti_badge_label(classification: DtiClassification) -> str:
    return DTI_BADGE_LABELS[classification]
