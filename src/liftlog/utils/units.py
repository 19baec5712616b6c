"""Weight unit conversion.

Set weights are stored in pounds and shown in kilograms.
"""

KG_PER_LB = 0.45359237


def lbs_to_kg(weight: float, precision: int = 1) -> float:
    """Convert pounds to kilograms."""
    return round(weight * KG_PER_LB, precision)


def kg_to_lbs(weight: float, precision: int = 1) -> float:
    """Convert kilograms to pounds."""
    return round(weight / KG_PER_LB, precision)


def format_kg(weight_lbs: float) -> str:
    """Format a stored pound value for display."""
    return f"{lbs_to_kg(weight_lbs):.1f} kg"
