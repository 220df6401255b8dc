"""Integer arithmetic utilities for cents-based money.

All prices, bids and charges use int (cents). Display formatting happens
only at the schema layer.
"""

from decimal import ROUND_DOWN, Decimal


def to_minor_units(amount: int | Decimal | float) -> int:
    """Truncate an amount already expressed in minor units to an int.

    The processor only accepts integer amounts; fractional cents are dropped,
    never rounded up.
    """
    if isinstance(amount, int):
        return amount
    return int(Decimal(str(amount)).to_integral_value(rounding=ROUND_DOWN))


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 6500 -> '$65.00', -1200 -> '-$12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"
