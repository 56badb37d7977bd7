"""New Year gift policy — who gets a gift and how much.

This is agent-side logic. The resolver never invents amounts; the gift
action draws one here and puts it into the intent before validation.
"""

from __future__ import annotations

import random
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

from core.transfers.addresses import find_hex_address


def find_recipient_address(text: str) -> str | None:
    """First Starknet address mentioned in a greeting, or None."""
    return find_hex_address(text)


def gift_tick_range(low: Decimal | float, high: Decimal | float, places: int) -> tuple[int, int]:
    """Inclusive range of positive ``10^-places`` ticks inside ``[low, high]``.

    Raises ValueError when *places* is negative or no positive tick fits.
    """
    if isinstance(places, bool) or not isinstance(places, int) or places < 0:
        raise ValueError(f"places must be a non-negative integer, got {places!r}")
    step = Decimal(1).scaleb(-places)
    lo = int((Decimal(str(low)) / step).to_integral_value(rounding=ROUND_CEILING))
    hi = int((Decimal(str(high)) / step).to_integral_value(rounding=ROUND_FLOOR))
    lo = max(lo, 1)
    if hi < lo:
        raise ValueError(f"No positive gift amount in [{low}, {high}] at {places} places")
    return lo, hi


def draw_gift_amount(
    low: Decimal | float,
    high: Decimal | float,
    places: int = 3,
    rng: random.Random | None = None,
) -> Decimal:
    """Uniform random amount in ``[low, high]`` on a ``10^-places`` grid.

    The draw happens on integers so the result is an exact Decimal with at
    most *places* fractional digits.
    """
    lo, hi = gift_tick_range(low, high, places)
    ticks = (rng or random).randint(lo, hi)
    return Decimal(ticks).scaleb(-places)
