"""Exact decimal <-> minor-unit conversion for ERC-20 amounts.

No network calls, no floats. Amounts are scaled with integer arithmetic on
the Decimal's digit tuple, so any number of fractional digits converts
exactly for any precision the token declares.

    minor_units = floor(amount * 10^decimals)

Example: ``Decimal("2.5")`` with 6 decimals -> ``2_500_000``.
"""

from __future__ import annotations

from decimal import Context, Decimal

from core.transfers.errors import ConversionError

MAX_DECIMALS = 255
# Stays below the interpreter's int <-> str conversion limit
MAX_MINOR_DIGITS = 4000
U128_MAX = 2**128 - 1
U256_MAX = 2**256 - 1


def check_decimals(decimals: object) -> int:
    """Return *decimals* if it is an int in ``[0, MAX_DECIMALS]``."""
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise ConversionError(f"Token decimals must be an integer, got {decimals!r}")
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ConversionError(f"Token decimals out of range [0, {MAX_DECIMALS}]: {decimals}")
    return decimals


def to_minor_units(amount: Decimal, decimals: int, cap: int | None = None) -> int:
    """Scale a display amount to the token's smallest unit, truncating toward zero.

    Raises ConversionError for non-finite or negative amounts, bad decimals,
    or a result above *cap*. With no cap the result is still limited to
    ``MAX_MINOR_DIGITS`` digits.
    """
    decimals = check_decimals(decimals)
    if not amount.is_finite():
        raise ConversionError(f"Amount is not finite: {amount}")

    sign, digits, exponent = amount.as_tuple()
    shift = int(exponent) + decimals
    # digits has no leading zeros, so this is the length of the result
    kept = len(digits) + shift
    if any(digits) and kept > MAX_MINOR_DIGITS:
        raise ConversionError(
            f"Amount {amount} is too large: over {MAX_MINOR_DIGITS} digits in minor units"
        )
    if kept <= 0 or not any(digits):
        minor = 0
    elif shift >= 0:
        minor = int("".join(map(str, digits))) * 10**shift
    else:
        minor = int("".join(map(str, digits[:kept])))
    if sign and minor:
        minor = -minor

    if minor < 0:
        raise ConversionError(f"Amount converts to a negative value: {minor}")
    if cap is not None and minor > cap:
        raise ConversionError(f"Amount {amount} exceeds the transfer cap of {cap} minor units")
    return minor


def from_minor_units(minor_units: int, decimals: int) -> Decimal:
    """Inverse of :func:`to_minor_units`, exact for any precision."""
    decimals = check_decimals(decimals)
    return Decimal(minor_units).scaleb(-decimals, context=_exact_context(minor_units))


def split_u256(value: int) -> tuple[int, int]:
    """Split a u256 into its (low, high) 128-bit felts as Cairo expects."""
    if not 0 <= value <= U256_MAX:
        raise ConversionError(f"Value does not fit in a u256: {value}")
    return value & U128_MAX, value >> 128


def _exact_context(value: int) -> Context:
    """Decimal context with enough precision to hold *value* unrounded."""
    return Context(prec=len(str(abs(value))) + 1)
