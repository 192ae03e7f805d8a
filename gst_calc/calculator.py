"""Tax calculation core for GST Calc.

Maps an amount, a rate and a transaction kind to a net/gross split:
- Forward (net to gross) and reverse (gross to net) directions
- Split (CGST + SGST) or unified (IGST) tax components
- Half-up rounding to two places on every output
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from enum import Enum
from typing import Optional, Union

Numeric = Union[int, float, str, Decimal]

MONEY_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")

# Amounts and rates are limited to the range of a double (about 1e308).
MAX_INTEGER_DIGITS = 308
BASE_PRECISION = 28


class GstCalcError(Exception):
    """Base error for GST Calc."""


class InvalidInput(GstCalcError, ValueError):
    """Raised when a calculation request fails validation."""


class Direction(Enum):
    """Whether the input amount is the pre-tax or the post-tax value."""

    FORWARD_FROM_NET = "forward"
    REVERSE_FROM_GROSS = "reverse"


class SplitMode(Enum):
    """How the tax amount is broken into components."""

    SPLIT = "split"  # CGST + SGST
    UNIFIED = "unified"  # IGST


@dataclass(frozen=True)
class CalculationResult:
    """The outcome of one calculation request."""

    base_price: Decimal
    tax_amount: Decimal
    gross_price: Decimal
    component_a: Decimal
    component_b: Decimal
    component_c: Decimal
    direction: Direction
    rate_percent: Decimal
    split_mode: SplitMode
    timestamp: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "direction": self.direction.value,
            "rate_percent": str(self.rate_percent),
            "split_mode": self.split_mode.value,
            "base_price": str(self.base_price),
            "tax_amount": str(self.tax_amount),
            "gross_price": str(self.gross_price),
            "component_a": str(self.component_a),
            "component_b": str(self.component_b),
            "component_c": str(self.component_c),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CalculationResult":
        """Create from a persisted dictionary.

        Raises:
            KeyError, ValueError, InvalidOperation: If a field is missing
            or cannot be decoded.
        """
        return cls(
            base_price=round_to_two(data["base_price"]),
            tax_amount=round_to_two(data["tax_amount"]),
            gross_price=round_to_two(data["gross_price"]),
            component_a=round_to_two(data.get("component_a", 0)),
            component_b=round_to_two(data.get("component_b", 0)),
            component_c=round_to_two(data.get("component_c", 0)),
            direction=Direction(data["direction"]),
            rate_percent=to_decimal(data["rate_percent"]),
            split_mode=SplitMode(data["split_mode"]),
            timestamp=str(data.get("timestamp", "")),
        )


def to_decimal(value: Numeric) -> Decimal:
    """Convert a numeric value to Decimal.

    Floats go through their shortest repr, so 2.675 becomes Decimal("2.675")
    rather than the binary value just below it.
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a numeric amount")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def _precision_for(*values: Decimal) -> int:
    """Digits of precision that keep sums, products and quotients exact to the cent."""
    digits = sum(
        max(v.adjusted(), 0) + 1 + len(v.as_tuple().digits) for v in values
    )
    return digits + BASE_PRECISION


def round_to_two(value: Numeric) -> Decimal:
    """Round half-up to two decimal places."""
    number = to_decimal(value)
    with localcontext() as ctx:
        ctx.prec = _precision_for(number)
        return number.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a time the way a browser's toLocaleTimeString() does."""
    moment = moment or datetime.now()
    return moment.strftime("%I:%M:%S %p").lstrip("0")


def _validated(value: Numeric, name: str) -> Decimal:
    try:
        number = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInput(f"{name} must be a number, got {value!r}")
    if not number.is_finite():
        raise InvalidInput(f"{name} must be a finite number, got {value!r}")
    if number.adjusted() >= MAX_INTEGER_DIGITS:
        raise InvalidInput(f"{name} is too large (limit 1e{MAX_INTEGER_DIGITS})")
    return number


def compute(
    amount: Numeric,
    rate_percent: Numeric,
    direction: Direction,
    split_mode: SplitMode,
    timestamp: Optional[str] = None,
) -> CalculationResult:
    """Compute the net/gross split and tax breakdown for one request.

    Args:
        amount: Net price (forward) or gross price (reverse). Must be > 0.
        rate_percent: Tax rate in percent. Must be >= 0.
        direction: Whether amount is the net or the gross value.
        split_mode: Split into two equal components or report one.
        timestamp: Display time to stamp on the result (default: now).

    Returns:
        CalculationResult with all monetary values rounded to two places.

    Raises:
        InvalidInput: If amount or rate is out of range or not a number.
    """
    amount = _validated(amount, "Price")
    rate = _validated(rate_percent, "GST rate")

    if amount <= 0:
        raise InvalidInput("Price must be greater than zero")
    if rate < 0:
        raise InvalidInput("GST rate cannot be negative")
    if not isinstance(direction, Direction):
        raise InvalidInput(f"Unknown direction: {direction!r}")
    if not isinstance(split_mode, SplitMode):
        raise InvalidInput(f"Unknown split mode: {split_mode!r}")

    zero = Decimal("0")
    with localcontext() as ctx:
        ctx.prec = _precision_for(amount, rate, HUNDRED)
        multiplier = 1 + rate / HUNDRED

        if direction is Direction.FORWARD_FROM_NET:
            base = amount
            gross = base * multiplier
        else:
            gross = amount
            base = gross / multiplier
        tax = gross - base

        if split_mode is SplitMode.SPLIT:
            component_a = component_b = tax / 2
            component_c = zero
        else:
            component_a = component_b = zero
            component_c = tax

    return CalculationResult(
        base_price=round_to_two(base),
        tax_amount=round_to_two(tax),
        gross_price=round_to_two(gross),
        component_a=round_to_two(component_a),
        component_b=round_to_two(component_b),
        component_c=round_to_two(component_c),
        direction=direction,
        rate_percent=rate,
        split_mode=split_mode,
        timestamp=timestamp if timestamp is not None else format_timestamp(),
    )
