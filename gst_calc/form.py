"""Input form for GST Calc.

Turns raw form values into calculator inputs:
- Numeric fields parsed to Decimal
- Transaction type (intra/inter) mapped to SplitMode
- Operation (add/remove) mapped to Direction
- Interactive prompting with questionary
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

import questionary

from .calculator import Direction, InvalidInput, SplitMode

TRANSACTION_TYPES = ("intra", "inter")
OPERATIONS = ("add", "remove")

_SPLIT_MODES = {
    "intra": SplitMode.SPLIT,
    "inter": SplitMode.UNIFIED,
}

_DIRECTIONS = {
    "add": Direction.FORWARD_FROM_NET,
    "remove": Direction.REVERSE_FROM_GROSS,
}

TRANSACTION_CHOICES = [
    {"name": "Intra-state (CGST + SGST)", "value": "intra"},
    {"name": "Inter-state (IGST)", "value": "inter"},
]

OPERATION_CHOICES = [
    {"name": "Add GST (net to gross)", "value": "add"},
    {"name": "Remove GST (gross to net)", "value": "remove"},
]


@dataclass
class CalculationRequest:
    """A validated-for-type form submission."""

    amount: Decimal
    rate_percent: Decimal
    direction: Direction
    split_mode: SplitMode


def parse_number(raw, field: str) -> Decimal:
    """Parse a numeric form field.

    Raises:
        InvalidInput: If the value is empty, not a number, or not finite.
    """
    text = str(raw).strip() if raw is not None else ""
    if not text:
        raise InvalidInput(f"{field} is required")

    try:
        number = Decimal(text)
    except InvalidOperation:
        raise InvalidInput(f"{field} must be a number, got {text!r}")

    if not number.is_finite():
        raise InvalidInput(f"{field} must be a finite number, got {text!r}")
    return number


def split_mode_from_transaction_type(transaction_type: str) -> SplitMode:
    """Map a transaction type (intra/inter) to a SplitMode."""
    try:
        return _SPLIT_MODES[transaction_type]
    except KeyError:
        raise InvalidInput(
            f"Transaction type must be one of: {', '.join(TRANSACTION_TYPES)}"
        )


def direction_from_operation(operation: str) -> Direction:
    """Map an operation (add/remove) to a Direction."""
    try:
        return _DIRECTIONS[operation]
    except KeyError:
        raise InvalidInput(f"Operation must be one of: {', '.join(OPERATIONS)}")


def build_request(
    amount: str, rate: str, transaction_type: str, operation: str
) -> CalculationRequest:
    """Build a request from raw form strings."""
    return CalculationRequest(
        amount=parse_number(amount, "Price"),
        rate_percent=parse_number(rate, "GST rate"),
        direction=direction_from_operation(operation),
        split_mode=split_mode_from_transaction_type(transaction_type),
    )


def _is_number(text: str):
    try:
        parse_number(text, "Value")
    except InvalidInput as e:
        return str(e)
    return True


def prompt_calculation(
    default_rate: str = "18", default_transaction_type: str = "intra"
) -> Optional[CalculationRequest]:
    """Ask for the form fields interactively.

    Returns:
        CalculationRequest, or None if the user cancelled a prompt.
    """
    amount = questionary.text("Price:", validate=_is_number).ask()
    if amount is None:
        return None

    rate = questionary.text(
        "GST rate (%):", default=default_rate, validate=_is_number
    ).ask()
    if rate is None:
        return None

    transaction_choices = [
        questionary.Choice(c["name"], value=c["value"]) for c in TRANSACTION_CHOICES
    ]
    default_choice = next(
        (c for c in transaction_choices if c.value == default_transaction_type), None
    )
    transaction_type = questionary.select(
        "Transaction type:",
        choices=transaction_choices,
        default=default_choice,
    ).ask()
    if transaction_type is None:
        return None

    operation = questionary.select(
        "Calculation:",
        choices=[
            questionary.Choice(c["name"], value=c["value"])
            for c in OPERATION_CHOICES
        ],
    ).ask()
    if operation is None:
        return None

    return build_request(amount, rate, transaction_type, operation)
