"""GST Calc - Goods and Services Tax calculator.

Works out a net/gross price split with:
- Forward (add GST) and reverse (remove GST) calculations
- CGST + SGST split for intra-state, IGST for inter-state transactions
- A persisted list of the five most recent results
- Console and HTML rendering of results and history
"""

__version__ = "1.0.0"

from .calculator import (
    CalculationResult,
    Direction,
    GstCalcError,
    InvalidInput,
    SplitMode,
    compute,
    round_to_two,
)
from .history import (
    MAX_HISTORY_ITEMS,
    HistoryList,
    record,
)

__all__ = [
    # Calculation
    "CalculationResult",
    "Direction",
    "SplitMode",
    "compute",
    "round_to_two",
    # Errors
    "GstCalcError",
    "InvalidInput",
    # History
    "MAX_HISTORY_ITEMS",
    "HistoryList",
    "record",
]
