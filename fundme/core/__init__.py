"""Core domain logic for the FundMe custody system.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .errors import (
    FundingError,
    InsufficientValueError,
    NotOwnerError,
    OutOfRangeError,
    TransferFailedError,
)
from .models import (
    NATIVE_DECIMALS,
    NATIVE_UNIT,
    FundReceipt,
    Identity,
    LedgerSnapshot,
    PriceQuote,
    WithdrawReceipt,
)

__all__ = [
    "NATIVE_DECIMALS",
    "NATIVE_UNIT",
    "FundReceipt",
    "FundingError",
    "Identity",
    "InsufficientValueError",
    "LedgerSnapshot",
    "NotOwnerError",
    "OutOfRangeError",
    "PriceQuote",
    "TransferFailedError",
    "WithdrawReceipt",
]
