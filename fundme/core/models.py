"""Domain models for the FundMe custody system.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import TypeAlias

# Address-like token identifying a participant. Compared by equality only.
Identity: TypeAlias = str

# Native amounts are integers in the smallest unit (wei).
NATIVE_DECIMALS = 18
NATIVE_UNIT = 10**NATIVE_DECIMALS


@dataclass(frozen=True)
class PriceQuote:
    """A single reading from a price oracle.

    `answer` is the USD price of one native unit, scaled by
    10**decimals (e.g. 2000 USD with 8 decimals is 200000000000).
    """

    answer: int
    decimals: int

    def __post_init__(self) -> None:
        """Validate quote invariants on creation."""
        for name in ("answer", "decimals"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")
        if self.answer <= 0:
            raise ValueError(f"answer must be positive, got {self.answer}")
        if self.decimals < 0:
            raise ValueError(f"decimals must be non-negative, got {self.decimals}")


@dataclass(frozen=True)
class FundReceipt:
    """Outcome of an accepted contribution."""

    funder: Identity
    amount: int
    usd_equivalent: int  # USD scaled by 10**18
    total_funded: int  # funder's running total after this contribution
    first_contribution: bool


@dataclass(frozen=True)
class WithdrawReceipt:
    """Outcome of a successful owner withdrawal."""

    owner: Identity
    amount: int
    funders_cleared: int
    withdrawn_at: datetime


@dataclass(frozen=True)
class LedgerSnapshot:
    """Point-in-time copy of the ledger's tracked state."""

    owner: Identity
    custodied_balance: int
    contributions: Mapping[Identity, int]  # read-only at runtime
    funders: tuple[Identity, ...]

    def __post_init__(self) -> None:
        """Copy contributions into a read-only proxy."""
        object.__setattr__(
            self, "contributions", MappingProxyType(dict(self.contributions))
        )

    @property
    def funder_count(self) -> int:
        return len(self.funders)
