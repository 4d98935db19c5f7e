"""Port interfaces for the FundMe custody system.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - PriceFeedPort: Read the current USD price of the native unit
   - TransferPort: Move native value out of the contract

2. **Driving Ports** (adapters/external systems call into core)
   - FundingPort: Contribute, withdraw, and inspect ledger state
"""

from abc import ABC, abstractmethod

from .models import (
    FundReceipt,
    Identity,
    LedgerSnapshot,
    PriceQuote,
    WithdrawReceipt,
)


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class PriceFeedPort(ABC):
    """Port for reading a price oracle.

    Adapters implementing this port return the current USD quote for one
    native unit. The core never caches a quote: every contribution
    triggers a fresh read, so implementations must not assume the value
    is stable between calls.
    """

    @abstractmethod
    async def get_price(self) -> PriceQuote:
        """Return the latest price quote.

        Returns:
            PriceQuote with the scaled answer and its decimal precision.

        Raises:
            Exception: If the oracle is unreachable or returns garbage.
                The ledger propagates the error without mutating state.
        """

    @abstractmethod
    async def get_version(self) -> int:
        """Return the oracle implementation version."""


class TransferPort(ABC):
    """Port for sending native value to a recipient.

    This is the host environment's value-transfer primitive. It may fail
    for reasons outside the ledger's control (recipient rejects value,
    resource limits). The ledger treats any exception as a failed
    transfer and rolls back.
    """

    @abstractmethod
    async def send(self, recipient: Identity, amount: int) -> None:
        """Send `amount` native units to `recipient`.

        Args:
            recipient: Destination identity.
            amount: Amount in the smallest native unit. May be zero.

        Raises:
            Exception: If the transfer could not be completed.
        """


# ============================================================================
# DRIVING PORTS (Adapters/external systems call into core)
# ============================================================================


class FundingPort(ABC):
    """Port for interacting with a funding ledger.

    Driving port: the CLI invokes these methods on behalf of a caller
    identity. Implementation lives in the core (ledger.py).
    """

    @abstractmethod
    async def fund(self, caller: Identity, amount: int) -> FundReceipt:
        """Contribute `amount` native units on behalf of `caller`.

        Raises:
            InsufficientValueError: If the amount is worth less than the
                USD minimum at the current quote.
            ValueError: If amount is negative.
        """

    @abstractmethod
    async def withdraw(self, caller: Identity) -> WithdrawReceipt:
        """Send the whole custodied balance to the owner and reset state.

        Raises:
            NotOwnerError: If caller is not the owner.
            TransferFailedError: If the value transfer failed.
        """

    @abstractmethod
    def get_address_to_amount_funded(self, identity: Identity) -> int:
        """Return the amount recorded for `identity` (0 if unknown)."""

    @abstractmethod
    def get_funder(self, index: int) -> Identity:
        """Return the funder at `index`.

        Raises:
            OutOfRangeError: If index is outside the funder sequence.
        """

    @abstractmethod
    def get_price_feed(self) -> PriceFeedPort:
        """Return the configured price feed."""

    @abstractmethod
    def get_owner(self) -> Identity:
        """Return the owner identity."""

    @abstractmethod
    def get_minimum_usd(self) -> int:
        """Return the minimum contribution in whole USD."""

    @abstractmethod
    async def get_version(self) -> int:
        """Return the price feed version."""

    @abstractmethod
    def snapshot(self) -> LedgerSnapshot:
        """Return a copy of the tracked state."""
