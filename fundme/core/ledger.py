"""Funding ledger: implements FundingPort for value custody.

This is the core state machine. It accepts contributions worth at least
a USD minimum at the current oracle quote, tracks what each funder has
contributed, and lets only the owner withdraw everything at once.

State changes follow two rules:
- fund validates against a fresh quote before touching any state
- withdraw sends value first and clears state only once the transfer
  has succeeded

Both operations hold a per-ledger OperationLock for their whole duration,
so one operation always completes before the next begins, whichever
thread or event loop the callers run on. A short state lock guards the
mutations themselves, so getters called from other threads never see a
half-applied change.
"""

import logging
import threading
from datetime import datetime, timezone

from .conversion import get_usd_value, minimum_usd_scaled
from .errors import (
    InsufficientValueError,
    NotOwnerError,
    OutOfRangeError,
    TransferFailedError,
)
from .locking import OperationLock
from .models import FundReceipt, Identity, LedgerSnapshot, WithdrawReceipt
from .ports import FundingPort, PriceFeedPort, TransferPort

logger = logging.getLogger(__name__)

DEFAULT_MINIMUM_USD = 50


class FundingLedger(FundingPort):
    """Core implementation of FundingPort.

    One instance per deployment. The owner and price feed are fixed at
    construction and never change.
    """

    def __init__(
        self,
        owner: Identity,
        price_feed: PriceFeedPort,
        transfer: TransferPort,
        minimum_usd: int = DEFAULT_MINIMUM_USD,
    ):
        """Initialize the ledger.

        Args:
            owner: Identity allowed to withdraw.
            price_feed: PriceFeedPort used to value contributions.
            transfer: TransferPort used to pay out withdrawals.
            minimum_usd: Smallest accepted contribution, in whole USD.

        Raises:
            ValueError: If owner is empty or minimum_usd is negative.
        """
        if not owner or not owner.strip():
            raise ValueError("owner must be a non-empty identity")
        if minimum_usd < 0:
            raise ValueError(f"minimum_usd must be non-negative, got {minimum_usd}")

        self._owner = owner
        self._price_feed = price_feed
        self._transfer = transfer
        self._minimum_usd = minimum_usd

        self._amounts: dict[Identity, int] = {}
        self._funders: list[Identity] = []
        self._balance = 0
        self._lock = OperationLock()
        self._state_lock = threading.Lock()

    @property
    def owner(self) -> Identity:
        return self._owner

    @property
    def minimum_usd(self) -> int:
        return self._minimum_usd

    @property
    def custodied_balance(self) -> int:
        return self._balance

    async def fund(self, caller: Identity, amount: int) -> FundReceipt:
        """Accept a contribution from `caller`.

        The oracle is read on every call. Nothing is mutated until the
        contribution has been valued and accepted.

        Args:
            caller: Identity making the contribution.
            amount: Contribution in the smallest native unit.

        Returns:
            FundReceipt describing the accepted contribution.

        Raises:
            InsufficientValueError: If the amount is worth less than the
                minimum at the current quote.
            TypeError: If amount is not an int.
            ValueError: If amount is negative.
            Exception: If the price feed fails (state untouched).
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise TypeError(f"amount must be an int, got {type(amount).__name__}")
        if amount < 0:
            raise ValueError(f"amount must be non-negative, got {amount}")

        async with self._lock:
            quote = await self._price_feed.get_price()
            usd_equivalent = get_usd_value(amount, quote)

            # Zero-value contributions never count, even with a zero minimum.
            if amount == 0 or usd_equivalent < minimum_usd_scaled(self._minimum_usd):
                logger.warning(
                    f"Rejected contribution of {amount} from {caller}",
                    extra={
                        "caller": caller,
                        "amount": amount,
                        "usd_equivalent": usd_equivalent,
                        "minimum_usd": self._minimum_usd,
                    },
                )
                raise InsufficientValueError(amount, usd_equivalent, self._minimum_usd)

            with self._state_lock:
                previous = self._amounts.get(caller, 0)
                first_contribution = previous == 0

                self._amounts[caller] = previous + amount
                if first_contribution:
                    self._funders.append(caller)
                self._balance += amount
                balance_after = self._balance

        logger.info(
            f"Accepted contribution of {amount} from {caller}",
            extra={
                "caller": caller,
                "amount": amount,
                "usd_equivalent": usd_equivalent,
                "custodied_balance": balance_after,
            },
        )

        return FundReceipt(
            funder=caller,
            amount=amount,
            usd_equivalent=usd_equivalent,
            total_funded=previous + amount,
            first_contribution=first_contribution,
        )

    async def receive(self, caller: Identity, amount: int) -> FundReceipt:
        """Handle plain value sent to the ledger without an explicit fund call.

        Treated exactly like fund, including the minimum check.
        """
        return await self.fund(caller, amount)

    async def withdraw(self, caller: Identity) -> WithdrawReceipt:
        """Send the whole custodied balance to the owner and reset state.

        The transfer happens before any state is cleared. If it fails the
        ledger is left exactly as it was.

        Args:
            caller: Identity requesting the withdrawal.

        Returns:
            WithdrawReceipt with the amount sent.

        Raises:
            NotOwnerError: If caller is not the owner.
            TransferFailedError: If the transfer primitive raised.
        """
        async with self._lock:
            if caller != self._owner:
                logger.warning(
                    f"Rejected withdrawal by non-owner {caller}",
                    extra={"caller": caller, "owner": self._owner},
                )
                raise NotOwnerError(caller, self._owner)

            amount = self._balance
            funders_cleared = len(self._funders)

            try:
                await self._transfer.send(self._owner, amount)
            except Exception as e:
                logger.error(
                    f"Withdrawal transfer of {amount} to {self._owner} failed: {e}",
                    exc_info=True,
                )
                raise TransferFailedError(self._owner, amount) from e

            with self._state_lock:
                self._amounts.clear()
                self._funders.clear()
                self._balance = 0

        logger.info(
            f"Withdrew {amount} to owner {self._owner}",
            extra={
                "owner": self._owner,
                "amount": amount,
                "funders_cleared": funders_cleared,
            },
        )

        return WithdrawReceipt(
            owner=self._owner,
            amount=amount,
            funders_cleared=funders_cleared,
            withdrawn_at=datetime.now(timezone.utc),
        )

    def get_address_to_amount_funded(self, identity: Identity) -> int:
        return self._amounts.get(identity, 0)

    def get_funder(self, index: int) -> Identity:
        """Return the funder at `index` in contribution order.

        Raises:
            OutOfRangeError: If index is negative or past the end. After a
                withdrawal the sequence is empty, so every index fails.
        """
        with self._state_lock:
            if index < 0 or index >= len(self._funders):
                raise OutOfRangeError(index, len(self._funders))
            return self._funders[index]

    def get_funder_count(self) -> int:
        return len(self._funders)

    def get_price_feed(self) -> PriceFeedPort:
        return self._price_feed

    def get_owner(self) -> Identity:
        return self._owner

    def get_minimum_usd(self) -> int:
        return self._minimum_usd

    async def get_version(self) -> int:
        """Return the version reported by the price feed."""
        return await self._price_feed.get_version()

    def snapshot(self) -> LedgerSnapshot:
        """Return a copy of the tracked state."""
        with self._state_lock:
            snapshot = LedgerSnapshot(
                owner=self._owner,
                custodied_balance=self._balance,
                contributions=self._amounts,
                funders=tuple(self._funders),
            )

        logger.debug(
            "Took ledger snapshot",
            extra={
                "funders": snapshot.funder_count,
                "custodied_balance": snapshot.custodied_balance,
            },
        )
        return snapshot
