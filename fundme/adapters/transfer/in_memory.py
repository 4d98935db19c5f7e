"""In-memory value transfer adapter.

Implements TransferPort over a simple balance book standing in for the
host environment's accounts. Recipients can be configured to reject
value, and a per-transfer cap models resource limits, so withdrawal
failures can be exercised without a real chain.
"""

import logging
from collections.abc import Iterable

from fundme.core.models import Identity
from fundme.core.ports import TransferPort

logger = logging.getLogger(__name__)


class InMemoryTransferAdapter(TransferPort):
    """Credits recipients in an in-process balance book."""

    def __init__(
        self,
        rejecting_recipients: Iterable[Identity] = (),
        max_transfer: int | None = None,
    ):
        """Initialize the balance book.

        Args:
            rejecting_recipients: Identities that refuse incoming value.
            max_transfer: Largest amount a single transfer may carry.
                None means unlimited.
        """
        if max_transfer is not None and max_transfer < 0:
            raise ValueError(f"max_transfer must be non-negative, got {max_transfer}")
        self.rejecting_recipients = frozenset(rejecting_recipients)
        self.max_transfer = max_transfer
        self.balances: dict[Identity, int] = {}
        self.transfers: list[tuple[Identity, int]] = []

    def balance_of(self, identity: Identity) -> int:
        return self.balances.get(identity, 0)

    async def send(self, recipient: Identity, amount: int) -> None:
        """Credit `amount` to `recipient`.

        Raises:
            ValueError: If amount is negative.
            RuntimeError: If the recipient rejects value or the amount
                exceeds max_transfer.
        """
        if amount < 0:
            raise ValueError(f"amount must be non-negative, got {amount}")
        if recipient in self.rejecting_recipients:
            raise RuntimeError(f"Recipient {recipient} rejected the transfer")
        if self.max_transfer is not None and amount > self.max_transfer:
            raise RuntimeError(
                f"Transfer of {amount} exceeds limit of {self.max_transfer}"
            )

        self.balances[recipient] = self.balance_of(recipient) + amount
        self.transfers.append((recipient, amount))

        logger.debug(
            f"Transferred {amount} to {recipient}",
            extra={"recipient": recipient, "amount": amount},
        )
