"""Fake TransferPort implementation for testing."""

from fundme.core.models import Identity
from fundme.core.ports import TransferPort


class FakeTransferPort(TransferPort):
    """In-memory transfer adapter for testing.

    Captures all transfers sent through this port for test assertions.
    """

    def __init__(self) -> None:
        """Initialize with empty transfer history."""
        self.sent: list[tuple[Identity, int]] = []
        self.send_call_count = 0
        self.should_fail: bool = False
        self.fail_message: str = "Transfer failed"

    async def send(self, recipient: Identity, amount: int) -> None:
        """Record the transfer, or fail if configured to."""
        self.send_call_count += 1

        if self.should_fail:
            raise RuntimeError(self.fail_message)

        self.sent.append((recipient, amount))

    def total_sent_to(self, recipient: Identity) -> int:
        """Sum of all amounts delivered to `recipient`."""
        return sum(amount for to, amount in self.sent if to == recipient)

    def set_should_fail(self, should_fail: bool, message: str = "Transfer failed") -> None:
        """Configure the adapter to fail on the next operation."""
        self.should_fail = should_fail
        self.fail_message = message

    def reset(self) -> None:
        """Reset all collected transfers and state."""
        self.sent.clear()
        self.send_call_count = 0
        self.should_fail = False
        self.fail_message = "Transfer failed"
