"""Domain errors raised by the funding ledger.

Every error leaves ledger state exactly as it was before the failing
call. Callers may retry with different parameters or identity.
"""

from .models import Identity


class FundingError(Exception):
    """Base class for all ledger domain errors."""


class InsufficientValueError(FundingError):
    """Raised when a contribution is below the USD-equivalent minimum."""

    def __init__(self, amount: int, usd_equivalent: int, minimum_usd: int):
        self.amount = amount
        self.usd_equivalent = usd_equivalent
        self.minimum_usd = minimum_usd
        super().__init__(
            f"Not enough value sent: {amount} is worth {usd_equivalent} "
            f"(USD x 1e18), minimum is {minimum_usd} USD"
        )


class NotOwnerError(FundingError):
    """Raised when someone other than the owner attempts a withdrawal."""

    def __init__(self, caller: Identity, owner: Identity):
        self.caller = caller
        self.owner = owner
        super().__init__(f"{caller} is not the owner")


class OutOfRangeError(FundingError, IndexError):
    """Raised when a funder index is beyond the current sequence."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"Funder index {index} out of range (length {length})")


class TransferFailedError(FundingError):
    """Raised when the value transfer to the owner fails.

    Chained from the transport error.
    """

    def __init__(self, recipient: Identity, amount: int):
        self.recipient = recipient
        self.amount = amount
        super().__init__(f"Transfer of {amount} to {recipient} failed")


__all__ = [
    "FundingError",
    "InsufficientValueError",
    "NotOwnerError",
    "OutOfRangeError",
    "TransferFailedError",
]
