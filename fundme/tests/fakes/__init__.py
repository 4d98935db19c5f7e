"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakePriceFeedPort: Settable price quote with call tracking
- FakeTransferPort: Captured transfers, configurable failure
"""

from .price_feed import FakePriceFeedPort
from .transfer import FakeTransferPort

__all__ = [
    "FakePriceFeedPort",
    "FakeTransferPort",
]
