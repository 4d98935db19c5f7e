"""Unit tests for MockV3Aggregator."""

from datetime import UTC, datetime

import pytest

from fundme.adapters.price_feed.mock import MockV3Aggregator
from fundme.core.errors import InsufficientValueError
from fundme.core.ledger import FundingLedger
from fundme.core.models import NATIVE_UNIT, PriceQuote
from fundme.tests.fakes import FakeTransferPort


@pytest.fixture
def aggregator() -> MockV3Aggregator:
    """Create an aggregator with the development defaults."""
    return MockV3Aggregator()


def test_defaults(aggregator: MockV3Aggregator) -> None:
    """Defaults quote 2000 USD with 8 decimals in round 1."""
    assert aggregator.decimals == 8
    assert aggregator.latest_answer == 200000000000
    assert aggregator.latest_round == 1
    assert aggregator.version == 0


@pytest.mark.asyncio
async def test_get_price(aggregator: MockV3Aggregator) -> None:
    assert await aggregator.get_price() == PriceQuote(answer=200000000000, decimals=8)
    assert await aggregator.get_version() == 0


def test_update_answer_starts_new_round(aggregator: MockV3Aggregator) -> None:
    """Each update is a new round and earlier rounds stay readable."""
    round_data = aggregator.update_answer(2500 * 10**8)

    assert round_data.round_id == 2
    assert round_data.answered_in_round == 2
    assert aggregator.latest_round == 2
    assert aggregator.latest_answer == 2500 * 10**8
    assert aggregator.get_round_data(1).answer == 2000 * 10**8


def test_update_round_data(aggregator: MockV3Aggregator) -> None:
    """Explicit rounds become the latest round."""
    started = datetime(2024, 1, 1, tzinfo=UTC)
    updated = datetime(2024, 1, 1, 0, 5, tzinfo=UTC)

    aggregator.update_round_data(round_id=42, answer=1, started_at=started, updated_at=updated)

    latest = aggregator.latest_round_data()
    assert latest.round_id == 42
    assert latest.started_at == started
    assert aggregator.latest_timestamp == updated


def test_unknown_round(aggregator: MockV3Aggregator) -> None:
    with pytest.raises(LookupError, match="round 7"):
        aggregator.get_round_data(7)


def test_rejects_negative_decimals() -> None:
    with pytest.raises(ValueError, match="decimals"):
        MockV3Aggregator(decimals=-1)


@pytest.mark.asyncio
async def test_ledger_sees_price_updates(aggregator: MockV3Aggregator) -> None:
    """A price drop between contributions raises the effective minimum."""
    ledger = FundingLedger(
        owner="0xowner", price_feed=aggregator, transfer=FakeTransferPort()
    )
    amount = NATIVE_UNIT // 20  # 100 USD at 2000, 25 USD at 500

    await ledger.fund("0xa", amount)
    aggregator.update_answer(500 * 10**8)

    with pytest.raises(InsufficientValueError):
        await ledger.fund("0xb", amount)
    assert ledger.get_address_to_amount_funded("0xb") == 0
