"""Unit tests for CLI command handling.

Tests verify that CLICommandHandler:
- Converts native-unit strings to wei before funding
- Returns success dictionaries with receipt fields
- Turns domain errors into error dictionaries instead of raising
"""

import pytest

from fundme.adapters.cli.commands import CLICommandHandler
from fundme.core.ledger import FundingLedger
from fundme.core.models import NATIVE_UNIT
from fundme.tests.fakes import FakePriceFeedPort, FakeTransferPort

OWNER = "0xowner"
ALICE = "0xa11ce"


# ============================================================================
# Test Fixtures
# ============================================================================


@pytest.fixture
def transfer() -> FakeTransferPort:
    return FakeTransferPort()


@pytest.fixture
def ledger(transfer: FakeTransferPort) -> FundingLedger:
    return FundingLedger(owner=OWNER, price_feed=FakePriceFeedPort(), transfer=transfer)


@pytest.fixture
def handler(ledger: FundingLedger) -> CLICommandHandler:
    return CLICommandHandler(ledger)


# ============================================================================
# fund / withdraw
# ============================================================================


class TestFundCommand:
    """Test the fund command."""

    @pytest.mark.asyncio
    async def test_fund_success(self, handler: CLICommandHandler, ledger: FundingLedger) -> None:
        result = await handler.fund(ALICE, "1")

        assert result["status"] == "success"
        assert result["operation"] == "fund"
        assert result["amount_wei"] == NATIVE_UNIT
        assert result["first_contribution"] is True
        assert ledger.get_address_to_amount_funded(ALICE) == NATIVE_UNIT

    @pytest.mark.asyncio
    async def test_fund_below_minimum(self, handler: CLICommandHandler) -> None:
        result = await handler.fund(ALICE, "0.01", verbose=True)

        assert result["status"] == "error"
        assert "Not enough value" in result["message"]

    @pytest.mark.asyncio
    async def test_fund_invalid_amount(self, handler: CLICommandHandler) -> None:
        result = await handler.fund(ALICE, "lots")

        assert result["status"] == "error"
        assert "Invalid amount" in result["message"]


class TestWithdrawCommand:
    """Test the withdraw command."""

    @pytest.mark.asyncio
    async def test_withdraw_success(
        self, handler: CLICommandHandler, transfer: FakeTransferPort
    ) -> None:
        await handler.fund(ALICE, "2")

        result = await handler.withdraw(OWNER, verbose=True)

        assert result["status"] == "success"
        assert result["amount_wei"] == 2 * NATIVE_UNIT
        assert result["funders_cleared"] == 1
        assert transfer.sent == [(OWNER, 2 * NATIVE_UNIT)]

    @pytest.mark.asyncio
    async def test_withdraw_by_non_owner(self, handler: CLICommandHandler) -> None:
        result = await handler.withdraw(ALICE)

        assert result["status"] == "error"
        assert "not the owner" in result["message"]

    @pytest.mark.asyncio
    async def test_withdraw_transfer_failure(
        self, handler: CLICommandHandler, transfer: FakeTransferPort
    ) -> None:
        await handler.fund(ALICE, "1")
        transfer.set_should_fail(True)

        result = await handler.withdraw(OWNER)

        assert result["status"] == "error"
        assert "failed" in result["message"]


# ============================================================================
# Lookups
# ============================================================================


class TestLookupCommands:
    """Test balance, funder, price and summary commands."""

    @pytest.mark.asyncio
    async def test_amount_funded(self, handler: CLICommandHandler) -> None:
        await handler.fund(ALICE, "0.5")

        result = await handler.amount_funded(ALICE)

        assert result["amount_wei"] == NATIVE_UNIT // 2
        assert result["amount"] == "0.5"

    @pytest.mark.asyncio
    async def test_funder(self, handler: CLICommandHandler) -> None:
        await handler.fund(ALICE, "1")

        assert (await handler.funder(0))["identity"] == ALICE
        missing = await handler.funder(1)
        assert missing["status"] == "error"
        assert "out of range" in missing["message"]

    @pytest.mark.asyncio
    async def test_price_feed(self, handler: CLICommandHandler) -> None:
        result = await handler.price_feed()

        assert result["answer"] == 200000000000
        assert result["decimals"] == 8
        assert result["version"] == 4
        assert result["minimum_amount_wei"] == 25 * 10**15
        assert result["minimum_amount"] == "0.025"

    @pytest.mark.asyncio
    async def test_summary_json(self, handler: CLICommandHandler) -> None:
        await handler.fund(ALICE, "1")

        result = await handler.summary()

        assert result["data"]["owner"] == OWNER
        assert result["data"]["custodied_balance_wei"] == NATIVE_UNIT
        assert result["data"]["funders"] == [ALICE]
        assert result["data"]["contributions"] == {ALICE: NATIVE_UNIT}

    @pytest.mark.asyncio
    async def test_summary_text(self, handler: CLICommandHandler) -> None:
        await handler.fund(ALICE, "1")

        result = await handler.summary(output_format="text")

        assert "Owner: 0xowner" in result["data"]
        assert "[0] 0xa11ce: 1" in result["data"]

    @pytest.mark.asyncio
    async def test_summary_unsupported_format(self, handler: CLICommandHandler) -> None:
        result = await handler.summary(output_format="yaml")

        assert result["status"] == "error"
        assert "Unsupported format" in result["message"]
