"""CLI command implementations for FundMe.

This adapter maps CLI commands (fund, withdraw, balance, funder, price,
summary) to FundingPort operations. It handles CLI-specific formatting
and error reporting. Amounts are accepted and shown in native units
("0.5"), and also reported in wei.
"""

import logging
from typing import Any

from fundme.core.conversion import (
    from_native_units,
    minimum_native_amount,
    to_native_units,
)
from fundme.core.errors import FundingError
from fundme.core.models import Identity, LedgerSnapshot
from fundme.core.ports import FundingPort

logger = logging.getLogger(__name__)


class CLICommandHandler:
    """Handles CLI commands by delegating to FundingPort.

    Domain errors and invalid arguments become error results; anything
    else propagates to the caller.
    """

    def __init__(self, funding: FundingPort):
        """Initialize the CLI command handler.

        Args:
            funding: FundingPort implementation to execute commands.
        """
        self.funding = funding

    async def fund(
        self, caller: Identity, amount: str, verbose: bool = False
    ) -> dict[str, Any]:
        """Contribute `amount` native units on behalf of `caller`.

        Args:
            caller: Identity making the contribution.
            amount: Decimal string in native units (e.g. "0.1").
            verbose: If True, log additional information.

        Returns:
            Dictionary with status and receipt fields.
        """
        try:
            receipt = await self.funding.fund(caller, to_native_units(amount))
        except (FundingError, ValueError) as e:
            logger.error(f"Failed to fund: {e}")
            return {
                "status": "error",
                "operation": "fund",
                "caller": caller,
                "message": str(e),
            }

        result = {
            "status": "success",
            "operation": "fund",
            "caller": caller,
            "amount_wei": receipt.amount,
            "total_funded_wei": receipt.total_funded,
            "first_contribution": receipt.first_contribution,
            "message": f"{caller} funded {from_native_units(receipt.amount)}",
        }

        if verbose:
            logger.info(
                f"Funded {receipt.amount} from {caller}",
                extra={"usd_equivalent": receipt.usd_equivalent, "verbose": True},
            )

        return result

    async def withdraw(self, caller: Identity, verbose: bool = False) -> dict[str, Any]:
        """Withdraw the whole balance as `caller`.

        Args:
            caller: Identity requesting the withdrawal.
            verbose: If True, log additional information.

        Returns:
            Dictionary with status and receipt fields.
        """
        try:
            receipt = await self.funding.withdraw(caller)
        except FundingError as e:
            logger.error(f"Failed to withdraw: {e}")
            return {
                "status": "error",
                "operation": "withdraw",
                "caller": caller,
                "message": str(e),
            }

        if verbose:
            logger.info(
                f"Withdrew {receipt.amount} to {receipt.owner}",
                extra={"funders_cleared": receipt.funders_cleared, "verbose": True},
            )

        return {
            "status": "success",
            "operation": "withdraw",
            "owner": receipt.owner,
            "amount_wei": receipt.amount,
            "funders_cleared": receipt.funders_cleared,
            "withdrawn_at": receipt.withdrawn_at.isoformat(),
            "message": f"Withdrew {from_native_units(receipt.amount)} to {receipt.owner}",
        }

    async def amount_funded(self, identity: Identity) -> dict[str, Any]:
        """Report how much `identity` has contributed since the last withdrawal."""
        amount = self.funding.get_address_to_amount_funded(identity)
        return {
            "status": "success",
            "operation": "balance",
            "identity": identity,
            "amount_wei": amount,
            "amount": str(from_native_units(amount)),
        }

    async def funder(self, index: int) -> dict[str, Any]:
        """Report the funder at `index`."""
        try:
            identity = self.funding.get_funder(index)
        except FundingError as e:
            logger.error(f"Failed to look up funder: {e}")
            return {
                "status": "error",
                "operation": "funder",
                "index": index,
                "message": str(e),
            }
        return {
            "status": "success",
            "operation": "funder",
            "index": index,
            "identity": identity,
        }

    async def price_feed(self) -> dict[str, Any]:
        """Report the current quote, oracle version and minimum contribution."""
        price_feed = self.funding.get_price_feed()
        quote = await price_feed.get_price()
        version = await self.funding.get_version()
        minimum_usd = self.funding.get_minimum_usd()
        minimum = minimum_native_amount(minimum_usd, quote)

        return {
            "status": "success",
            "operation": "price",
            "answer": quote.answer,
            "decimals": quote.decimals,
            "version": version,
            "minimum_usd": minimum_usd,
            "minimum_amount_wei": minimum,
            "minimum_amount": str(from_native_units(minimum)),
        }

    async def summary(self, output_format: str = "json") -> dict[str, Any]:
        """Report the ledger state.

        Args:
            output_format: Output format ('json', 'text'). Default 'json'.
        """
        snapshot = self.funding.snapshot()

        if output_format == "json":
            return {
                "status": "success",
                "operation": "summary",
                "data": {
                    "owner": snapshot.owner,
                    "custodied_balance_wei": snapshot.custodied_balance,
                    "funders": list(snapshot.funders),
                    "contributions": dict(snapshot.contributions),
                },
            }

        elif output_format == "text":
            return {
                "status": "success",
                "operation": "summary",
                "data": self._format_summary_as_text(snapshot),
            }

        else:
            return {
                "status": "error",
                "operation": "summary",
                "message": f"Unsupported format: {output_format}",
            }

    def _format_summary_as_text(self, snapshot: LedgerSnapshot) -> str:
        lines = [
            f"Owner: {snapshot.owner}",
            f"Custodied Balance: {from_native_units(snapshot.custodied_balance)}",
            f"Funders: {snapshot.funder_count}",
        ]
        for index, identity in enumerate(snapshot.funders):
            amount = from_native_units(snapshot.contributions.get(identity, 0))
            lines.append(f"  [{index}] {identity}: {amount}")
        return "\n".join(lines)
