"""Composition root for the FundMe custody system.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Ledger initialization
- Dependency injection
- Interactive command loop
"""

import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any

from fundme.adapters.cli.commands import CLICommandHandler
from fundme.adapters.price_feed.http import HttpPriceFeedAdapter
from fundme.adapters.price_feed.mock import MockV3Aggregator
from fundme.adapters.transfer.in_memory import InMemoryTransferAdapter
from fundme.config import Settings, load_settings
from fundme.core.ledger import FundingLedger
from fundme.core.ports import PriceFeedPort


@dataclass
class Components:
    """Everything the composition root wires together."""

    ledger: FundingLedger
    price_feed: PriceFeedPort
    transfer: InMemoryTransferAdapter
    cli_handler: CLICommandHandler


def build_components(settings: Settings) -> Components:
    """Instantiate adapters and the ledger from settings.

    Args:
        settings: Validated application settings.

    Returns:
        Components with the ledger and its collaborators.

    Raises:
        ValueError: If the price feed backend is unknown.
    """
    logger = logging.getLogger(__name__)

    # Price feed adapter - select based on config
    price_feed: PriceFeedPort
    if settings.price_feed_backend == "mock":
        price_feed = MockV3Aggregator(
            decimals=settings.mock_price_decimals,
            initial_answer=settings.mock_price_initial_answer,
        )
        logger.info("Price feed adapter: mock aggregator")
    elif settings.price_feed_backend == "http":
        price_feed = HttpPriceFeedAdapter(
            api_url=settings.price_feed_url,
            api_key=settings.price_feed_api_key,
            timeout_seconds=settings.price_feed_timeout_seconds,
        )
        logger.info(f"Price feed adapter: HTTP ({settings.price_feed_url})")
    else:
        raise ValueError(f"Unknown price feed backend: {settings.price_feed_backend}")

    transfer = InMemoryTransferAdapter(max_transfer=settings.max_transfer)

    ledger = FundingLedger(
        owner=settings.owner,
        price_feed=price_feed,
        transfer=transfer,
        minimum_usd=settings.minimum_usd,
    )
    logger.info(
        f"Ledger initialized for owner {settings.owner}",
        extra={"minimum_usd": settings.minimum_usd},
    )

    return Components(
        ledger=ledger,
        price_feed=price_feed,
        transfer=transfer,
        cli_handler=CLICommandHandler(ledger),
    )


async def _run_cli_interactive(components: Components) -> None:
    """Run interactive CLI loop.

    Provides a REPL-like interface for ledger commands.

    Args:
        components: Wired components to execute commands against.
    """
    logger = logging.getLogger(__name__)
    logger.info("Starting interactive CLI. Type 'help' for available commands or 'exit' to quit.")

    loop = asyncio.get_running_loop()

    while True:
        try:
            # Read command from stdin in a thread to avoid blocking
            command_line = await loop.run_in_executor(None, input, "fundme> ")

            command_line = command_line.strip()

            if not command_line:
                continue

            if command_line.lower() == "exit":
                logger.info("Exiting CLI")
                break

            if command_line.lower() == "help":
                _print_cli_help()
                continue

            parts = command_line.split(maxsplit=1)
            command = parts[0].lower()
            args_str = parts[1] if len(parts) > 1 else ""

            try:
                args = json.loads(args_str) if args_str else {}
            except json.JSONDecodeError:
                logger.error("Invalid JSON arguments. Use 'help' for command syntax.")
                continue

            try:
                result = await _execute_cli_command(components, command, args)
                print(json.dumps(result, indent=2, default=str))
            except Exception as e:
                logger.error(f"Command execution error: {e}", exc_info=True)
                print(json.dumps({"status": "error", "message": str(e)}, indent=2))

        except EOFError:
            logger.info("EOF received, exiting CLI")
            break
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            continue


def _require(args: dict[str, Any], name: str) -> Any:
    if name not in args:
        raise ValueError(f"Missing required parameter: {name}")
    return args[name]


async def _execute_cli_command(
    components: Components,
    command: str,
    args: dict[str, Any],
) -> dict[str, Any]:
    """Execute a CLI command.

    Args:
        components: Wired components.
        command: Command name.
        args: Command arguments.

    Returns:
        Command result dictionary.

    Raises:
        ValueError: If command is not recognized or a parameter is missing.
    """
    cli_handler = components.cli_handler

    if command == "fund":
        return await cli_handler.fund(
            caller=_require(args, "caller"),
            amount=str(_require(args, "amount")),
            verbose=args.get("verbose", False),
        )

    elif command == "withdraw":
        return await cli_handler.withdraw(
            caller=_require(args, "caller"),
            verbose=args.get("verbose", False),
        )

    elif command == "balance":
        return await cli_handler.amount_funded(_require(args, "identity"))

    elif command == "funder":
        return await cli_handler.funder(int(_require(args, "index")))

    elif command == "price":
        return await cli_handler.price_feed()

    elif command == "update-price":
        if not isinstance(components.price_feed, MockV3Aggregator):
            raise ValueError("update-price is only available with the mock price feed")
        round_data = components.price_feed.update_answer(int(_require(args, "answer")))
        return {
            "status": "success",
            "operation": "update-price",
            "round_id": round_data.round_id,
            "answer": round_data.answer,
        }

    elif command == "summary":
        return await cli_handler.summary(output_format=args.get("format", "json"))

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  fund
    Contribute native value on behalf of a caller.
    Required: caller, amount (native units, e.g. "0.1")

    Example: fund {"caller": "0xabc", "amount": "1"}

  withdraw
    Send the whole balance to the owner. Only the owner may call this.
    Required: caller

    Example: withdraw {"caller": "0x0000000000000000000000000000000000000001"}

  balance
    Show how much an identity has contributed.
    Required: identity

    Example: balance {"identity": "0xabc"}

  funder
    Show the funder at a position in contribution order.
    Required: index

    Example: funder {"index": 0}

  price
    Show the current quote and the minimum contribution.

  update-price
    Set a new answer on the mock aggregator.
    Required: answer (scaled by the aggregator decimals)

    Example: update-price {"answer": 250000000000}

  summary
    Show owner, balance and funders.
    Optional: format ("json" or "text")

  help
    Show this help message.

  exit
    Exit the CLI.

Note: All commands accept arguments as a single JSON object.
Provide the JSON after the command name on the same line.
    """
    print(help_text)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


async def bootstrap() -> None:
    """Load configuration, wire adapters, and start the command loop.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Instantiate adapters and the ledger
    4. Run the interactive CLI
    """
    settings = load_settings()

    configure_logging("DEBUG" if settings.debug else settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info("Loading FundMe custody system...")

    components = build_components(settings)

    try:
        await _run_cli_interactive(components)
    finally:
        if isinstance(components.price_feed, HttpPriceFeedAdapter):
            await components.price_feed.close()


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
