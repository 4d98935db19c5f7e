"""External adapters for the FundMe custody system.

This package contains all external dependencies (HTTP price services,
the simulated value-transfer environment, the CLI) and provides
implementations of the core port interfaces.

Adapter Organization:

- price_feed/: Adapters for reading USD quotes (mock aggregator, HTTP)
- transfer/: Adapters for moving native value (in-memory balance book)
- cli/: Command-line interface commands
"""
