"""Command-line interface adapters.

Provides CLI commands for interacting with a funding ledger:
- fund: Contribute native value on behalf of a caller
- withdraw: Pay out the whole balance to the owner
- balance / funder: Inspect tracked contributions
- price: Show the current quote and minimum contribution
- summary: Report on ledger state
"""
