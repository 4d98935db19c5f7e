"""Value transfer adapters implementing TransferPort.

Implementations:
- In-memory balance book (simulated environment)
"""
