"""Price feed adapters implementing PriceFeedPort.

Implementations support multiple sources:
- Mock aggregator (in-memory, hand-driven, for development networks)
- HTTP (REST price service)
"""
