"""Domain layer: standardized records, enums, value objects and ports.

Depends only on the core layer. Nothing here knows about HTTP or about
Robinhood's wire format.
"""
