"""Domain protocols (ports)."""

from robinhood_connector.domain.protocols.brokerage_protocol import BrokerageProtocol

__all__ = ["BrokerageProtocol"]
