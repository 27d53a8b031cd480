"""Infrastructure layer: HTTP transport and the Robinhood integration."""
