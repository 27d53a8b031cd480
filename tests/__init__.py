"""Test suite for the Robinhood connector.

Test structure:
- unit/: Unit tests - config, mappers, error types, provider orchestration
  with mocked API
- integration/: HTTP-level tests - client and API against pytest-httpx
"""
