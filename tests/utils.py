"""Test utilities and shared mocks."""

import httpx


class MockLogger:
    """Mock logger that accepts and drops every call."""

    def debug(self, *args, **kwargs): pass
    def info(self, *args, **kwargs): pass
    def warning(self, *args, **kwargs): pass
    def error(self, *args, **kwargs): pass
    def exception(self, *args, **kwargs): pass


def mock_client(handler) -> httpx.AsyncClient:
    """An httpx client whose requests are answered by handler"""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
