"""Hosted edge function client."""

from fieldstock.infrastructure.edge.circuit_breaker import CircuitBreakerState
from fieldstock.infrastructure.edge.client import EdgeFunctionClient

# Singleton instance
_edge_client: EdgeFunctionClient | None = None


def get_edge_client() -> EdgeFunctionClient:
    """Get singleton edge function client."""
    global _edge_client
    if _edge_client is None:
        _edge_client = EdgeFunctionClient()
    return _edge_client


def reset_edge_client() -> None:
    """Reset the singleton (for testing)."""
    global _edge_client
    _edge_client = None


__all__ = [
    "CircuitBreakerState",
    "EdgeFunctionClient",
    "get_edge_client",
    "reset_edge_client",
]
