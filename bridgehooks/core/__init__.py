"""Pure core contracts for bridge hooks."""

from bridgehooks.core.errors import (
    AuthenticationError,
    AuthorizationError,
    BoundsError,
    BridgeHookError,
    CommitmentError,
    ConfigurationError,
    DownstreamCallFailed,
    LedgerError,
    MalformedDataError,
    RoutingMismatchError,
)

__all__ = [
    "BridgeHookError",
    "ConfigurationError",
    "AuthorizationError",
    "MalformedDataError",
    "CommitmentError",
    "RoutingMismatchError",
    "BoundsError",
    "AuthenticationError",
    "DownstreamCallFailed",
    "LedgerError",
]
