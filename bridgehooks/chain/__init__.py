"""Simulated execution environment."""

from bridgehooks.chain.ledger import Chain, EventRecord
from bridgehooks.chain.token import SimulatedToken

__all__ = ["Chain", "EventRecord", "SimulatedToken"]
