"""Simulated downstream bridge protocols."""

from bridgehooks.execution.depository import SimulatedDepository
from bridgehooks.execution.spoke_pool import SimulatedSpokePool

__all__ = ["SimulatedSpokePool", "SimulatedDepository"]
