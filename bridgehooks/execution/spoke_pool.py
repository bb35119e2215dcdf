"""Simulated cross-chain spoke pool with configurable clock and buffers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from bridgehooks.chain.ledger import Chain
from bridgehooks.core.ports import SpokePool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolDeposit:
    sender: str
    depositor: str
    recipient: str
    input_token: str
    output_token: str
    input_amount: int
    output_amount: int
    destination_chain_id: int
    exclusive_relayer: str
    quote_timestamp: int
    fill_deadline: int
    exclusivity_deadline: int
    message: bytes


class SimulatedSpokePool(SpokePool):
    """
    Deterministic spoke pool.

    Pulls the input amount from the sender against its allowance and records
    the deposit. Current time follows the chain unless pinned.
    """

    def __init__(
        self,
        chain: Chain,
        quote_time_buffer: int = 3600,
        fill_deadline_buffer: int = 6 * 3600,
    ) -> None:
        self._chain = chain
        self.address = chain.deploy(self, label="SpokePool")
        state = chain.storage(self.address)
        state["current_time"] = None
        state["quote_time_buffer"] = quote_time_buffer
        state["fill_deadline_buffer"] = fill_deadline_buffer
        state["deposits"] = []
        state["paused"] = False

    def set_current_time(self, timestamp: Optional[int]) -> None:
        """Pin the pool clock; None follows the chain timestamp again."""
        self._chain.storage(self.address)["current_time"] = timestamp

    def set_buffers(self, quote_time_buffer: int, fill_deadline_buffer: int) -> None:
        state = self._chain.storage(self.address)
        state["quote_time_buffer"] = quote_time_buffer
        state["fill_deadline_buffer"] = fill_deadline_buffer

    def set_paused(self, paused: bool) -> None:
        self._chain.storage(self.address)["paused"] = paused

    def get_current_time(self) -> int:
        pinned = self._chain.storage(self.address)["current_time"]
        return self._chain.timestamp if pinned is None else pinned

    def deposit_quote_time_buffer(self) -> int:
        return self._chain.storage(self.address)["quote_time_buffer"]

    def fill_deadline_buffer(self) -> int:
        return self._chain.storage(self.address)["fill_deadline_buffer"]

    @property
    def deposits(self) -> list[PoolDeposit]:
        return list(self._chain.storage(self.address)["deposits"])

    @property
    def last_deposit(self) -> Optional[PoolDeposit]:
        deposits = self._chain.storage(self.address)["deposits"]
        return deposits[-1] if deposits else None

    def deposit_v3(
        self,
        sender: str,
        depositor: str,
        recipient: str,
        input_token: str,
        output_token: str,
        input_amount: int,
        output_amount: int,
        destination_chain_id: int,
        exclusive_relayer: str,
        quote_timestamp: int,
        fill_deadline: int,
        exclusivity_deadline: int,
        message: bytes,
    ) -> None:
        if self._chain.storage(self.address)["paused"]:
            raise RuntimeError("deposits paused")

        token = self._chain.contract(input_token)
        token.transfer_from(self.address, sender, self.address, input_amount)

        deposit = PoolDeposit(
            sender=sender,
            depositor=depositor,
            recipient=recipient,
            input_token=input_token,
            output_token=output_token,
            input_amount=input_amount,
            output_amount=output_amount,
            destination_chain_id=destination_chain_id,
            exclusive_relayer=exclusive_relayer,
            quote_timestamp=quote_timestamp,
            fill_deadline=fill_deadline,
            exclusivity_deadline=exclusivity_deadline,
            message=message,
        )
        self._chain.storage(self.address)["deposits"].append(deposit)
        logger.info(
            f"SpokePool deposit: {input_amount} -> chain {destination_chain_id} for {recipient}"
        )
