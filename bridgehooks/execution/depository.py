"""Simulated depository keyed by caller-supplied deposit ids."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from bridgehooks.chain.ledger import Chain
from bridgehooks.core.errors import DuplicateDepositId
from bridgehooks.core.ports import Depository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepositRecord:
    deposit_id: bytes
    sender: str
    depositor: str
    token: str
    amount: int


class SimulatedDepository(Depository):
    """
    Escrow-style depository.

    Each deposit id is accepted once; replays are rejected here rather than
    by the hooks that forward into it.
    """

    def __init__(self, chain: Chain) -> None:
        self._chain = chain
        self.address = chain.deploy(self, label="Depository")
        state = chain.storage(self.address)
        state["deposits"] = {}
        state["order"] = []

    def deposit_erc20(
        self,
        sender: str,
        depositor: str,
        token: str,
        amount: int,
        deposit_id: bytes,
    ) -> None:
        state = self._chain.storage(self.address)
        if deposit_id in state["deposits"]:
            raise DuplicateDepositId(deposit_id)

        self._chain.contract(token).transfer_from(self.address, sender, self.address, amount)

        state["deposits"][deposit_id] = DepositRecord(
            deposit_id=deposit_id,
            sender=sender,
            depositor=depositor,
            token=token,
            amount=amount,
        )
        state["order"].append(deposit_id)
        logger.info(f"Depository deposit 0x{deposit_id.hex()}: {amount} from {depositor}")

    def get_deposit(self, deposit_id: bytes) -> Optional[DepositRecord]:
        return self._chain.storage(self.address)["deposits"].get(deposit_id)

    @property
    def last_deposit(self) -> Optional[DepositRecord]:
        state = self._chain.storage(self.address)
        if not state["order"]:
            return None
        return state["deposits"][state["order"][-1]]
