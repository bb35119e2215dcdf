"""Pure port definitions for hooks and the downstream protocols they call."""

from __future__ import annotations

from typing import Protocol

from .types import Intent


class Erc20(Protocol):
    address: str

    def balance_of(self, account: str) -> int:
        """Return the token balance held by an account."""

    def allowance(self, owner: str, spender: str) -> int:
        """Return how much `spender` may pull from `owner`."""

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Move `amount` from `sender` to `to`."""

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        """Move `amount` from `owner` to `to` against `spender`'s allowance."""

    def approve(self, owner: str, spender: str, amount: int) -> None:
        """Set `spender`'s allowance over `owner`'s balance to exactly `amount`."""


class SpokePool(Protocol):
    address: str

    def get_current_time(self) -> int:
        """Return the pool's notion of now."""

    def deposit_quote_time_buffer(self) -> int:
        """Return the symmetric tolerance for quote timestamps."""

    def fill_deadline_buffer(self) -> int:
        """Return how far in the future a fill deadline may be."""

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
        """Pull `input_amount` from `sender` and open a cross-chain deposit."""


class Depository(Protocol):
    address: str

    def deposit_erc20(
        self,
        sender: str,
        depositor: str,
        token: str,
        amount: int,
        deposit_id: bytes,
    ) -> None:
        """Pull `amount` of `token` from `sender` keyed by `deposit_id`."""


class PostIntentHook(Protocol):
    address: str

    def execute(
        self,
        intent: Intent,
        net_amount: int,
        fulfill_data: bytes,
        *,
        sender: str,
    ) -> None:
        """Validate the fulfillment and forward `net_amount` downstream."""
