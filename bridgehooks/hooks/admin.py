"""Owner-gated administrative surface: ownership hand-over and balance rescue."""

from __future__ import annotations

import logging

from bridgehooks.chain.ledger import Chain
from bridgehooks.core.errors import NotOwner, ZeroAddressError
from bridgehooks.core.types import (
    Erc20Rescued,
    NativeRescued,
    OwnershipTransferred,
    is_zero_address,
    normalize_address,
)

logger = logging.getLogger(__name__)


class HookAdmin:
    """
    Administrative recovery for one hook instance.

    Lives outside the execute path. The owner is the only state it changes,
    and it is kept in the hook's chain storage so it rolls back with
    everything else.
    """

    def __init__(self, chain: Chain, hook_address: str, owner: str) -> None:
        if is_zero_address(owner):
            raise ZeroAddressError("owner")
        self._chain = chain
        self._hook = hook_address
        chain.storage(hook_address)["owner"] = normalize_address(owner)

    @property
    def owner(self) -> str:
        """Get current owner."""
        return self._chain.storage(self._hook)["owner"]

    def require_owner(self, sender: str) -> None:
        if normalize_address(sender) != self.owner:
            raise NotOwner(normalize_address(sender), self.owner)

    def transfer_ownership(self, sender: str, new_owner: str) -> None:
        with self._chain.transaction():
            self.require_owner(sender)
            if is_zero_address(new_owner):
                raise ZeroAddressError("new_owner")

            previous = self.owner
            new_owner = normalize_address(new_owner)
            self._chain.storage(self._hook)["owner"] = new_owner
            self._chain.emit(
                self._hook,
                OwnershipTransferred(previous_owner=previous, new_owner=new_owner),
            )
        logger.warning(f"Ownership of {self._hook} transferred {previous} -> {new_owner}")

    def rescue_erc20(self, sender: str, token: str, to: str, amount: int) -> None:
        """Send a stray token balance held by the hook to `to`."""
        with self._chain.transaction():
            self.require_owner(sender)
            if is_zero_address(token):
                raise ZeroAddressError("token")
            if is_zero_address(to):
                raise ZeroAddressError("to")

            self._chain.contract(token).transfer(self._hook, to, amount)
            self._chain.emit(
                self._hook,
                Erc20Rescued(token=token, to=to, amount=amount),
            )
        logger.warning(f"Rescued {amount} of {token} from {self._hook} to {to}")

    def rescue_native(self, sender: str, to: str, amount: int) -> None:
        """
        Send native balance held by the hook to `to`.

        Raises:
            NativeTransferFailed: If the recipient refuses the value
        """
        with self._chain.transaction():
            self.require_owner(sender)
            if is_zero_address(to):
                raise ZeroAddressError("to")

            self._chain.transfer_native(self._hook, to, amount)
            self._chain.emit(self._hook, NativeRescued(to=to, amount=amount))
        logger.warning(f"Rescued {amount} native from {self._hook} to {to}")
