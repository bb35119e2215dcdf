"""Pull funds into hook custody and hand them to a downstream protocol."""

from __future__ import annotations

import logging
from typing import Callable

from bridgehooks.core.errors import DownstreamCallFailed
from bridgehooks.core.ports import Erc20

logger = logging.getLogger(__name__)


class FundsForwarder:
    """
    Transfer/approval adapter shared by every hook variant.

    The downstream allowance is scoped to a single forward: set to exactly the
    amount right before the call and reset to zero right after it, whatever
    the downstream protocol actually consumed.
    """

    def __init__(self, token: Erc20, custodian: str) -> None:
        """
        Args:
            token: Base asset moved by the hook
            custodian: Address holding funds between pull and forward (the hook)
        """
        self._token = token
        self._custodian = custodian

    def pull(self, source: str, amount: int) -> None:
        """Move `amount` from `source` into custody against its allowance."""
        self._token.transfer_from(self._custodian, source, self._custodian, amount)

    def forward(
        self,
        protocol: str,
        spender: str,
        amount: int,
        deposit: Callable[[], None],
    ) -> None:
        """
        Approve `spender` for `amount`, run its deposit call, then revoke.

        Raises:
            DownstreamCallFailed: If the deposit call raises
        """
        self._token.approve(self._custodian, spender, amount)
        try:
            deposit()
        except Exception as exc:
            raise DownstreamCallFailed(protocol, str(exc)) from exc
        leftover = self._token.allowance(self._custodian, spender)
        if leftover:
            logger.debug(f"Revoking {leftover} unused allowance from {protocol}")
        self._token.approve(self._custodian, spender, 0)
