"""ERC20-style token with pull-based allowances, backed by chain storage."""

from __future__ import annotations

import logging
from typing import Dict

from bridgehooks.chain.ledger import Chain
from bridgehooks.core.errors import InsufficientAllowance, InsufficientBalance
from bridgehooks.core.ports import Erc20
from bridgehooks.core.types import normalize_address

logger = logging.getLogger(__name__)


class SimulatedToken(Erc20):
    """Stable-asset token; every mutation goes through the chain's storage."""

    def __init__(self, chain: Chain, symbol: str = "USDC", decimals: int = 6) -> None:
        self._chain = chain
        self.symbol = symbol
        self.decimals = decimals
        self.address = chain.deploy(self, label=symbol)
        state = chain.storage(self.address)
        state["balances"] = {}
        state["allowances"] = {}
        state["total_supply"] = 0

    def units(self, whole: int) -> int:
        """Convert whole tokens to base units (usdc(50) style helper)."""
        return whole * 10**self.decimals

    @property
    def _balances(self) -> Dict[str, int]:
        return self._chain.storage(self.address)["balances"]

    @property
    def _allowances(self) -> Dict[tuple, int]:
        return self._chain.storage(self.address)["allowances"]

    @property
    def total_supply(self) -> int:
        return self._chain.storage(self.address)["total_supply"]

    def mint(self, to: str, amount: int) -> None:
        to = normalize_address(to)
        self._balances[to] = self._balances.get(to, 0) + amount
        self._chain.storage(self.address)["total_supply"] += amount

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalize_address(account), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        key = (normalize_address(owner), normalize_address(spender))
        if amount:
            self._allowances[key] = amount
        else:
            self._allowances.pop(key, None)

    def transfer(self, sender: str, to: str, amount: int) -> None:
        self._move(normalize_address(sender), normalize_address(to), amount)

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        owner = normalize_address(owner)
        spender = normalize_address(spender)
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise InsufficientAllowance(owner, spender, allowed, amount)
        self._move(owner, normalize_address(to), amount)
        self.approve(owner, spender, allowed - amount)

    def _move(self, sender: str, to: str, amount: int) -> None:
        balance = self._balances.get(sender, 0)
        if balance < amount:
            raise InsufficientBalance(sender, balance, amount)
        self._balances[sender] = balance - amount
        self._balances[to] = self._balances.get(to, 0) + amount
        logger.debug(f"{self.symbol} transfer {sender} -> {to}: {amount}")
