from __future__ import annotations

import pytest

from bridgehooks.chain.token import SimulatedToken
from bridgehooks.core.errors import (
    InsufficientAllowance,
    InsufficientBalance,
    NativeTransferFailed,
)
from bridgehooks.core.types import ZERO_ADDRESS, NativeRescued


def test_new_addresses_are_distinct_and_checksummed(chain) -> None:
    a = chain.new_address("account")
    b = chain.new_address("account")
    assert a != b
    assert a.startswith("0x") and len(a) == 42


def test_unknown_contract_lookup_raises(chain) -> None:
    with pytest.raises(LookupError):
        chain.contract("0x00000000000000000000000000000000000000AA")


def test_transaction_rolls_back_storage_native_and_events(chain, token) -> None:
    alice = chain.new_address("alice")
    bob = chain.new_address("bob")
    token.mint(alice, 100)
    chain.fund_native(alice, 5)

    with pytest.raises(RuntimeError):
        with chain.transaction():
            token.transfer(alice, bob, 60)
            chain.transfer_native(alice, bob, 5)
            chain.emit(alice, NativeRescued(to=bob, amount=5))
            assert chain.in_transaction
            raise RuntimeError("boom")

    assert token.balance_of(alice) == 100
    assert token.balance_of(bob) == 0
    assert chain.native_balance(alice) == 5
    assert chain.events == []
    assert not chain.in_transaction


def test_nested_transaction_acts_as_savepoint(chain, token) -> None:
    alice = chain.new_address("alice")
    bob = chain.new_address("bob")
    token.mint(alice, 100)

    with chain.transaction():
        token.transfer(alice, bob, 10)
        with pytest.raises(InsufficientBalance):
            with chain.transaction():
                token.transfer(alice, bob, 20)
                token.transfer(alice, bob, 1_000)

    assert token.balance_of(bob) == 10


def test_rolled_back_deployment_is_forgotten(chain) -> None:
    deployed = []
    with pytest.raises(RuntimeError):
        with chain.transaction():
            deployed.append(SimulatedToken(chain, symbol="TMP").address)
            chain.reject_native(deployed[0])
            raise RuntimeError("boom")

    with pytest.raises(LookupError):
        chain.contract(deployed[0])

    alice = chain.new_address("alice")
    chain.fund_native(alice, 1)
    chain.transfer_native(alice, deployed[0], 1)
    assert chain.native_balance(deployed[0]) == 1


def test_transfer_from_consumes_allowance(chain, token) -> None:
    owner = chain.new_address("owner")
    spender = chain.new_address("spender")
    token.mint(owner, 100)
    token.approve(owner, spender, 40)

    token.transfer_from(spender, owner, spender, 30)
    assert token.allowance(owner, spender) == 10

    with pytest.raises(InsufficientAllowance) as exc_info:
        token.transfer_from(spender, owner, spender, 11)
    assert exc_info.value.allowance == 10
    assert exc_info.value.needed == 11


def test_native_transfer_to_rejecting_account_fails(chain) -> None:
    alice = chain.new_address("alice")
    wall = chain.new_address("wall")
    chain.fund_native(alice, 5)
    chain.reject_native(wall)

    with pytest.raises(NativeTransferFailed, match="rejected"):
        chain.transfer_native(alice, wall, 5)
    with pytest.raises(NativeTransferFailed, match="zero recipient"):
        chain.transfer_native(alice, ZERO_ADDRESS, 5)
    assert chain.native_balance(alice) == 5


def test_native_transfer_requires_balance(chain) -> None:
    alice = chain.new_address("alice")
    with pytest.raises(InsufficientBalance):
        chain.transfer_native(alice, chain.new_address("bob"), 1)
