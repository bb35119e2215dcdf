from __future__ import annotations

from typing import Callable

import pytest

from bridgehooks.chain.ledger import Chain
from bridgehooks.chain.token import SimulatedToken
from bridgehooks.core.types import HookConfig, Intent
from bridgehooks.execution.depository import SimulatedDepository
from bridgehooks.execution.spoke_pool import SimulatedSpokePool
from bridgehooks.hooks.authorization import QuoteSigner
from bridgehooks.hooks.pool_deposit import PoolDepositBridgeHook
from bridgehooks.hooks.signed_quote import SignedQuoteBridgeHook

SIGNER_KEY = "0x" + "a1" * 32

NET_AMOUNT = 1_000_000


@pytest.fixture
def chain() -> Chain:
    return Chain(chain_id=8453, timestamp=1_700_000_000)


@pytest.fixture
def token(chain: Chain) -> SimulatedToken:
    return SimulatedToken(chain, symbol="USDC", decimals=6)


@pytest.fixture
def orchestrator(chain: Chain, token: SimulatedToken) -> str:
    address = chain.new_address("orchestrator")
    token.mint(address, token.units(100))
    return address


@pytest.fixture
def owner(chain: Chain) -> str:
    return chain.new_address("owner")


@pytest.fixture
def spoke_pool(chain: Chain) -> SimulatedSpokePool:
    return SimulatedSpokePool(chain, quote_time_buffer=300, fill_deadline_buffer=3600)


@pytest.fixture
def depository(chain: Chain) -> SimulatedDepository:
    return SimulatedDepository(chain)


@pytest.fixture
def signer() -> QuoteSigner:
    return QuoteSigner(SIGNER_KEY)


@pytest.fixture
def pool_hook(chain, token, orchestrator, owner, spoke_pool) -> PoolDepositBridgeHook:
    hook = PoolDepositBridgeHook(
        chain,
        HookConfig(
            base_asset=token.address,
            orchestrator=orchestrator,
            downstream=spoke_pool.address,
            owner=owner,
        ),
    )
    token.approve(orchestrator, hook.address, token.units(100))
    return hook


@pytest.fixture
def quote_hook(chain, token, orchestrator, owner, depository, signer) -> SignedQuoteBridgeHook:
    hook = SignedQuoteBridgeHook(
        chain,
        HookConfig(
            base_asset=token.address,
            orchestrator=orchestrator,
            downstream=depository.address,
            owner=owner,
            trusted_signer=signer.address,
        ),
    )
    token.approve(orchestrator, hook.address, token.units(100))
    return hook


@pytest.fixture
def make_intent(chain: Chain) -> Callable[..., Intent]:
    payer = chain.new_address("payer")
    to = chain.new_address("taker")
    escrow = chain.new_address("escrow")

    def _make(hook_address: str, data: bytes, **overrides) -> Intent:
        fields = dict(
            owner=payer,
            to=to,
            escrow=escrow,
            deposit_id=7,
            amount=NET_AMOUNT + 10_000,
            timestamp=chain.timestamp - 60,
            payment_method=b"venmo".ljust(32, b"\x00"),
            fiat_currency=b"USD".ljust(32, b"\x00"),
            conversion_rate=10**18,
            payee_id=b"\x42" * 32,
            post_intent_hook=hook_address,
            data=data,
        )
        fields.update(overrides)
        return Intent(**fields)

    return _make
