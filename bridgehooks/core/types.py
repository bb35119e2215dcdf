"""
Core domain types for bridge hooks.
Pydantic schemas for intents, commitments, fulfillment payloads and events.

Every model is frozen: commitments and payloads are decoded once per call and
never mutated afterwards.
"""

from __future__ import annotations

from typing import Annotated, Optional

from eth_utils import to_checksum_address
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_BYTES32 = b"\x00" * 32

UINT16_MAX = 2**16 - 1
UINT32_MAX = 2**32 - 1
UINT256_MAX = 2**256 - 1


def normalize_address(value: str) -> str:
    """Checksum an address; empty values collapse to the zero address."""
    if not value:
        return ZERO_ADDRESS
    return to_checksum_address(value)


def is_zero_address(value: str) -> bool:
    return normalize_address(value) == ZERO_ADDRESS


def _require_bytes32(value: bytes) -> bytes:
    if len(value) != 32:
        raise ValueError(f"expected 32 bytes, got {len(value)}")
    return value


Address = Annotated[str, AfterValidator(normalize_address)]
Bytes32 = Annotated[bytes, AfterValidator(_require_bytes32)]
Uint16 = Annotated[int, Field(ge=0, le=UINT16_MAX)]
Uint32 = Annotated[int, Field(ge=0, le=UINT32_MAX)]
Uint256 = Annotated[int, Field(ge=0, le=UINT256_MAX)]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Intent
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class Intent(_Frozen):
    """
    Upstream record of a fulfilled payment.

    Every field except ``data`` has already been validated by the
    orchestrator. ``data`` carries the commitment owned by the hook.
    """
    owner: Address
    to: Address
    escrow: Address
    deposit_id: Uint256
    amount: Uint256
    timestamp: Uint256
    payment_method: Bytes32
    fiat_currency: Bytes32
    conversion_rate: Uint256
    payee_id: Bytes32
    referrer: Address = ZERO_ADDRESS
    referrer_fee: Uint256 = 0
    post_intent_hook: Address
    data: bytes = b""


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Commitments (frozen at intent-creation time)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PoolDepositCommitment(_Frozen):
    destination_chain_id: Uint256
    destination_asset: Address
    recipient: Address
    min_output_amount: Uint256


class SignedQuoteCommitment(_Frozen):
    destination_chain_id: Uint256
    destination_currency: Address
    recipient: Address
    max_slippage_bps: Uint16
    refund_to: Address


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Fulfillment payloads (supplied at execution time)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PoolDepositFulfillment(_Frozen):
    reconciliation_id: Bytes32
    output_amount: Uint256
    quote_timestamp: Uint32
    fill_deadline: Uint32


class PaymentDetails(_Frozen):
    """Where and how much the depository expects to be paid."""
    chain_id: Uint256
    depository: Address
    currency: Address
    amount: Uint256


class SignedQuoteFulfillment(_Frozen):
    reconciliation_id: Bytes32
    order_id: Bytes32
    payment: PaymentDetails
    quote_expiration: Uint256
    destination_chain_id: Uint256
    destination_currency: Address
    recipient: Address
    refund_to: Address
    slippage_bps: Uint16
    signature: bytes = b""


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Configuration record
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HookConfig(_Frozen):
    """Immutable construction parameters shared by every hook variant."""
    base_asset: Address
    orchestrator: Address
    downstream: Address
    owner: Address
    trusted_signer: Optional[Address] = None


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Events
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HookEvent(_Frozen):
    """Base class for events emitted into the environment log."""


class PoolDepositBridgeInitiated(HookEvent):
    reconciliation_id: Bytes32
    destination_chain_id: Uint256
    destination_asset: Address
    recipient: Address
    input_amount: Uint256
    output_amount: Uint256
    quote_timestamp: Uint32
    fill_deadline: Uint32


class SignedQuoteBridgeInitiated(HookEvent):
    reconciliation_id: Bytes32
    order_id: Bytes32
    amount: Uint256
    destination_chain_id: Uint256
    destination_currency: Address
    recipient: Address
    refund_to: Address
    slippage_bps: Uint16


class Erc20Rescued(HookEvent):
    token: Address
    to: Address
    amount: Uint256


class NativeRescued(HookEvent):
    to: Address
    amount: Uint256


class OwnershipTransferred(HookEvent):
    previous_owner: Address
    new_owner: Address
