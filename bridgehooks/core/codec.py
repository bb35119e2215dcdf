"""
Commitment / Payload Codec
ABI encoding of the opaque blobs a hook receives.

A blob is accepted only if it is the canonical ABI encoding of its variant's
fixed schema: truncated, over-long, badly padded or otherwise non-canonical
input is rejected instead of being decoded into default values.
"""

from typing import Any, Tuple, Type

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak

from .errors import MalformedCommitment, MalformedDataError, MalformedFulfillment
from .types import (
    Intent,
    PaymentDetails,
    PoolDepositCommitment,
    PoolDepositFulfillment,
    SignedQuoteCommitment,
    SignedQuoteFulfillment,
)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Schemas (fixed field order)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

POOL_DEPOSIT_COMMITMENT_TYPE = "(uint256,address,address,uint256)"
SIGNED_QUOTE_COMMITMENT_TYPE = "(uint256,address,address,uint16,address)"

POOL_DEPOSIT_FULFILLMENT_TYPE = "(bytes32,uint256,uint32,uint32)"
PAYMENT_DETAILS_TYPE = "(uint256,address,address,uint256)"
SIGNED_QUOTE_FULFILLMENT_TYPE = (
    f"(bytes32,bytes32,{PAYMENT_DETAILS_TYPE},uint256,uint256,address,address,address,uint16,bytes)"
)

INTENT_TYPE = (
    "(address,address,address,uint256,uint256,uint256,"
    "bytes32,bytes32,uint256,bytes32,address,uint256,address,bytes)"
)


def _decode_canonical(
    abi_type: str,
    data: bytes,
    error_cls: Type[MalformedDataError],
    schema: str,
) -> Tuple[Any, ...]:
    """Decode a single ABI tuple and insist the input was its canonical encoding."""
    if not isinstance(data, (bytes, bytearray)):
        raise error_cls(schema, f"expected bytes, got {type(data).__name__}")
    data = bytes(data)

    try:
        (values,) = decode([abi_type], data)
    except DecodingError as exc:
        raise error_cls(schema, str(exc)) from exc

    if encode([abi_type], [values]) != data:
        raise error_cls(schema, f"non-canonical encoding ({len(data)} bytes)")
    return values


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Pool-deposit variant
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def encode_pool_deposit_commitment(commitment: PoolDepositCommitment) -> bytes:
    return encode(
        [POOL_DEPOSIT_COMMITMENT_TYPE],
        [(
            commitment.destination_chain_id,
            commitment.destination_asset,
            commitment.recipient,
            commitment.min_output_amount,
        )],
    )


def decode_pool_deposit_commitment(data: bytes) -> PoolDepositCommitment:
    chain_id, asset, recipient, min_output = _decode_canonical(
        POOL_DEPOSIT_COMMITMENT_TYPE, data, MalformedCommitment, "PoolDepositCommitment"
    )
    return PoolDepositCommitment(
        destination_chain_id=chain_id,
        destination_asset=asset,
        recipient=recipient,
        min_output_amount=min_output,
    )


def encode_pool_deposit_fulfillment(payload: PoolDepositFulfillment) -> bytes:
    return encode(
        [POOL_DEPOSIT_FULFILLMENT_TYPE],
        [(
            payload.reconciliation_id,
            payload.output_amount,
            payload.quote_timestamp,
            payload.fill_deadline,
        )],
    )


def decode_pool_deposit_fulfillment(data: bytes) -> PoolDepositFulfillment:
    reconciliation_id, output_amount, quote_ts, fill_deadline = _decode_canonical(
        POOL_DEPOSIT_FULFILLMENT_TYPE, data, MalformedFulfillment, "PoolDepositFulfillment"
    )
    return PoolDepositFulfillment(
        reconciliation_id=reconciliation_id,
        output_amount=output_amount,
        quote_timestamp=quote_ts,
        fill_deadline=fill_deadline,
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Signed-quote variant
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def encode_signed_quote_commitment(commitment: SignedQuoteCommitment) -> bytes:
    return encode(
        [SIGNED_QUOTE_COMMITMENT_TYPE],
        [(
            commitment.destination_chain_id,
            commitment.destination_currency,
            commitment.recipient,
            commitment.max_slippage_bps,
            commitment.refund_to,
        )],
    )


def decode_signed_quote_commitment(data: bytes) -> SignedQuoteCommitment:
    chain_id, currency, recipient, max_slippage, refund_to = _decode_canonical(
        SIGNED_QUOTE_COMMITMENT_TYPE, data, MalformedCommitment, "SignedQuoteCommitment"
    )
    return SignedQuoteCommitment(
        destination_chain_id=chain_id,
        destination_currency=currency,
        recipient=recipient,
        max_slippage_bps=max_slippage,
        refund_to=refund_to,
    )


def encode_signed_quote_fulfillment(payload: SignedQuoteFulfillment) -> bytes:
    payment = payload.payment
    return encode(
        [SIGNED_QUOTE_FULFILLMENT_TYPE],
        [(
            payload.reconciliation_id,
            payload.order_id,
            (payment.chain_id, payment.depository, payment.currency, payment.amount),
            payload.quote_expiration,
            payload.destination_chain_id,
            payload.destination_currency,
            payload.recipient,
            payload.refund_to,
            payload.slippage_bps,
            payload.signature,
        )],
    )


def decode_signed_quote_fulfillment(data: bytes) -> SignedQuoteFulfillment:
    (
        reconciliation_id,
        order_id,
        (pay_chain_id, pay_depository, pay_currency, pay_amount),
        quote_expiration,
        destination_chain_id,
        destination_currency,
        recipient,
        refund_to,
        slippage_bps,
        signature,
    ) = _decode_canonical(
        SIGNED_QUOTE_FULFILLMENT_TYPE, data, MalformedFulfillment, "SignedQuoteFulfillment"
    )
    return SignedQuoteFulfillment(
        reconciliation_id=reconciliation_id,
        order_id=order_id,
        payment=PaymentDetails(
            chain_id=pay_chain_id,
            depository=pay_depository,
            currency=pay_currency,
            amount=pay_amount,
        ),
        quote_expiration=quote_expiration,
        destination_chain_id=destination_chain_id,
        destination_currency=destination_currency,
        recipient=recipient,
        refund_to=refund_to,
        slippage_bps=slippage_bps,
        signature=signature,
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Intent digest
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def encode_intent(intent: Intent) -> bytes:
    """ABI-encode every intent field in canonical order."""
    return encode(
        [INTENT_TYPE],
        [(
            intent.owner,
            intent.to,
            intent.escrow,
            intent.deposit_id,
            intent.amount,
            intent.timestamp,
            intent.payment_method,
            intent.fiat_currency,
            intent.conversion_rate,
            intent.payee_id,
            intent.referrer,
            intent.referrer_fee,
            intent.post_intent_hook,
            intent.data,
        )],
    )


def intent_digest(intent: Intent) -> bytes:
    """keccak256 over the full intent; binds an authorization to one intent."""
    return keccak(encode_intent(intent))
