from __future__ import annotations

import pytest
from eth_abi import encode
from eth_utils import keccak

from bridgehooks.core.codec import (
    INTENT_TYPE,
    decode_pool_deposit_commitment,
    decode_pool_deposit_fulfillment,
    decode_signed_quote_commitment,
    decode_signed_quote_fulfillment,
    encode_intent,
    encode_pool_deposit_commitment,
    encode_signed_quote_commitment,
    encode_signed_quote_fulfillment,
    intent_digest,
)
from bridgehooks.core.errors import MalformedCommitment, MalformedFulfillment
from bridgehooks.core.types import (
    PaymentDetails,
    PoolDepositCommitment,
    SignedQuoteCommitment,
    SignedQuoteFulfillment,
)

RECIPIENT = "0x1111111111111111111111111111111111111111"
ASSET = "0x2222222222222222222222222222222222222222"


def test_pool_deposit_commitment_decodes_encoded_values() -> None:
    commitment = PoolDepositCommitment(
        destination_chain_id=10,
        destination_asset=ASSET,
        recipient=RECIPIENT.lower(),
        min_output_amount=500_000,
    )
    decoded = decode_pool_deposit_commitment(encode_pool_deposit_commitment(commitment))
    assert decoded == commitment
    assert decoded.recipient == RECIPIENT


def test_signed_quote_fulfillment_keeps_dynamic_signature() -> None:
    payload = SignedQuoteFulfillment(
        reconciliation_id=b"\x01" * 32,
        order_id=b"\x02" * 32,
        payment=PaymentDetails(chain_id=8453, depository=ASSET, currency=ASSET, amount=5),
        quote_expiration=1_700_000_600,
        destination_chain_id=10,
        destination_currency=ASSET,
        recipient=RECIPIENT,
        refund_to=RECIPIENT,
        slippage_bps=30,
        signature=b"\x07" * 65,
    )
    decoded = decode_signed_quote_fulfillment(encode_signed_quote_fulfillment(payload))
    assert decoded.signature == b"\x07" * 65
    assert decoded.payment.amount == 5


@pytest.mark.parametrize(
    "mutate",
    [
        lambda blob: blob[:-1],
        lambda blob: blob + b"\x00" * 32,
        lambda blob: b"",
    ],
    ids=["truncated", "trailing-word", "empty"],
)
def test_commitment_must_be_exact_encoding(mutate) -> None:
    blob = encode_signed_quote_commitment(
        SignedQuoteCommitment(
            destination_chain_id=10,
            destination_currency=ASSET,
            recipient=RECIPIENT,
            max_slippage_bps=50,
            refund_to=RECIPIENT,
        )
    )
    with pytest.raises(MalformedCommitment, match="SignedQuoteCommitment"):
        decode_signed_quote_commitment(mutate(blob))


def test_dirty_address_padding_is_rejected() -> None:
    blob = bytearray(
        encode_pool_deposit_commitment(
            PoolDepositCommitment(
                destination_chain_id=10,
                destination_asset=ASSET,
                recipient=RECIPIENT,
                min_output_amount=1,
            )
        )
    )
    blob[32] = 0xFF  # high byte of the destination_asset word
    with pytest.raises(MalformedCommitment):
        decode_pool_deposit_commitment(bytes(blob))


def test_out_of_range_uint16_is_rejected() -> None:
    blob = encode(
        ["(uint256,address,address,uint256,address)"],
        [(10, ASSET, RECIPIENT, 70_000, RECIPIENT)],
    )
    with pytest.raises(MalformedCommitment):
        decode_signed_quote_commitment(blob)


def test_payload_errors_are_fulfillment_errors() -> None:
    with pytest.raises(MalformedFulfillment) as exc_info:
        decode_pool_deposit_fulfillment(b"\x00" * 100)
    assert exc_info.value.schema == "PoolDepositFulfillment"


def test_non_bytes_input_is_rejected() -> None:
    with pytest.raises(MalformedCommitment, match="expected bytes"):
        decode_pool_deposit_commitment("0x00")


def test_intent_digest_is_keccak_of_tuple_encoding(make_intent) -> None:
    intent = make_intent(ASSET, b"\xaa\xbb")
    assert encode_intent(intent)[:32] == (32).to_bytes(32, "big")
    assert intent_digest(intent) == keccak(encode_intent(intent))

    raw = encode(
        [INTENT_TYPE],
        [(
            intent.owner, intent.to, intent.escrow, intent.deposit_id, intent.amount,
            intent.timestamp, intent.payment_method, intent.fiat_currency,
            intent.conversion_rate, intent.payee_id, intent.referrer, intent.referrer_fee,
            intent.post_intent_hook, intent.data,
        )],
    )
    assert intent_digest(intent) == keccak(raw)


def test_intent_digest_covers_data(make_intent) -> None:
    assert intent_digest(make_intent(ASSET, b"\x01")) != intent_digest(make_intent(ASSET, b"\x02"))
