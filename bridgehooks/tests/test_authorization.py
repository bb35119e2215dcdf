from __future__ import annotations

import pytest
from eth_account import Account

from bridgehooks.core.codec import intent_digest
from bridgehooks.core.errors import InvalidSignature
from bridgehooks.core.types import PaymentDetails, SignedQuoteFulfillment
from bridgehooks.hooks.authorization import (
    AUTHORIZATION_TYPES,
    PRIMARY_TYPE,
    QuoteSigner,
    SignedQuoteAuthorization,
    authorization_digest,
    domain_separator,
    recover_signer,
    require_trusted_signature,
    signable_authorization,
)

SIGNER_KEY = "0x" + "a1" * 32
CHAIN_ID = 8453
HOOK = "0x00000000000000000000000000000000000000AA"


@pytest.fixture
def authorization(chain, make_intent) -> SignedQuoteAuthorization:
    intent = make_intent(HOOK, b"\x01")
    payload = SignedQuoteFulfillment(
        reconciliation_id=b"\x01" * 32,
        order_id=b"\x02" * 32,
        payment=PaymentDetails(
            chain_id=CHAIN_ID,
            depository=chain.new_address("depository"),
            currency=chain.new_address("usdc"),
            amount=1_000_000,
        ),
        quote_expiration=chain.timestamp + 600,
        destination_chain_id=10,
        destination_currency=chain.new_address("dest-usdc"),
        recipient=chain.new_address("recipient"),
        refund_to=chain.new_address("refund"),
        slippage_bps=25,
    )
    return SignedQuoteAuthorization.for_fulfillment(intent, payload)


def test_message_follows_declared_field_order(authorization) -> None:
    declared = [field["name"] for field in AUTHORIZATION_TYPES[PRIMARY_TYPE]]
    assert list(authorization.message()) == declared


def test_domain_separator_matches_typed_data_header(authorization) -> None:
    signable = signable_authorization(authorization, CHAIN_ID, HOOK)
    assert signable.header == domain_separator(CHAIN_ID, HOOK)


def test_domain_separator_binds_chain_and_contract() -> None:
    base = domain_separator(CHAIN_ID, HOOK)
    assert domain_separator(CHAIN_ID + 1, HOOK) != base
    assert domain_separator(CHAIN_ID, "0x00000000000000000000000000000000000000BB") != base


def test_authorization_carries_intent_digest(make_intent, authorization) -> None:
    assert authorization.intent_digest == intent_digest(make_intent(HOOK, b"\x01"))


def test_signer_signature_recovers_to_signer(authorization) -> None:
    signer = QuoteSigner(SIGNER_KEY)
    signature = signer.sign(authorization, CHAIN_ID, HOOK)

    assert len(signature) == 65
    assert signer.address == Account.from_key(SIGNER_KEY).address
    digest = authorization_digest(authorization, CHAIN_ID, HOOK)
    assert recover_signer(digest, signature) == signer.address


def test_require_trusted_signature_accepts_trusted_signer(authorization) -> None:
    signer = QuoteSigner(SIGNER_KEY)
    signature = signer.sign(authorization, CHAIN_ID, HOOK)
    require_trusted_signature(
        authorization,
        signature,
        chain_id=CHAIN_ID,
        verifying_contract=HOOK,
        trusted_signer=signer.address.lower(),
    )


def test_require_trusted_signature_reports_recovered_address(authorization) -> None:
    signer = QuoteSigner(SIGNER_KEY)
    signature = signer.sign(authorization, CHAIN_ID, HOOK)
    trusted = QuoteSigner("0x" + "b2" * 32).address

    with pytest.raises(InvalidSignature) as exc_info:
        require_trusted_signature(
            authorization,
            signature,
            chain_id=CHAIN_ID,
            verifying_contract=HOOK,
            trusted_signer=trusted,
        )
    assert exc_info.value.recovered == signer.address
    assert exc_info.value.expected == trusted


@pytest.mark.parametrize(
    "signature, message",
    [
        (b"\x01" * 64, "65 bytes"),
        (b"\x01" * 64 + b"\x00", "recovery id"),
        (b"\x01" * 32 + b"\xff" * 32 + b"\x1b", "lower half"),
    ],
)
def test_recover_signer_rejects_non_canonical_signatures(signature, message) -> None:
    with pytest.raises(ValueError, match=message):
        recover_signer(b"\x00" * 32, signature)
