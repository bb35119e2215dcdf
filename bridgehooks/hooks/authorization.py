"""
Signed Quote Authorization
EIP-712 structure binding an intent to one off-chain quote.

The structure, its field order and the domain (name, version, chain id,
verifying hook address) are shared by the verifying hook and by the
off-chain signer, so both sides hash exactly the same bytes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from eth_abi import encode
from eth_account import Account
from eth_account.messages import SignableMessage, encode_typed_data
from eth_keys import keys
from eth_keys.exceptions import BadSignature
from eth_keys.exceptions import ValidationError as KeyValidationError
from eth_utils import keccak
from pydantic import BaseModel, ConfigDict

from bridgehooks.core.codec import intent_digest
from bridgehooks.core.errors import InvalidSignature
from bridgehooks.core.types import (
    Address,
    Bytes32,
    Intent,
    SignedQuoteFulfillment,
    Uint16,
    Uint256,
    normalize_address,
)

logger = logging.getLogger(__name__)

DOMAIN_NAME = "SignedQuoteBridgeHook"
DOMAIN_VERSION = "1"

EIP712_DOMAIN_TYPEHASH = keccak(
    text="EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)

PRIMARY_TYPE = "SignedQuoteAuthorization"
AUTHORIZATION_TYPES: Dict[str, list] = {
    PRIMARY_TYPE: [
        {"name": "intentDigest", "type": "bytes32"},
        {"name": "intentHash", "type": "bytes32"},
        {"name": "orderId", "type": "bytes32"},
        {"name": "quoteExpiration", "type": "uint256"},
        {"name": "paymentChainId", "type": "uint256"},
        {"name": "paymentDepository", "type": "address"},
        {"name": "paymentCurrency", "type": "address"},
        {"name": "paymentAmount", "type": "uint256"},
        {"name": "destinationChainId", "type": "uint256"},
        {"name": "destinationCurrency", "type": "address"},
        {"name": "recipient", "type": "address"},
        {"name": "refundTo", "type": "address"},
        {"name": "slippageBps", "type": "uint16"},
    ]
}

SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SECP256K1_HALF_N = SECP256K1_N // 2


class SignedQuoteAuthorization(BaseModel):
    """What the trusted signer attests to for one fulfillment."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    intent_digest: Bytes32
    reconciliation_id: Bytes32
    order_id: Bytes32
    quote_expiration: Uint256
    payment_chain_id: Uint256
    payment_depository: Address
    payment_currency: Address
    payment_amount: Uint256
    destination_chain_id: Uint256
    destination_currency: Address
    recipient: Address
    refund_to: Address
    slippage_bps: Uint16

    @classmethod
    def for_fulfillment(
        cls, intent: Intent, payload: SignedQuoteFulfillment
    ) -> "SignedQuoteAuthorization":
        """Rebuild the signed structure from an intent and its payload."""
        return cls(
            intent_digest=intent_digest(intent),
            reconciliation_id=payload.reconciliation_id,
            order_id=payload.order_id,
            quote_expiration=payload.quote_expiration,
            payment_chain_id=payload.payment.chain_id,
            payment_depository=payload.payment.depository,
            payment_currency=payload.payment.currency,
            payment_amount=payload.payment.amount,
            destination_chain_id=payload.destination_chain_id,
            destination_currency=payload.destination_currency,
            recipient=payload.recipient,
            refund_to=payload.refund_to,
            slippage_bps=payload.slippage_bps,
        )

    def message(self) -> Dict[str, Any]:
        return {
            "intentDigest": self.intent_digest,
            "intentHash": self.reconciliation_id,
            "orderId": self.order_id,
            "quoteExpiration": self.quote_expiration,
            "paymentChainId": self.payment_chain_id,
            "paymentDepository": self.payment_depository,
            "paymentCurrency": self.payment_currency,
            "paymentAmount": self.payment_amount,
            "destinationChainId": self.destination_chain_id,
            "destinationCurrency": self.destination_currency,
            "recipient": self.recipient,
            "refundTo": self.refund_to,
            "slippageBps": self.slippage_bps,
        }


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Hashing
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def signing_domain(chain_id: int, verifying_contract: str) -> Dict[str, Any]:
    return {
        "name": DOMAIN_NAME,
        "version": DOMAIN_VERSION,
        "chainId": chain_id,
        "verifyingContract": normalize_address(verifying_contract),
    }


def domain_separator(chain_id: int, verifying_contract: str) -> bytes:
    return keccak(
        encode(
            ["bytes32", "bytes32", "bytes32", "uint256", "address"],
            [
                EIP712_DOMAIN_TYPEHASH,
                keccak(text=DOMAIN_NAME),
                keccak(text=DOMAIN_VERSION),
                chain_id,
                normalize_address(verifying_contract),
            ],
        )
    )


def signable_authorization(
    authorization: SignedQuoteAuthorization,
    chain_id: int,
    verifying_contract: str,
) -> SignableMessage:
    return encode_typed_data(
        domain_data=signing_domain(chain_id, verifying_contract),
        message_types=AUTHORIZATION_TYPES,
        message_data=authorization.message(),
    )


def authorization_digest(
    authorization: SignedQuoteAuthorization,
    chain_id: int,
    verifying_contract: str,
) -> bytes:
    """keccak256(0x19 0x01 || domainSeparator || structHash)."""
    signable = signable_authorization(authorization, chain_id, verifying_contract)
    return keccak(b"\x19" + signable.version + signable.header + signable.body)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Recovery
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def recover_signer(digest: bytes, signature: bytes) -> str:
    """
    Recover the address that signed `digest`.

    Only 65-byte (r, s, v) signatures with v in {27, 28} and a low-s value
    are accepted, so every valid signature has exactly one encoding.

    Raises:
        ValueError: If the signature cannot be parsed or recovered
    """
    if len(signature) != 65:
        raise ValueError(f"signature must be 65 bytes, got {len(signature)}")

    r = int.from_bytes(signature[0:32], "big")
    s = int.from_bytes(signature[32:64], "big")
    v = signature[64]
    if v not in (27, 28):
        raise ValueError(f"invalid recovery id {v}")
    if s > SECP256K1_HALF_N:
        raise ValueError("signature s value is not in the lower half order")

    try:
        public_key = keys.Signature(vrs=(v - 27, r, s)).recover_public_key_from_msg_hash(digest)
    except (BadSignature, KeyValidationError) as exc:
        raise ValueError(str(exc)) from exc
    return public_key.to_checksum_address()


def require_trusted_signature(
    authorization: SignedQuoteAuthorization,
    signature: bytes,
    *,
    chain_id: int,
    verifying_contract: str,
    trusted_signer: str,
) -> None:
    """
    Raises:
        InvalidSignature: Unless `signature` was produced by `trusted_signer`
            over exactly this authorization and domain
    """
    expected = normalize_address(trusted_signer)
    digest = authorization_digest(authorization, chain_id, verifying_contract)
    try:
        recovered = recover_signer(digest, signature)
    except ValueError as exc:
        raise InvalidSignature(None, expected, str(exc)) from exc
    if recovered != expected:
        raise InvalidSignature(recovered, expected)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Off-chain signing
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class QuoteSigner:
    """Signs quote authorizations on behalf of the trusted key holder."""

    def __init__(self, private_key: str | bytes) -> None:
        self._account = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self._account.address

    def sign(
        self,
        authorization: SignedQuoteAuthorization,
        chain_id: int,
        verifying_contract: str,
    ) -> bytes:
        signable = signable_authorization(authorization, chain_id, verifying_contract)
        return bytes(self._account.sign_message(signable).signature)

    def sign_fulfillment(
        self,
        intent: Intent,
        payload: SignedQuoteFulfillment,
        chain_id: int,
        verifying_contract: str,
    ) -> SignedQuoteFulfillment:
        """Return `payload` carrying a signature over its own authorization."""
        authorization = SignedQuoteAuthorization.for_fulfillment(intent, payload)
        signature = self.sign(authorization, chain_id, verifying_contract)
        logger.debug(f"Signed quote 0x{payload.order_id.hex()} as {self.address}")
        return payload.model_copy(update={"signature": signature})
