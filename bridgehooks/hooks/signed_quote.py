"""
Signed-Quote Bridge Hook
Deposits net intent proceeds under an order id authorized by a trusted signer.

The commitment fixes where funds end up; the fulfiller brings a quote from
the off-chain solver, which is accepted only if its routing matches this hook
and the trusted signer attested to exactly these values for this intent.
"""

import logging

from bridgehooks.chain.ledger import Chain
from bridgehooks.core.codec import (
    decode_signed_quote_commitment,
    decode_signed_quote_fulfillment,
)
from bridgehooks.core.errors import (
    BridgeHookError,
    DestinationChainMismatch,
    DestinationCurrencyMismatch,
    InvalidNetAmount,
    InvalidOrderId,
    PaymentAmountMismatch,
    PaymentChainMismatch,
    PaymentCurrencyMismatch,
    PaymentDepositoryMismatch,
    QuoteExpired,
    RecipientMismatch,
    RefundAddressMismatch,
    SlippageExceedsMax,
    UnauthorizedCaller,
    ZeroAddressError,
)
from bridgehooks.core.ports import Depository, Erc20, PostIntentHook
from bridgehooks.core.types import (
    UINT256_MAX,
    ZERO_BYTES32,
    HookConfig,
    Intent,
    SignedQuoteBridgeInitiated,
    SignedQuoteCommitment,
    SignedQuoteFulfillment,
    is_zero_address,
    normalize_address,
)
from bridgehooks.hooks import authorization
from bridgehooks.hooks.admin import HookAdmin
from bridgehooks.hooks.authorization import SignedQuoteAuthorization
from bridgehooks.hooks.forwarder import FundsForwarder

logger = logging.getLogger(__name__)


class SignedQuoteBridgeHook(PostIntentHook):
    """Post-intent hook bridging through a depository with signed quotes."""

    def __init__(self, chain: Chain, config: HookConfig) -> None:
        """
        Initialize hook.

        Args:
            chain: Execution environment
            config: base_asset, orchestrator, downstream (depository), owner
                and trusted_signer

        Raises:
            ZeroAddressError: If any configured address is zero or the
                trusted signer is missing
        """
        for field in ("base_asset", "orchestrator", "downstream", "owner", "trusted_signer"):
            value = getattr(config, field)
            if value is None or is_zero_address(value):
                raise ZeroAddressError(field)

        self._chain = chain
        self._config = config
        self.address = chain.deploy(self, label="SignedQuoteBridgeHook")
        self._admin = HookAdmin(chain, self.address, config.owner)
        self._token: Erc20 = chain.contract(config.base_asset)
        self._depository: Depository = chain.contract(config.downstream)
        self._forwarder = FundsForwarder(self._token, self.address)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Accessors
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @property
    def base_asset(self) -> str:
        return self._config.base_asset

    @property
    def orchestrator(self) -> str:
        return self._config.orchestrator

    @property
    def depository(self) -> str:
        return self._config.downstream

    @property
    def trusted_signer(self) -> str:
        return self._config.trusted_signer

    @property
    def owner(self) -> str:
        return self._admin.owner

    @property
    def domain_separator(self) -> bytes:
        """EIP-712 domain separator bound to this chain and hook address."""
        return authorization.domain_separator(self._chain.chain_id, self.address)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Entry point
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def execute(
        self,
        intent: Intent,
        net_amount: int,
        fulfill_data: bytes,
        *,
        sender: str,
    ) -> None:
        """
        Verify a signed quote against the commitment and configuration, then
        deposit under its order id.

        Args:
            intent: Fulfilled intent whose `data` holds the commitment
            net_amount: Base asset amount to bridge (after fees)
            fulfill_data: ABI-encoded SignedQuoteFulfillment
            sender: Calling identity; must be the orchestrator
        """
        try:
            with self._chain.transaction():
                self._execute(intent, net_amount, fulfill_data, sender)
        except BridgeHookError as exc:
            logger.warning(f"SignedQuoteBridgeHook rejected execution: {exc}")
            raise
        except Exception as exc:
            logger.error(f"SignedQuoteBridgeHook execution failed: {exc!r}")
            raise

    def _execute(self, intent: Intent, net_amount: int, fulfill_data: bytes, sender: str) -> None:
        if normalize_address(sender) != self.orchestrator:
            raise UnauthorizedCaller(normalize_address(sender), self.orchestrator)
        if not isinstance(net_amount, int) or not 0 <= net_amount <= UINT256_MAX:
            raise InvalidNetAmount(net_amount)

        commitment = decode_signed_quote_commitment(intent.data)
        payload = decode_signed_quote_fulfillment(fulfill_data)
        self._validate(commitment, payload, net_amount)

        authorization.require_trusted_signature(
            SignedQuoteAuthorization.for_fulfillment(intent, payload),
            payload.signature,
            chain_id=self._chain.chain_id,
            verifying_contract=self.address,
            trusted_signer=self.trusted_signer,
        )

        self._forwarder.pull(self.orchestrator, net_amount)
        self._forwarder.forward(
            "Depository",
            self.depository,
            net_amount,
            lambda: self._depository.deposit_erc20(
                sender=self.address,
                depositor=self.address,
                token=self.base_asset,
                amount=net_amount,
                deposit_id=payload.order_id,
            ),
        )

        self._chain.emit(
            self.address,
            SignedQuoteBridgeInitiated(
                reconciliation_id=payload.reconciliation_id,
                order_id=payload.order_id,
                amount=net_amount,
                destination_chain_id=payload.destination_chain_id,
                destination_currency=payload.destination_currency,
                recipient=payload.recipient,
                refund_to=payload.refund_to,
                slippage_bps=payload.slippage_bps,
            ),
        )
        logger.info(
            f"Deposited {net_amount} under order 0x{payload.order_id.hex()} "
            f"for chain {payload.destination_chain_id} recipient {payload.recipient}"
        )

    def _validate(
        self,
        commitment: SignedQuoteCommitment,
        payload: SignedQuoteFulfillment,
        net_amount: int,
    ) -> None:
        if payload.order_id == ZERO_BYTES32:
            raise InvalidOrderId(payload.order_id)

        now = self._chain.timestamp
        if payload.quote_expiration <= now:
            raise QuoteExpired(payload.quote_expiration, now)

        if payload.destination_chain_id != commitment.destination_chain_id:
            raise DestinationChainMismatch(
                commitment.destination_chain_id, payload.destination_chain_id
            )
        if payload.destination_currency != commitment.destination_currency:
            raise DestinationCurrencyMismatch(
                commitment.destination_currency, payload.destination_currency
            )
        if payload.recipient != commitment.recipient:
            raise RecipientMismatch(commitment.recipient, payload.recipient)
        if payload.refund_to != commitment.refund_to:
            raise RefundAddressMismatch(commitment.refund_to, payload.refund_to)

        if payload.slippage_bps > commitment.max_slippage_bps:
            raise SlippageExceedsMax(payload.slippage_bps, commitment.max_slippage_bps)

        payment = payload.payment
        if payment.chain_id != self._chain.chain_id:
            raise PaymentChainMismatch(self._chain.chain_id, payment.chain_id)
        if payment.depository != self.depository:
            raise PaymentDepositoryMismatch(self.depository, payment.depository)
        if payment.currency != self.base_asset:
            raise PaymentCurrencyMismatch(self.base_asset, payment.currency)
        if payment.amount != net_amount:
            raise PaymentAmountMismatch(net_amount, payment.amount)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Administration
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def transfer_ownership(self, new_owner: str, *, sender: str) -> None:
        self._admin.transfer_ownership(sender, new_owner)

    def rescue_erc20(self, token: str, to: str, amount: int, *, sender: str) -> None:
        self._admin.rescue_erc20(sender, token, to, amount)

    def rescue_native(self, to: str, amount: int, *, sender: str) -> None:
        self._admin.rescue_native(sender, to, amount)
