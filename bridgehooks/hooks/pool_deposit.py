"""
Pool-Deposit Bridge Hook
Forwards net intent proceeds into a spoke pool after timing/amount checks.
"""

import logging

from bridgehooks.chain.ledger import Chain
from bridgehooks.core.codec import (
    decode_pool_deposit_commitment,
    decode_pool_deposit_fulfillment,
)
from bridgehooks.core.errors import (
    BridgeHookError,
    FillDeadlineOutOfRange,
    InvalidDestinationAsset,
    InvalidDestinationChainId,
    InvalidNetAmount,
    InvalidRecipient,
    OutputBelowMinimum,
    QuoteTimestampOutOfRange,
    UnauthorizedCaller,
    ZeroAddressError,
)
from bridgehooks.core.ports import Erc20, PostIntentHook, SpokePool
from bridgehooks.core.types import (
    UINT256_MAX,
    ZERO_ADDRESS,
    HookConfig,
    Intent,
    PoolDepositBridgeInitiated,
    PoolDepositCommitment,
    PoolDepositFulfillment,
    is_zero_address,
    normalize_address,
)
from bridgehooks.hooks.admin import HookAdmin
from bridgehooks.hooks.forwarder import FundsForwarder

logger = logging.getLogger(__name__)


class PoolDepositBridgeHook(PostIntentHook):
    """
    Post-intent hook bridging through a spoke pool.

    The commitment fixes destination chain, asset, recipient and a minimum
    output; the fulfiller supplies a live quote (output amount, quote
    timestamp, fill deadline) that must fit the pool's own tolerance windows.
    """

    def __init__(self, chain: Chain, config: HookConfig) -> None:
        """
        Initialize hook.

        Args:
            chain: Execution environment
            config: base_asset, orchestrator, downstream (spoke pool) and owner

        Raises:
            ZeroAddressError: If any configured address is zero
        """
        for field in ("base_asset", "orchestrator", "downstream", "owner"):
            if is_zero_address(getattr(config, field)):
                raise ZeroAddressError(field)

        self._chain = chain
        self._config = config
        self.address = chain.deploy(self, label="PoolDepositBridgeHook")
        self._admin = HookAdmin(chain, self.address, config.owner)
        self._token: Erc20 = chain.contract(config.base_asset)
        self._pool: SpokePool = chain.contract(config.downstream)
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
    def spoke_pool(self) -> str:
        return self._config.downstream

    @property
    def owner(self) -> str:
        return self._admin.owner

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
        Validate a quote against the commitment and pool, then deposit.

        Args:
            intent: Fulfilled intent whose `data` holds the commitment
            net_amount: Base asset amount to bridge (after fees)
            fulfill_data: ABI-encoded PoolDepositFulfillment
            sender: Calling identity; must be the orchestrator
        """
        try:
            with self._chain.transaction():
                self._execute(intent, net_amount, fulfill_data, sender)
        except BridgeHookError as exc:
            logger.warning(f"PoolDepositBridgeHook rejected execution: {exc}")
            raise
        except Exception as exc:
            logger.error(f"PoolDepositBridgeHook execution failed: {exc!r}")
            raise

    def _execute(self, intent: Intent, net_amount: int, fulfill_data: bytes, sender: str) -> None:
        if normalize_address(sender) != self.orchestrator:
            raise UnauthorizedCaller(normalize_address(sender), self.orchestrator)
        if not isinstance(net_amount, int) or not 0 <= net_amount <= UINT256_MAX:
            raise InvalidNetAmount(net_amount)

        commitment = decode_pool_deposit_commitment(intent.data)
        payload = decode_pool_deposit_fulfillment(fulfill_data)
        self._validate(commitment, payload)

        self._forwarder.pull(self.orchestrator, net_amount)
        self._forwarder.forward(
            "SpokePool",
            self.spoke_pool,
            net_amount,
            lambda: self._pool.deposit_v3(
                sender=self.address,
                depositor=self.address,
                recipient=commitment.recipient,
                input_token=self.base_asset,
                output_token=commitment.destination_asset,
                input_amount=net_amount,
                output_amount=payload.output_amount,
                destination_chain_id=commitment.destination_chain_id,
                exclusive_relayer=ZERO_ADDRESS,
                quote_timestamp=payload.quote_timestamp,
                fill_deadline=payload.fill_deadline,
                exclusivity_deadline=0,
                message=b"",
            ),
        )

        self._chain.emit(
            self.address,
            PoolDepositBridgeInitiated(
                reconciliation_id=payload.reconciliation_id,
                destination_chain_id=commitment.destination_chain_id,
                destination_asset=commitment.destination_asset,
                recipient=commitment.recipient,
                input_amount=net_amount,
                output_amount=payload.output_amount,
                quote_timestamp=payload.quote_timestamp,
                fill_deadline=payload.fill_deadline,
            ),
        )
        logger.info(
            f"Bridged {net_amount} via spoke pool to chain {commitment.destination_chain_id} "
            f"for {commitment.recipient} (output {payload.output_amount})"
        )

    def _validate(self, commitment: PoolDepositCommitment, payload: PoolDepositFulfillment) -> None:
        if commitment.destination_chain_id == 0:
            raise InvalidDestinationChainId(commitment.destination_chain_id)
        if is_zero_address(commitment.recipient):
            raise InvalidRecipient(commitment.recipient)
        if is_zero_address(commitment.destination_asset):
            raise InvalidDestinationAsset(commitment.destination_asset)

        if payload.output_amount < commitment.min_output_amount:
            raise OutputBelowMinimum(payload.output_amount, commitment.min_output_amount)

        current_time = self._pool.get_current_time()
        quote_buffer = self._pool.deposit_quote_time_buffer()
        fill_buffer = self._pool.fill_deadline_buffer()

        if not current_time - quote_buffer <= payload.quote_timestamp <= current_time + quote_buffer:
            raise QuoteTimestampOutOfRange(payload.quote_timestamp, current_time, quote_buffer)

        if not current_time <= payload.fill_deadline <= current_time + fill_buffer:
            raise FillDeadlineOutOfRange(payload.fill_deadline, current_time, fill_buffer)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Administration
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def transfer_ownership(self, new_owner: str, *, sender: str) -> None:
        self._admin.transfer_ownership(sender, new_owner)

    def rescue_erc20(self, token: str, to: str, amount: int, *, sender: str) -> None:
        self._admin.rescue_erc20(sender, token, to, amount)

    def rescue_native(self, to: str, amount: int, *, sender: str) -> None:
        self._admin.rescue_native(sender, to, amount)
