"""
Hook Deployment
Builds hooks from settings on an environment and hands ownership over.

Downstream protocols and the base asset must already be deployed at the
configured addresses.
"""

import logging
from typing import Optional

from bridgehooks.chain.ledger import Chain
from bridgehooks.config import BridgeHookSettings, get_settings
from bridgehooks.core.types import is_zero_address, normalize_address
from bridgehooks.hooks.pool_deposit import PoolDepositBridgeHook
from bridgehooks.hooks.signed_quote import SignedQuoteBridgeHook

logger = logging.getLogger(__name__)


def _check_chain(chain: Chain, settings: BridgeHookSettings) -> None:
    if chain.chain_id != settings.chain.chain_id:
        raise ValueError(
            f"Environment chain id {chain.chain_id} does not match "
            f"configured {settings.chain.chain_id}"
        )


def _hand_over(hook, deployer: str, owner: str) -> None:
    """Transfer ownership to `owner` unless it is unset or already the deployer."""
    if is_zero_address(owner) or normalize_address(owner) == normalize_address(deployer):
        logger.info(f"{type(hook).__name__} at {hook.address} stays owned by {hook.owner}")
        return
    hook.transfer_ownership(owner, sender=deployer)


def deploy_pool_deposit_hook(
    chain: Chain,
    deployer: str,
    settings: Optional[BridgeHookSettings] = None,
) -> PoolDepositBridgeHook:
    """
    Deploy a pool-deposit hook.

    Args:
        chain: Target environment
        deployer: Account performing the deployment (initial owner)
        settings: Settings (defaults to the cached global settings)

    Returns:
        Deployed hook, owned by the configured owner when one is set

    Raises:
        ValueError: If `chain` is not the configured chain
        ZeroAddressError: If a required hook address is not configured
    """
    settings = settings or get_settings()
    _check_chain(chain, settings)

    hook_settings = settings.pool_hook
    hook = PoolDepositBridgeHook(chain, hook_settings.hook_config(deployer))
    logger.info(
        f"Deployed PoolDepositBridgeHook at {hook.address} "
        f"(orchestrator={hook.orchestrator}, spoke_pool={hook.spoke_pool})"
    )
    _hand_over(hook, deployer, hook_settings.owner)
    return hook


def deploy_signed_quote_hook(
    chain: Chain,
    deployer: str,
    settings: Optional[BridgeHookSettings] = None,
) -> SignedQuoteBridgeHook:
    """
    Deploy a signed-quote hook.

    Args:
        chain: Target environment
        deployer: Account performing the deployment (initial owner)
        settings: Settings (defaults to the cached global settings)

    Returns:
        Deployed hook, owned by the configured owner when one is set

    Raises:
        ValueError: If `chain` is not the configured chain
        ZeroAddressError: If a required hook address or the signer is not configured
    """
    settings = settings or get_settings()
    _check_chain(chain, settings)

    hook_settings = settings.quote_hook
    hook = SignedQuoteBridgeHook(chain, hook_settings.hook_config(deployer))
    logger.info(
        f"Deployed SignedQuoteBridgeHook at {hook.address} "
        f"(orchestrator={hook.orchestrator}, depository={hook.depository}, "
        f"signer={hook.trusted_signer})"
    )
    _hand_over(hook, deployer, hook_settings.owner)
    return hook
