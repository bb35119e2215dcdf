"""Post-intent hook variants."""

from bridgehooks.hooks.authorization import QuoteSigner, SignedQuoteAuthorization
from bridgehooks.hooks.pool_deposit import PoolDepositBridgeHook
from bridgehooks.hooks.signed_quote import SignedQuoteBridgeHook

__all__ = [
    "PoolDepositBridgeHook",
    "SignedQuoteBridgeHook",
    "SignedQuoteAuthorization",
    "QuoteSigner",
]
