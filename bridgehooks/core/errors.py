"""Typed errors for bridge hook validation and execution."""

from __future__ import annotations

from typing import Optional


class BridgeHookError(Exception):
    """Base class for bridge hook errors."""


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Configuration
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConfigurationError(BridgeHookError):
    """Raised when a hook is constructed with unusable parameters."""


class ZeroAddressError(ConfigurationError):
    """Raised when a required address is zero or empty."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} must be a non-zero address")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# (a) Authorization
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class AuthorizationError(BridgeHookError):
    """Raised when the caller is not allowed to invoke an entry point."""


class UnauthorizedCaller(AuthorizationError):
    def __init__(self, caller: str, expected: str) -> None:
        self.caller = caller
        self.expected = expected
        super().__init__(f"Caller {caller} is not the orchestrator {expected}")


class NotOwner(AuthorizationError):
    def __init__(self, caller: str, owner: str) -> None:
        self.caller = caller
        self.owner = owner
        super().__init__(f"Caller {caller} is not the owner {owner}")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# (b) Decoding
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class MalformedDataError(BridgeHookError):
    """Raised when an opaque blob does not match its fixed schema."""

    kind = "data"

    def __init__(self, schema: str, reason: str) -> None:
        self.schema = schema
        self.reason = reason
        super().__init__(f"Malformed {self.kind} for {schema}: {reason}")


class MalformedCommitment(MalformedDataError):
    kind = "commitment"


class MalformedFulfillment(MalformedDataError):
    kind = "fulfillment payload"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# (c) Commitment and routing mismatches
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class CommitmentError(BridgeHookError):
    """Raised when the frozen commitment is unusable or contradicted."""


class InvalidCommitmentField(CommitmentError):
    field = "field"

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Committed {self.field} is invalid: {value!r}")


class InvalidDestinationChainId(InvalidCommitmentField):
    field = "destination chain id"


class InvalidRecipient(InvalidCommitmentField):
    field = "recipient"


class InvalidDestinationAsset(InvalidCommitmentField):
    field = "destination asset"


class CommitmentMismatchError(CommitmentError):
    """A fulfillment field disagrees with the frozen commitment."""

    field = "field"

    def __init__(self, committed: object, supplied: object) -> None:
        self.committed = committed
        self.supplied = supplied
        super().__init__(
            f"{self.field} mismatch: committed {committed!r}, supplied {supplied!r}"
        )


class DestinationChainMismatch(CommitmentMismatchError):
    field = "Destination chain"


class DestinationCurrencyMismatch(CommitmentMismatchError):
    field = "Destination currency"


class RecipientMismatch(CommitmentMismatchError):
    field = "Recipient"


class RefundAddressMismatch(CommitmentMismatchError):
    field = "Refund address"


class RoutingMismatchError(BridgeHookError):
    """A payment routing field disagrees with the hook's own configuration."""

    field = "field"

    def __init__(self, expected: object, supplied: object) -> None:
        self.expected = expected
        self.supplied = supplied
        super().__init__(
            f"Payment {self.field} mismatch: expected {expected!r}, supplied {supplied!r}"
        )


class PaymentChainMismatch(RoutingMismatchError):
    field = "chain id"


class PaymentDepositoryMismatch(RoutingMismatchError):
    field = "depository"


class PaymentCurrencyMismatch(RoutingMismatchError):
    field = "currency"


class PaymentAmountMismatch(RoutingMismatchError):
    field = "amount"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# (d) Bounds
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class BoundsError(BridgeHookError):
    """Raised when an amount, slippage or timing value is out of range."""


class InvalidNetAmount(BoundsError):
    def __init__(self, net_amount: object) -> None:
        self.net_amount = net_amount
        super().__init__(f"Net amount {net_amount!r} is not a uint256")


class OutputBelowMinimum(BoundsError):
    def __init__(self, output_amount: int, min_output_amount: int) -> None:
        self.output_amount = output_amount
        self.min_output_amount = min_output_amount
        super().__init__(
            f"Output amount {output_amount} is below committed minimum {min_output_amount}"
        )


class QuoteTimestampOutOfRange(BoundsError):
    def __init__(self, quote_timestamp: int, current_time: int, buffer: int) -> None:
        self.quote_timestamp = quote_timestamp
        self.current_time = current_time
        self.buffer = buffer
        super().__init__(
            f"Quote timestamp {quote_timestamp} outside {current_time} +/- {buffer}"
        )


class FillDeadlineOutOfRange(BoundsError):
    def __init__(self, fill_deadline: int, current_time: int, buffer: int) -> None:
        self.fill_deadline = fill_deadline
        self.current_time = current_time
        self.buffer = buffer
        super().__init__(
            f"Fill deadline {fill_deadline} outside [{current_time}, {current_time + buffer}]"
        )


class InvalidOrderId(BoundsError):
    def __init__(self, order_id: bytes) -> None:
        self.order_id = order_id
        super().__init__(f"Order id must be non-zero, got 0x{order_id.hex()}")


class QuoteExpired(BoundsError):
    def __init__(self, quote_expiration: int, current_time: int) -> None:
        self.quote_expiration = quote_expiration
        self.current_time = current_time
        super().__init__(f"Quote expired at {quote_expiration} (now {current_time})")


class SlippageExceedsMax(BoundsError):
    def __init__(self, slippage_bps: int, max_slippage_bps: int) -> None:
        self.slippage_bps = slippage_bps
        self.max_slippage_bps = max_slippage_bps
        super().__init__(
            f"Slippage {slippage_bps} bps exceeds committed max {max_slippage_bps} bps"
        )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# (e) Authentication
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class AuthenticationError(BridgeHookError):
    """Raised when an off-chain authorization cannot be trusted."""


class InvalidSignature(AuthenticationError):
    def __init__(self, recovered: Optional[str], expected: str, reason: str = "") -> None:
        self.recovered = recovered
        self.expected = expected
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"Signature recovers to {recovered or 'nothing'}, expected {expected}{detail}"
        )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# (f) Downstream
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class DownstreamCallFailed(BridgeHookError):
    """Raised when the forwarded deposit call itself fails."""

    def __init__(self, protocol: str, reason: str) -> None:
        self.protocol = protocol
        self.reason = reason
        super().__init__(f"Downstream call to {protocol} failed: {reason}")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Ledger
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class LedgerError(BridgeHookError):
    """Raised by the execution environment when a value movement fails."""


class InsufficientBalance(LedgerError):
    def __init__(self, account: str, balance: int, needed: int) -> None:
        self.account = account
        self.balance = balance
        self.needed = needed
        super().__init__(f"{account} holds {balance}, needs {needed}")


class InsufficientAllowance(LedgerError):
    def __init__(self, owner: str, spender: str, allowance: int, needed: int) -> None:
        self.owner = owner
        self.spender = spender
        self.allowance = allowance
        self.needed = needed
        super().__init__(
            f"{spender} may spend {allowance} of {owner}'s balance, needs {needed}"
        )


class NativeTransferFailed(LedgerError):
    def __init__(self, to: str, amount: int, reason: str) -> None:
        self.to = to
        self.amount = amount
        self.reason = reason
        super().__init__(f"Native transfer of {amount} to {to} failed: {reason}")


class DuplicateDepositId(LedgerError):
    def __init__(self, deposit_id: bytes) -> None:
        self.deposit_id = deposit_id
        super().__init__(f"Deposit id 0x{deposit_id.hex()} was already used")
