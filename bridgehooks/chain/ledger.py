"""
Execution Environment
In-process ledger with all-or-nothing transaction semantics.

Holds everything a hook can observe or change: deployed contracts and their
storage, native balances, block time, chain id and the event log.
`transaction()` snapshots that state on entry and restores it if the block
raises, so a failed call leaves no observable effect.
"""

import copy
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Set, Type, TypeVar

from eth_utils import keccak, to_checksum_address

from bridgehooks.core.errors import InsufficientBalance, NativeTransferFailed
from bridgehooks.core.types import HookEvent, ZERO_ADDRESS, normalize_address

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=HookEvent)


@dataclass(frozen=True)
class EventRecord:
    """One entry in the environment's event log."""
    emitter: str
    event: HookEvent


@dataclass
class _Snapshot:
    storage: Dict[str, Dict[str, Any]]
    native: Dict[str, int]
    events: List[EventRecord]
    contracts: Dict[str, object]
    rejects_native: Set[str]
    nonce: int


class Chain:
    """
    Simulated chain the hooks and downstream protocols run on.

    Contract objects keep their mutable state in `storage(address)` so that a
    single snapshot covers every participant.
    """

    def __init__(self, chain_id: int = 31337, timestamp: int = 1_700_000_000) -> None:
        """
        Initialize environment.

        Args:
            chain_id: Id reported to contracts (EIP-155 chain id)
            timestamp: Initial block timestamp in seconds
        """
        self._chain_id = chain_id
        self._timestamp = timestamp
        self._storage: Dict[str, Dict[str, Any]] = {}
        self._native: Dict[str, int] = {}
        self._events: List[EventRecord] = []
        self._contracts: Dict[str, object] = {}
        self._rejects_native: Set[str] = set()
        self._nonce = 0
        self._depth = 0

    @property
    def chain_id(self) -> int:
        """Get chain id."""
        return self._chain_id

    @property
    def timestamp(self) -> int:
        """Get current block timestamp."""
        return self._timestamp

    def set_timestamp(self, timestamp: int) -> None:
        self._timestamp = timestamp

    def advance(self, seconds: int) -> int:
        """Move block time forward and return the new timestamp."""
        self._timestamp += seconds
        return self._timestamp

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Accounts and contracts
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def new_address(self, label: str = "account") -> str:
        """Allocate a fresh deterministic address."""
        self._nonce += 1
        digest = keccak(text=f"{label}:{self._nonce}")
        return to_checksum_address(digest[-20:])

    def deploy(self, contract: object, label: Optional[str] = None) -> str:
        """Register a contract object under a new address."""
        address = self.new_address(label or type(contract).__name__)
        self._contracts[address] = contract
        self._storage[address] = {}
        return address

    def contract(self, address: str) -> Any:
        """Look up a deployed contract object by address."""
        address = normalize_address(address)
        try:
            return self._contracts[address]
        except KeyError:
            raise LookupError(f"No contract deployed at {address}") from None

    def storage(self, address: str) -> Dict[str, Any]:
        """Mutable storage namespace for a deployed contract."""
        return self._storage[normalize_address(address)]

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Native asset
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def native_balance(self, account: str) -> int:
        return self._native.get(normalize_address(account), 0)

    def fund_native(self, account: str, amount: int) -> None:
        """Credit native balance out of thin air (test/setup helper)."""
        account = normalize_address(account)
        self._native[account] = self._native.get(account, 0) + amount

    def reject_native(self, account: str, rejects: bool = True) -> None:
        """Make an account refuse incoming native transfers."""
        account = normalize_address(account)
        if rejects:
            self._rejects_native.add(account)
        else:
            self._rejects_native.discard(account)

    def transfer_native(self, sender: str, to: str, amount: int) -> None:
        """
        Move native balance between accounts.

        Raises:
            NativeTransferFailed: If the recipient refuses the transfer
            InsufficientBalance: If the sender cannot cover `amount`
        """
        sender = normalize_address(sender)
        to = normalize_address(to)
        if to == ZERO_ADDRESS:
            raise NativeTransferFailed(to, amount, "zero recipient")
        if to in self._rejects_native:
            raise NativeTransferFailed(to, amount, "recipient rejected value")

        balance = self._native.get(sender, 0)
        if balance < amount:
            raise InsufficientBalance(sender, balance, amount)
        self._native[sender] = balance - amount
        self._native[to] = self._native.get(to, 0) + amount

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Events
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def emit(self, emitter: str, event: HookEvent) -> None:
        self._events.append(EventRecord(emitter=normalize_address(emitter), event=event))

    @property
    def events(self) -> List[EventRecord]:
        """Get a copy of the event log."""
        return list(self._events)

    def events_of(self, event_type: Type[E]) -> List[E]:
        """Return logged events of one type, oldest first."""
        return [r.event for r in self._events if isinstance(r.event, event_type)]

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Transactions
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _snapshot(self) -> _Snapshot:
        return _Snapshot(
            storage=copy.deepcopy(self._storage),
            native=dict(self._native),
            events=list(self._events),
            contracts=dict(self._contracts),
            rejects_native=set(self._rejects_native),
            nonce=self._nonce,
        )

    def _restore(self, snapshot: _Snapshot) -> None:
        self._storage = snapshot.storage
        self._native = snapshot.native
        self._events = snapshot.events
        self._contracts = snapshot.contracts
        self._rejects_native = snapshot.rejects_native
        self._nonce = snapshot.nonce

    @contextmanager
    def transaction(self) -> Iterator["Chain"]:
        """
        All-or-nothing scope.

        Nested scopes act as savepoints: an inner failure that the caller
        handles only unwinds the inner effects.
        """
        snapshot = self._snapshot()
        self._depth += 1
        try:
            yield self
        except BaseException as exc:
            self._restore(snapshot)
            logger.debug(f"Rolled back transaction at depth {self._depth}: {exc!r}")
            raise
        finally:
            self._depth -= 1

    @property
    def in_transaction(self) -> bool:
        return self._depth > 0
