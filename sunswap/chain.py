"""
Execution Environment

An in-process stand-in for the ledger the exchange contracts live on:
- Contract registry keyed by checksum address
- Block number / block timestamp / chain id
- Ordered event log
- CREATE-style address allocation per deployer
- Nestable all-or-nothing transactions (state snapshots and reverts)
"""

import copy
import functools
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar

from .constants import CHAIN_ID
from .crypto.address import generate_contract_address, normalize_address
from .exceptions import DeploymentError, ValidationError

F = TypeVar("F", bound=Callable[..., Any])


class Contract:
    """
    Base class for objects deployed at an address on a Chain.

    Every attribute other than ``chain`` is contract state and is covered
    by the chain's transaction snapshots.
    """

    def __init__(self, chain: "Chain", address: str):
        self.chain = chain
        self.address = normalize_address(address)
        chain.register(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.address}>"


def atomic(method: F) -> F:
    """Run a contract method inside its chain's transaction scope."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.chain.transaction():
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class Chain:
    """
    Shared ledger for a set of contracts.

    All contract calls run serially; ``transaction()`` guarantees that a
    call which raises leaves no partial effects behind.
    """

    def __init__(self, chain_id: int = CHAIN_ID, timestamp: Optional[int] = None):
        self.chain_id = chain_id
        self.block_number = 1
        self.timestamp = int(time.time()) if timestamp is None else int(timestamp)
        self._contracts: Dict[str, Contract] = {}
        self._nonces: Dict[str, int] = {}
        self._logs: List[Any] = []
        self._snapshots: List[Dict[str, Any]] = []

    # -- Blocks -------------------------------------------------------------

    def mine(self, timestamp: Optional[int] = None) -> int:
        """
        Start a new block.

        Args:
            timestamp: new block timestamp (defaults to previous + 1)

        Returns:
            The new block number
        """
        if timestamp is None:
            timestamp = self.timestamp + 1
        if timestamp < self.timestamp:
            raise ValidationError(
                f"Block timestamp cannot go backwards ({timestamp} < {self.timestamp})"
            )
        self.timestamp = int(timestamp)
        self.block_number += 1
        return self.block_number

    # -- Contracts ----------------------------------------------------------

    def create_address(self, deployer: str) -> str:
        """Next CREATE address for *deployer*; bumps its nonce."""
        deployer = normalize_address(deployer)
        nonce = self._nonces.get(deployer, 0)
        self._nonces[deployer] = nonce + 1
        return generate_contract_address(deployer, nonce)

    def nonce_of(self, deployer: str) -> int:
        return self._nonces.get(normalize_address(deployer), 0)

    def register(self, contract: Contract) -> None:
        if contract.address in self._contracts:
            raise DeploymentError(f"Address {contract.address} is already occupied")
        self._contracts[contract.address] = contract

    def get_contract(self, address: str) -> Optional[Contract]:
        return self._contracts.get(normalize_address(address))

    def is_contract(self, address: str) -> bool:
        return normalize_address(address) in self._contracts

    # -- Events -------------------------------------------------------------

    def emit(self, event: Any) -> None:
        self._logs.append(event)

    @property
    def logs(self) -> List[Any]:
        return list(self._logs)

    def logs_since(self, index: int) -> List[Any]:
        return self._logs[index:]

    # -- Transactions -------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator["Chain"]:
        """
        All-or-nothing scope.

        On any exception every contract's state, the deployer nonces, the
        contract registry and the event log are restored to what they
        were on entry, and the exception propagates.
        """
        snapshot_id = self.snapshot()
        try:
            yield self
        except Exception:
            self.revert(snapshot_id)
            raise
        else:
            self._snapshots.pop()

    def snapshot(self) -> int:
        """
        Create state snapshot for revert.

        References between contracts (and to the chain) are kept as-is;
        only plain state is copied.
        """
        memo: Dict[int, Any] = {id(self): self}
        for contract in self._contracts.values():
            memo[id(contract)] = contract

        snapshot = {
            'contracts': dict(self._contracts),
            'state': {
                address: copy.deepcopy(
                    {k: v for k, v in vars(contract).items() if k != 'chain'}, memo
                )
                for address, contract in self._contracts.items()
            },
            'nonces': dict(self._nonces),
            'log_length': len(self._logs),
        }
        self._snapshots.append(snapshot)
        return len(self._snapshots) - 1

    def revert(self, snapshot_id: int) -> None:
        """
        Revert state to snapshot.

        Args:
            snapshot_id: Snapshot ID from snapshot()
        """
        if snapshot_id < 0 or snapshot_id >= len(self._snapshots):
            raise ValueError(f"Invalid snapshot ID: {snapshot_id}")

        snapshot = self._snapshots[snapshot_id]
        self._contracts = snapshot['contracts']
        for address, state in snapshot['state'].items():
            contract = self._contracts[address]
            attrs = vars(contract)
            for key in [k for k in attrs if k != 'chain']:
                del attrs[key]
            attrs.update(state)
        self._nonces = snapshot['nonces']
        del self._logs[snapshot['log_length']:]

        # Remove this and newer snapshots
        self._snapshots = self._snapshots[:snapshot_id]

    def __repr__(self) -> str:
        return (
            f"<Chain id={self.chain_id} block={self.block_number} "
            f"contracts={len(self._contracts)}>"
        )
