"""Per-entity toxicity bookkeeping.

The ledger holds no durable state of its own. Values are read from and
written to a store supplied by the host, which only needs two methods::

    read_ledger_value(entity_id) -> int | None
    persist_ledger_value(entity_id, value) -> None

Missing values read as zero.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator
from weakref import WeakValueDictionary

from .errors import InvalidAmountError, MissingCollaboratorError

logger = logging.getLogger(__name__)

#: key used by stores that keep the value next to other entity data
LEDGER_KEY = "current_toxicity"


class MemoryLedgerStore:
    """Dictionary backed store, handy for tests and scratch hosts."""

    def __init__(self, values: Dict[Hashable, int] | None = None) -> None:
        self.values: Dict[Hashable, int] = dict(values or {})

    def read_ledger_value(self, entity_id) -> int | None:
        return self.values.get(entity_id)

    def persist_ledger_value(self, entity_id, value: int) -> None:
        self.values[entity_id] = value


def _check_amount(amount) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(f"Toxicity amount must be an integer, got {amount!r}")
    if amount < 0:
        raise InvalidAmountError(f"Toxicity amount must not be negative, got {amount}")
    return amount


class _EntityLock:
    """Re-entrant lock that can be held in a weak mapping."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def __enter__(self):
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self._lock.release()


class ToxicityLedger:
    """Read, increment and reset accumulated toxicity per entity.

    Entity locks live only while some caller holds them, so the lock map
    does not grow with every entity ever seen.
    """

    def __init__(self, store) -> None:
        for hook in ("read_ledger_value", "persist_ledger_value"):
            if not callable(getattr(store, hook, None)):
                raise MissingCollaboratorError(hook)
        self.store = store
        self._locks: WeakValueDictionary = WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def _lock_for(self, entity_id) -> _EntityLock:
        with self._locks_guard:
            lock = self._locks.get(entity_id)
            if lock is None:
                lock = _EntityLock()
                self._locks[entity_id] = lock
            return lock

    @contextmanager
    def locked(self, entity_id) -> Iterator[None]:
        """Hold the entity's lock so a read-modify-write runs alone."""
        lock = self._lock_for(entity_id)
        with lock:
            yield

    def get(self, entity_id) -> int:
        value = self.store.read_ledger_value(entity_id)
        return int(value or 0)

    def set(self, entity_id, value: int) -> int:
        value = _check_amount(value)
        with self.locked(entity_id):
            self.store.persist_ledger_value(entity_id, value)
        logger.debug("Toxicity of %s set to %s", entity_id, value)
        return value

    def increment(self, entity_id, amount: int) -> int:
        """Add ``amount`` to the entity's toxicity and return the new total."""
        amount = _check_amount(amount)
        with self.locked(entity_id):
            total = self.get(entity_id) + amount
            self.store.persist_ledger_value(entity_id, total)
        logger.debug("Toxicity of %s raised by %s to %s", entity_id, amount, total)
        return total

    def reset(self, entity_id) -> None:
        self.set(entity_id, 0)


__all__ = ["LEDGER_KEY", "MemoryLedgerStore", "ToxicityLedger"]
