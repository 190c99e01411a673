"""
Purpose: In-memory record store (the storage collaborator).
What it does:
- RecordMap: one key-ordered map per entity type
    get(key) -> Optional[record]
    insert(key, record)          (atomic single-key upsert)
    values() -> records in key order
    update(key, fn)              (atomic read-modify-write for one key)
    add_unique(key, record, f)   (insert unless field f is already taken)
- InMemoryStore: groups one RecordMap per entity

Rule: The store is created by the process (or a test) and injected into the
Dispatcher. No module-level instances.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from loyalty.models import LoyaltyProgram
from orders.models import BatchOrder, Delivery, MenuItem, Order, Restaurant, User
from pricing.models import PricingRule

T = TypeVar("T")


class RecordMap(Generic[T]):
    """
    Thread-safe map of string id -> record. values() is ordered by key.
    """

    def __init__(self) -> None:
        self._records: Dict[str, T] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            return self._records.get(key)

    def insert(self, key: str, record: T) -> None:
        with self._lock:
            self._records[key] = record

    def values(self) -> List[T]:
        with self._lock:
            return [self._records[key] for key in sorted(self._records)]

    def update(self, key: str, fn: Callable[[Optional[T]], T]) -> T:
        """
        Read the current record (or None), compute the replacement with fn and
        store it, all under the map lock. Concurrent updates of the same key
        are serialized, so none of them is lost.
        """
        with self._lock:
            record = fn(self._records.get(key))
            self._records[key] = record
            return record

    def add_unique(self, key: str, record: T, field_name: str) -> bool:
        """
        Insert record unless another record already has the same field_name
        value. The check and the insert happen under one lock. Returns False on a clash.
        """
        value = getattr(record, field_name)
        with self._lock:
            if any(getattr(other, field_name) == value for other in self._records.values()):
                return False
            self._records[key] = record
            return True

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


@dataclass
class InMemoryStore:
    """
    One map per entity. Loyalty programs are keyed by user id.
    """
    users: RecordMap[User] = field(default_factory=RecordMap)
    restaurants: RecordMap[Restaurant] = field(default_factory=RecordMap)
    menu_items: RecordMap[MenuItem] = field(default_factory=RecordMap)
    orders: RecordMap[Order] = field(default_factory=RecordMap)
    deliveries: RecordMap[Delivery] = field(default_factory=RecordMap)
    batch_orders: RecordMap[BatchOrder] = field(default_factory=RecordMap)
    pricing_rules: RecordMap[PricingRule] = field(default_factory=RecordMap)
    loyalty_programs: RecordMap[LoyaltyProgram] = field(default_factory=RecordMap)
