"""Read-only record store shared by both services."""
from abc import ABC, abstractmethod
from typing import Generic, Iterable, List, Optional, TypeVar

UserT = TypeVar("UserT")
OrderT = TypeVar("OrderT")


class RecordStore(ABC, Generic[UserT, OrderT]):
    """Data-access port: the services only ever list records."""

    @abstractmethod
    def list_users(self) -> List[UserT]: ...

    @abstractmethod
    def list_orders(self) -> List[OrderT]: ...


class InMemoryRecordStore(RecordStore[UserT, OrderT]):
    """
    Store backed by seed sequences captured at construction time.

    Each call returns a new list in insertion order, so callers may filter or
    sort the result without touching the store's own snapshot.
    """

    def __init__(self, users: Optional[Iterable[UserT]] = None, orders: Optional[Iterable[OrderT]] = None):
        self._users = tuple(users or ())
        self._orders = tuple(orders or ())

    def list_users(self) -> List[UserT]:
        return list(self._users)

    def list_orders(self) -> List[OrderT]:
        return list(self._orders)
