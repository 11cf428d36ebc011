# newwork-server/newwork/db/store.py
"""
In-memory collections, one reader/writer lock per resource family.

Collections hold records only; they know nothing about roles or ownership.
Every read hands out a copy so callers can never mutate stored state outside
the lock. Writes that depend on current state go through ``update``, which
runs the check and the change inside a single write critical section.
"""
import copy
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Generic, Iterator, List, Optional, TypeVar

from newwork.core.exceptions import Conflict
from newwork.db.models import AbsenceRequest, DataItem, Employee, Feedback, User

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReadWriteLock:
    """Many concurrent readers or one writer. Waiting writers block new readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class Collection(Generic[T]):
    """Keyed collection of records, keyed by the record's ``id``."""

    def __init__(self, name: str):
        self.name = name
        self._lock = ReadWriteLock()
        self._items: Dict[str, T] = {}

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._items)

    def get(self, key: str) -> Optional[T]:
        with self._lock.read():
            item = self._items.get(key)
            return copy.copy(item) if item is not None else None

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        with self._lock.read():
            for item in self._items.values():
                if predicate(item):
                    return copy.copy(item)
        return None

    def all(self) -> List[T]:
        with self._lock.read():
            return [copy.copy(item) for item in self._items.values()]

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        with self._lock.read():
            return [copy.copy(item) for item in self._items.values() if predicate(item)]

    def add(self, item: T, unique: Optional[Callable[[T], object]] = None) -> T:
        """
        Inserts ``item``. With ``unique`` given, refuses the insert when another
        record maps to the same value, checked under the same write lock.
        """
        key = item.id
        with self._lock.write():
            if key in self._items:
                raise Conflict(f"{self.name} '{key}' already exists")
            if unique is not None:
                value = unique(item)
                if any(unique(existing) == value for existing in self._items.values()):
                    raise Conflict(f"{self.name} with this value already exists")
            self._items[key] = copy.copy(item)
        logger.debug("Added %s %s", self.name, key)
        return copy.copy(item)

    def update(
        self,
        key: str,
        mutate: Callable[[T], None],
        unique: Optional[Callable[[T], object]] = None,
    ) -> Optional[T]:
        """
        Applies ``mutate`` to a copy of the stored record and saves it.
        Returns None when the key is absent. If ``mutate`` raises, nothing is stored.
        ``unique`` works as in ``add``, against every other record.
        """
        with self._lock.write():
            current = self._items.get(key)
            if current is None:
                return None
            changed = copy.copy(current)
            mutate(changed)
            if unique is not None:
                value = unique(changed)
                if any(unique(other) == value for k, other in self._items.items() if k != key):
                    raise Conflict(f"{self.name} with this value already exists")
            self._items[key] = changed
            return copy.copy(changed)


class AppendOnlyLog(Generic[T]):
    """Insertion-ordered records that are never changed once written."""

    def __init__(self, name: str):
        self.name = name
        self._lock = ReadWriteLock()
        self._items: List[T] = []

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._items)

    def append(self, item: T) -> T:
        with self._lock.write():
            self._items.append(copy.copy(item))
        return copy.copy(item)

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        with self._lock.read():
            return [copy.copy(item) for item in self._items if predicate(item)]


class Database:
    """All resource families of one running service. Built once at startup."""

    def __init__(self):
        self.users: Collection[User] = Collection("User")
        self.employees: Collection[Employee] = Collection("Employee")
        self.data_items: Collection[DataItem] = Collection("DataItem")
        self.feedbacks: AppendOnlyLog[Feedback] = AppendOnlyLog("Feedback")
        self.absences: Collection[AbsenceRequest] = Collection("AbsenceRequest")
