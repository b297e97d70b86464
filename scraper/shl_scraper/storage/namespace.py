"""Typed views over one keyed-store namespace, plus merge-by-identity upserts."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable, Generic, Hashable, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..exceptions import StoreError
from ..logging import logger
from .base import KeyedStore

T = TypeVar("T")
R = TypeVar("R")


def upsert_record(records: list[R], record: R, identity: Callable[[R], Hashable]) -> bool:
    """Insert or replace ``record`` in ``records`` by identity, in place.

    A replaced record keeps its position. There is no revision comparison:
    the last write wins even if it carries an older revision.

    Returns:
        True if the record was appended, False if it replaced an existing one
    """
    record_id = identity(record)
    for pos, existing in enumerate(records):
        if identity(existing) == record_id:
            records[pos] = record
            return False
    records.append(record)
    return True


class Namespace(Generic[T]):
    """One namespace of a KeyedStore holding values of a single type.

    Serialization goes through a pydantic TypeAdapter, so stored values are
    plain JSON and read back as models. ``default`` builds the value used
    when nothing usable is stored.
    """

    def __init__(
        self,
        store: KeyedStore,
        name: str,
        value_type: Any,
        default: Callable[[], T],
    ) -> None:
        self.store = store
        self.name = name
        self.default = default
        self._adapter: TypeAdapter[T] = TypeAdapter(value_type)

    def read(self, key: str) -> T | None:
        data = self.store.read(self.name, key)
        if data is None:
            return None
        try:
            return self._adapter.validate_python(data)
        except ValidationError as exc:
            logger.warning(
                "store_value_invalid",
                namespace=self.name,
                key=key,
                errors=exc.error_count(),
            )
            return None

    def write(self, key: str, value: T) -> None:
        self.store.write(self.name, key, self._adapter.dump_python(value, mode="json", by_alias=True))

    def is_stale(self, key: str, ttl: timedelta | None) -> bool:
        return self.store.is_stale(self.name, key, ttl)


class RecordNamespace(Namespace[list[R]]):
    """Namespace holding an ordered list of records per aggregate key."""

    def __init__(
        self,
        store: KeyedStore,
        name: str,
        record_type: Any,
        identity: Callable[[R], Hashable],
    ) -> None:
        super().__init__(store, name, list[record_type], default=list)
        self.identity = identity
        self._record_adapter: TypeAdapter[R] = TypeAdapter(record_type)

    def read_all(self, key: str) -> list[R]:
        """Stored records for ``key``, validated one at a time.

        A record that no longer validates is dropped with a warning and the
        rest are kept, so one bad entry cannot erase its neighbours on the
        next upsert. A value that is not a list at all raises StoreError.
        """
        data = self.store.read(self.name, key)
        if data is None:
            return []
        if not isinstance(data, list):
            raise StoreError(
                f"Expected a record list in {self.name}, found {type(data).__name__}",
                self.name,
                key,
            )

        records: list[R] = []
        for pos, item in enumerate(data):
            try:
                records.append(self._record_adapter.validate_python(item))
            except ValidationError as exc:
                logger.warning(
                    "store_record_invalid",
                    namespace=self.name,
                    key=key,
                    position=pos,
                    errors=exc.error_count(),
                )
        return records

    def upsert(self, key: str, record: R) -> bool:
        """Read-modify-write one record into the list stored under ``key``.

        Not atomic: two concurrent upserts on the same key can lose one
        update. The store is the only synchronization point.
        """
        records = self.read_all(key)
        inserted = upsert_record(records, record, self.identity)
        self.write(key, records)
        logger.debug(
            "record_upserted",
            namespace=self.name,
            key=key,
            record_id=str(self.identity(record)),
            inserted=inserted,
            total=len(records),
        )
        return inserted

    def upsert_many(self, key: str, new_records: list[R]) -> int:
        """Merge a batch in one read-modify-write. Returns how many were new."""
        if not new_records:
            return 0
        records = self.read_all(key)
        inserted = sum(1 for record in new_records if upsert_record(records, record, self.identity))
        self.write(key, records)
        logger.debug(
            "records_upserted",
            namespace=self.name,
            key=key,
            batch=len(new_records),
            inserted=inserted,
            total=len(records),
        )
        return inserted
