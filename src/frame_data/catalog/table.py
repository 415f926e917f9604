"""
Keyed in-memory table used by the catalog.

Rows are held in insertion order, keyed by a composite of record fields.
"""
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from ..exceptions import ConstraintViolationError

R = TypeVar("R")


class CatalogTable(Generic[R]):
    """
    Insertion-ordered mapping from a composite key to an immutable record.

    The first key field doubles as a partition key, so scans such as
    "every alias for one character" do not walk the whole table.
    """

    def __init__(self, name: str, key_fields: Tuple[str, ...]):
        if not key_fields:
            raise ValueError("A table needs at least one key field")
        self.name = name
        self.key_fields = key_fields
        self._rows: Dict[Tuple[Any, ...], R] = {}
        self._partitions: Dict[Any, List[R]] = {}
        self._frozen = False

    def key_of(self, record: R) -> Tuple[Any, ...]:
        return tuple(getattr(record, field) for field in self.key_fields)

    def insert(self, record: R) -> R:
        """
        Insert a record, rejecting duplicate keys.

        :raises ConstraintViolationError: if the key is already present
        """
        if self._frozen:
            raise ConstraintViolationError(f"Table '{self.name}' is read-only")

        key = self.key_of(record)
        if key in self._rows:
            raise ConstraintViolationError(
                f"Duplicate key {key} in table '{self.name}'"
            )

        self._rows[key] = record
        self._partitions.setdefault(key[0], []).append(record)
        return record

    def bulk_insert(self, records) -> int:
        count = 0
        for record in records:
            self.insert(record)
            count += 1
        return count

    def get(self, *key: Any) -> Optional[R]:
        """Point lookup by the full composite key."""
        return self._rows.get(tuple(key))

    def scan(self, **criteria: Any) -> List[R]:
        """
        Filtered scan by field equality, in insertion order.

        :param criteria: field=value pairs every returned row must match
        :return: Matching records
        """
        first_field = self.key_fields[0]
        if first_field in criteria:
            rows = self._partitions.get(criteria[first_field], [])
        else:
            rows = list(self._rows.values())

        return [
            row for row in rows
            if all(getattr(row, field) == value for field, value in criteria.items())
        ]

    def clear(self) -> None:
        if self._frozen:
            raise ConstraintViolationError(f"Table '{self.name}' is read-only")
        self._rows.clear()
        self._partitions.clear()

    def freeze(self) -> None:
        self._frozen = True

    def rows(self) -> List[R]:
        return list(self._rows.values())

    def __contains__(self, key: Tuple[Any, ...]) -> bool:
        return tuple(key) in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[R]:
        return iter(list(self._rows.values()))
