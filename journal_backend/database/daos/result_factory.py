"""
DAO Result Factory — lazy query results
=======================================

Purpose
-------
`fetchBy*` DAO methods return a `DAOResultFactory` instead of a list. The
factory holds the SELECT statement and turns rows into entities only when
they are consumed, using the owning DAO's row mapper (which also merges the
settings table of each row).

Consumption model
-----------------
- `next()` walks ONE cursor, opened on the first call, forward only. It is a
  single-consumer API: two call sites calling `next()` on the same factory
  share (and advance) the same cursor.
- Iterating the factory (`for x in factory`) re-issues the query every time,
  so a factory can be iterated more than once.
- `count` is the number of rows matching the statement, ignoring pagination.

Pagination
----------
`RangeInfo(page, count)` limits the rows produced to one page (pages start at 1).
"""

from dataclasses import dataclass
from math import ceil
from typing import Callable, Generic, Iterator, List, Mapping, Optional, TypeVar

from sqlalchemy import Result, Select, func, select
from sqlalchemy.orm import Session

T = TypeVar("T")


@dataclass(frozen=True)
class RangeInfo:
    """
    One page of a result set.

    Attributes
    ----------
    page : int
        1-based page number.
    count : int
        Rows per page.
    """
    page: int = 1
    count: int = 25

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"RangeInfo page must be >= 1, got {self.page}")
        if self.count < 1:
            raise ValueError(f"RangeInfo count must be >= 1, got {self.count}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.count


class DAOResultFactory(Generic[T]):
    """
    Lazy, single-consumer sequence of entities produced from a query.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session the query runs in. The factory must be
        consumed before the session is closed.
    statement : Select
        The query; ordering is part of it.
    row_mapper : Callable[[Mapping], T]
        Turns one row (column name → value) into an entity.
    range_info : RangeInfo | None
        Optional page to restrict the produced rows to.
    executor : Callable[[Select], Result] | None
        Runs a statement; defaults to `session.execute`. DAOs pass their
        `retrieve` so query errors are logged like every other DAO query.
    """

    def __init__(
        self,
        session: Session,
        statement: Select,
        row_mapper: Callable[[Mapping], T],
        range_info: Optional[RangeInfo] = None,
        executor: Optional[Callable[[Select], Result]] = None,
    ):
        self._session = session
        self._execute = executor or session.execute
        self._statement = statement
        self._row_mapper = row_mapper
        self.range_info = range_info
        self._cursor = None
        self._count: Optional[int] = None
        self._at_end = False

    def _pagedStatement(self) -> Select:
        if self.range_info is None:
            return self._statement
        return self._statement.limit(self.range_info.count).offset(self.range_info.offset)

    def _open(self):
        return self._execute(self._pagedStatement()).mappings()

    def next(self) -> Optional[T]:
        """
        Produce the next entity from the shared cursor.

        Returns
        -------
        T | None
            The next entity, or None once the sequence is exhausted.
        """
        if self._at_end:
            return None
        if self._cursor is None:
            self._cursor = iter(self._open())
        row = next(self._cursor, None)
        if row is None:
            self._at_end = True
            self._cursor = None
            return None
        return self._row_mapper(row)

    def __iter__(self) -> Iterator[T]:
        for row in self._open():
            yield self._row_mapper(row)

    @property
    def count(self) -> int:
        """Total number of matching rows, regardless of pagination."""
        if self._count is None:
            counter = select(func.count()).select_from(self._statement.order_by(None).subquery())
            self._count = self._execute(counter).scalar_one()
        return self._count

    @property
    def atEnd(self) -> bool:
        """True once `next()` has returned None."""
        return self._at_end

    @property
    def pageCount(self) -> int:
        if self.range_info is None:
            return 1 if self.count else 0
        return ceil(self.count / self.range_info.count)

    def wasEmpty(self) -> bool:
        return self.count == 0

    def toList(self) -> List[T]:
        """Materialize the (current page of the) result."""
        return list(self)
