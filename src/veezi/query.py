"""Fluent, side-effect-free queries over fetched collections.

Client list methods return a :class:`RecordList` (or one of its typed
subclasses :class:`SessionList` and :class:`FilmList`).  Every query method
builds a new list and leaves its input untouched, so chains can be written
freely::

    sessions = await client.list_sessions()
    tonight = (
        sessions.filter_today()
        .filter_open_for_sales()
        .sort_by_start_time()
    )
    by_film = tonight.group_by_film()

Filters commute with one another.  Sorting should come last in a chain when
a deterministic final order matters.  Nothing here touches the network or
the response cache.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Hashable, Iterable, Iterator, Sequence
from datetime import date, datetime
from typing import Any, Generic, Optional, TypeVar, Union, overload

from veezi.domain.film import Film
from veezi.domain.session import Session

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

Field = Union[str, Callable[[Any], Any]]


def _accessor(field: Field) -> Callable[[Any], Any]:
    """Turn an attribute name (dotted paths allowed) or a callable into a getter."""
    if callable(field):
        return field
    return operator.attrgetter(field)


class RecordList(Sequence[T], Generic[T]):
    """An immutable, ordered collection of domain records.

    Behaves like a read-only sequence (indexing, slicing, ``len``,
    iteration, equality with another ``RecordList`` of the same type) and
    adds chainable query operations.  Subclasses inherit every operation and
    get their own type back from each filter and sort.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: tuple[T, ...] = tuple(items)

    def _derive(self, items: Iterable[T]):
        return type(self)(items)

    # ------------------------------------------------------------------ #
    # Sequence protocol
    # ------------------------------------------------------------------ #

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> RecordList[T]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._derive(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RecordList):
            return type(self) is type(other) and self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self._items))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)!r})"

    # ------------------------------------------------------------------ #
    # Generic queries
    # ------------------------------------------------------------------ #

    def filter(self, predicate: Callable[[T], bool]):
        """Keep the records for which *predicate* is true."""
        return self._derive(item for item in self._items if predicate(item))

    def exclude(self, predicate: Callable[[T], bool]):
        """Drop the records for which *predicate* is true."""
        return self._derive(item for item in self._items if not predicate(item))

    def sort_by(self, key: Field, reverse: bool = False):
        """Return the records ordered by *key* (ascending unless *reverse*).

        The sort is stable: records with equal keys keep their relative order.
        """
        return self._derive(sorted(self._items, key=_accessor(key), reverse=reverse))

    def group_by(self, key: Callable[[T], K]) -> dict[K, RecordList[T]]:
        """Partition the records by ``key(record)``.

        Groups appear in the order their key is first seen, and each group
        keeps the records' original relative order.
        """
        buckets: dict[K, list[T]] = {}
        for item in self._items:
            buckets.setdefault(key(item), []).append(item)
        return {group: self._derive(members) for group, members in buckets.items()}

    def sum(self, field: Field) -> Union[int, float]:
        """Sum a numeric field over the collection (``0`` when empty)."""
        getter = _accessor(field)
        return sum(getter(item) for item in self._items)

    def average(self, field: Field) -> Optional[float]:
        """Arithmetic mean of a numeric field, or ``None`` when empty."""
        if not self._items:
            return None
        return self.sum(field) / len(self._items)

    def count(self, predicate: Optional[Callable[[T], bool]] = None) -> int:  # type: ignore[override]
        """Number of records, or of records matching *predicate*."""
        if predicate is None:
            return len(self._items)
        return sum(1 for item in self._items if predicate(item))

    def first(self) -> Optional[T]:
        return self._items[0] if self._items else None

    def to_list(self) -> list[T]:
        return list(self._items)


class SessionList(RecordList[Session]):
    """Query helpers specific to :class:`~veezi.domain.Session` collections."""

    __slots__ = ()

    # --- Filters ---

    def filter_today(self, today: Optional[date] = None) -> SessionList:
        """Sessions whose pre-show starts on *today* (defaults to the local date)."""
        return self.filter_by_date(today or date.today())

    def filter_by_date(self, day: date) -> SessionList:
        return self.filter(lambda session: session.start_date == day)

    def filter_by_date_range(self, start: date, end: date) -> SessionList:
        """Sessions whose pre-show start date lies within ``[start, end]``."""
        return self.filter(lambda session: start <= session.start_date <= end)

    def filter_open_for_sales(self, now: Optional[datetime] = None) -> SessionList:
        """Sessions for which tickets can still be sold at *now*."""
        return self.filter(lambda session: session.is_open_for_sales(now))

    def filter_has_available_seats(self) -> SessionList:
        return self.filter(lambda session: session.has_available_seats)

    def filter_by_film(self, film_id: str) -> SessionList:
        return self.filter(lambda session: session.film_id == film_id)

    def filter_by_screen(self, screen_id: int) -> SessionList:
        return self.filter(lambda session: session.screen_id == screen_id)

    def filter_containing_attribute(self, attribute_id: str) -> SessionList:
        return self.filter(lambda session: attribute_id in session.attributes)

    def filter_public(self) -> SessionList:
        return self.filter(lambda session: session.is_public)

    def filter_web(self) -> SessionList:
        """Public sessions that sell tickets online."""
        return self.filter(lambda session: session.is_public and session.sells_online)

    # --- Sorting and grouping ---

    def sort_by_start_time(self, reverse: bool = False) -> SessionList:
        return self.sort_by("pre_show_start_time", reverse=reverse)

    def group_by_date(self) -> dict[date, SessionList]:
        return self.group_by(lambda session: session.start_date)  # type: ignore[return-value]

    def group_by_film(self) -> dict[str, SessionList]:
        return self.group_by(lambda session: session.film_id)  # type: ignore[return-value]

    # --- Aggregates ---

    def total_seats_sold(self) -> int:
        return self.sum("seats_sold")

    def total_seats_available(self) -> int:
        return self.sum("seats_available")

    def average_seats_sold(self) -> Optional[float]:
        return self.average("seats_sold")


class FilmList(RecordList[Film]):
    """Query helpers specific to :class:`~veezi.domain.Film` collections."""

    __slots__ = ()

    def filter_active(self) -> FilmList:
        return self.filter(lambda film: film.is_active)

    def filter_3d(self) -> FilmList:
        return self.filter(lambda film: film.is_3d)

    def filter_2d(self) -> FilmList:
        return self.filter(lambda film: film.is_2d)

    def filter_by_genre(self, genre: str) -> FilmList:
        """Films of *genre*, compared case-insensitively."""
        wanted = genre.casefold()
        return self.filter(lambda film: film.genre.casefold() == wanted)

    def sort_by_title(self, reverse: bool = False) -> FilmList:
        return self.sort_by(lambda film: film.title.casefold(), reverse=reverse)

    def sort_by_display_sequence(self) -> FilmList:
        return self.sort_by("display_sequence")

    def group_by_genre(self) -> dict[str, FilmList]:
        return self.group_by(lambda film: film.genre)  # type: ignore[return-value]

    def average_duration(self) -> Optional[float]:
        return self.average("duration")
