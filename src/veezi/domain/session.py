"""Screening sessions.

A :class:`Session` is one showing of a film (or film package) on a screen
at a specific time.  All timestamps are naive local site times, exactly as
the API returns them.
"""

from __future__ import annotations

import enum
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

from pydantic import model_validator

from veezi.domain._base import VeeziRecord
from veezi.domain.film import FilmFormat

if TYPE_CHECKING:
    from veezi.client.client import VeeziClient
    from veezi.domain.attribute import Attribute
    from veezi.domain.film import Film
    from veezi.domain.package import FilmPackage
    from veezi.domain.screen import Screen


class Seating(str, enum.Enum):
    """How seats are assigned for a session."""

    ALLOCATED = "Allocated"
    SELECT = "Select"
    OPEN = "Open"


class ShowType(str, enum.Enum):
    PRIVATE = "Private"
    PUBLIC = "Public"


class SessionStatus(str, enum.Enum):
    """Sales status of a session."""

    OPEN = "Open"
    CLOSED = "Closed"
    PLANNED = "Planned"


_SALES_CHANNELS = {"KIOSK": "kiosk", "POS": "pos", "WWW": "www", "MX": "mx", "RSP": "rsp"}


class SalesVia(VeeziRecord):
    """Channels through which tickets for a session may be sold.

    Decoded from the API's list form, e.g. ``["POS", "WWW"]``.  Unknown
    channel names are ignored.
    """

    kiosk: bool = False
    pos: bool = False
    www: bool = False
    mx: bool = False
    rsp: bool = False

    @model_validator(mode="before")
    @classmethod
    def _from_channel_list(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {
                _SALES_CHANNELS[name]: True
                for name in data
                if isinstance(name, str) and name in _SALES_CHANNELS
            }
        return data


class Session(VeeziRecord):
    """A single screening session."""

    id: int
    film_id: str
    film_package_id: Optional[int] = None
    title: str
    screen_id: int
    seating: Seating
    are_complimentaries_allowed: bool
    show_type: ShowType
    sales_via: SalesVia
    status: SessionStatus
    pre_show_start_time: datetime
    sales_cut_off_time: datetime
    feature_start_time: datetime
    feature_end_time: datetime
    cleanup_end_time: datetime
    tickets_sold_out: bool
    few_tickets_left: bool
    seats_available: int
    seats_held: int
    seats_house: int
    seats_sold: int
    film_format: FilmFormat
    price_card_name: str
    attributes: tuple[str, ...]
    audio_language: Optional[str] = None

    # --- Derived helpers ---

    def is_open_for_sales(self, now: Optional[datetime] = None) -> bool:
        """Return whether tickets can still be sold for this session.

        True when the session is open, its sales cut-off lies after *now*,
        and at least one seat is available.  *now* defaults to the current
        UTC time as a naive datetime.
        """
        if now is None:
            now = datetime.now(timezone.utc).replace(tzinfo=None)
        return (
            self.status is SessionStatus.OPEN
            and now < self.sales_cut_off_time
            and self.seats_available > 0
        )

    @property
    def has_available_seats(self) -> bool:
        return self.seats_available > 0

    @property
    def start_date(self) -> date:
        """Calendar day of the pre-show start."""
        return self.pre_show_start_time.date()

    @property
    def feature_duration(self) -> int:
        """Minutes between feature start and feature end."""
        return int((self.feature_end_time - self.feature_start_time).total_seconds() // 60)

    @property
    def is_public(self) -> bool:
        return self.show_type is ShowType.PUBLIC

    @property
    def sells_online(self) -> bool:
        return self.sales_via.www

    # --- Related resources ---

    async def film(self, client: VeeziClient) -> Film:
        return await client.get_film(self.film_id)

    async def film_package(self, client: VeeziClient) -> Optional[FilmPackage]:
        """The film package screened in this session, or ``None``."""
        if self.film_package_id is None:
            return None
        return await client.get_film_package(self.film_package_id)

    async def screen(self, client: VeeziClient) -> Screen:
        return await client.get_screen(self.screen_id)

    async def attribute_records(self, client: VeeziClient) -> list[Attribute]:
        """Fetch the full :class:`Attribute` for every attribute id on this session."""
        return [await client.get_attribute(attribute_id) for attribute_id in self.attributes]
