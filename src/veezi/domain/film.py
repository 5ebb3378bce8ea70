"""Films and the people credited on them."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from veezi.domain._base import VeeziRecord

if TYPE_CHECKING:
    from veezi.client.client import VeeziClient
    from veezi.query import SessionList


class FilmStatus(str, enum.Enum):
    """Scheduling status of a :class:`Film` or film package."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    DELETED = "Deleted"


class FilmFormat(str, enum.Enum):
    """Presentation format of a film or session."""

    FILM_2D = "2D Film"
    DIGITAL_2D = "2D Digital"
    DIGITAL_3D = "3D Digital"
    DIGITAL_3D_HFR = "3D HFR"
    NOT_A_FILM = "Not a Film"


class Person(VeeziRecord):
    """A cast or crew member credited on a :class:`Film`."""

    id: str
    first_name: str
    last_name: str
    role: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Film(VeeziRecord):
    """A film in the Veezi system.

    ``duration`` is in minutes.  ``rating`` is ``None`` for unrated films;
    use :attr:`rating_display` for a printable value.
    """

    id: str
    title: str
    short_name: str
    synopsis: Optional[str] = None
    genre: str
    signage_text: str
    distributor: str
    opening_date: datetime
    rating: Optional[str] = None
    status: FilmStatus
    content: Optional[str] = None
    duration: int
    display_sequence: int
    national_code: Optional[str] = None
    format: FilmFormat
    is_restricted: bool
    people: tuple[Person, ...]
    audio_language: Optional[str] = None
    government_film_title: Optional[str] = None
    film_poster_url: Optional[str] = None
    film_poster_thumbnail_url: str
    backdrop_image_url: Optional[str] = None
    film_trailer_url: Optional[str] = None

    # --- Derived helpers ---

    @property
    def formatted_duration(self) -> str:
        """Duration as ``"2h"`` or ``"2h 15m"``."""
        hours, minutes = divmod(self.duration, 60)
        if minutes == 0:
            return f"{hours}h"
        return f"{hours}h {minutes}m"

    @property
    def is_active(self) -> bool:
        return self.status is FilmStatus.ACTIVE

    @property
    def is_3d(self) -> bool:
        return self.format in (FilmFormat.DIGITAL_3D, FilmFormat.DIGITAL_3D_HFR)

    @property
    def is_2d(self) -> bool:
        return self.format in (FilmFormat.FILM_2D, FilmFormat.DIGITAL_2D)

    @property
    def actors(self) -> list[Person]:
        return [p for p in self.people if p.role == "Actor"]

    @property
    def directors(self) -> list[Person]:
        return [p for p in self.people if p.role == "Director"]

    @property
    def actors_formatted(self) -> str:
        """Comma-separated actor names, in credit order."""
        return ", ".join(p.full_name for p in self.actors)

    @property
    def directors_formatted(self) -> str:
        """Comma-separated director names, in credit order."""
        return ", ".join(p.full_name for p in self.directors)

    @property
    def rating_display(self) -> str:
        """The rating, or ``"NR"`` when the film is not rated."""
        return self.rating if self.rating is not None else "NR"

    # --- Related resources ---

    async def sessions(self, client: VeeziClient) -> SessionList:
        """All future sessions screening this film."""
        return await client.list_sessions_for_film(self.id)

    async def web_sessions(self, client: VeeziClient) -> SessionList:
        """Future sessions for this film that are available for online sales."""
        sessions = await client.list_web_sessions()
        return sessions.filter_by_film(self.id)
