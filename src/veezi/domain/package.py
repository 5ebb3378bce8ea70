"""Film packages ("double features")."""

from __future__ import annotations

from typing import TYPE_CHECKING

from veezi.domain._base import VeeziRecord
from veezi.domain.film import FilmStatus

if TYPE_CHECKING:
    from veezi.client.client import VeeziClient
    from veezi.domain.film import Film


class PackageFilm(VeeziRecord):
    """One film inside a :class:`FilmPackage`.

    ``split_percent`` is the share of the box office this film receives.
    Durations are in minutes.
    """

    film_id: str
    title: str
    split_percent: float
    trailer_duration: int
    clean_up_duration: int
    order: int

    async def film(self, client: VeeziClient) -> Film:
        return await client.get_film(self.film_id)


class FilmPackage(VeeziRecord):
    """A package of films screened together in one session."""

    id: int
    title: str
    status: FilmStatus
    films: tuple[PackageFilm, ...]

    @property
    def ordered_films(self) -> list[PackageFilm]:
        """Films in screening order."""
        return sorted(self.films, key=lambda film: film.order)

    @property
    def film_ids(self) -> list[str]:
        return [film.film_id for film in self.ordered_films]

    @property
    def is_active(self) -> bool:
        return self.status is FilmStatus.ACTIVE
