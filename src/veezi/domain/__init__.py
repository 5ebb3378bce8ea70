"""Typed records mirroring the Veezi API's JSON resources.

Every record is a frozen Pydantic model.  Records never hold a reference to
the client that fetched them; helpers that follow a relation (e.g.
:meth:`Session.film`) take the client as an argument.
"""

from veezi.domain.attribute import Attribute
from veezi.domain.film import Film, FilmFormat, FilmStatus, Person
from veezi.domain.package import FilmPackage, PackageFilm
from veezi.domain.screen import Screen
from veezi.domain.session import SalesVia, Seating, Session, SessionStatus, ShowType
from veezi.domain.site import Site

__all__ = [
    "Attribute",
    "Film",
    "FilmFormat",
    "FilmPackage",
    "FilmStatus",
    "PackageFilm",
    "Person",
    "SalesVia",
    "Screen",
    "Seating",
    "Session",
    "SessionStatus",
    "ShowType",
    "Site",
]
