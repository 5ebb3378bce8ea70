"""Route templates of the Veezi REST API.

Each logical operation maps to exactly one route.  Templates use ``{}``
placeholders for path parameters, which :meth:`Route.path` fills in
order, URL-quoting every value.
"""

from __future__ import annotations

import enum
from typing import Any
from urllib.parse import quote


class Route(str, enum.Enum):
    """Known API routes, relative to the client's base URL."""

    SESSIONS = "v1/session"
    WEB_SESSIONS = "v1/websession"
    SESSION = "v1/session/{}"
    FILMS = "v4/film"
    FILM = "v4/film/{}"
    FILM_PACKAGES = "v1/filmpackage"
    FILM_PACKAGE = "v1/filmpackage/{}"
    SCREENS = "v1/screen"
    SCREEN = "v1/screen/{}"
    SITE = "v1/site"
    ATTRIBUTES = "v1/attribute"
    ATTRIBUTE = "v1/attribute/{}"

    @property
    def template(self) -> str:
        return self.value

    @property
    def arity(self) -> int:
        """Number of path parameters the template expects."""
        return self.value.count("{}")

    def path(self, *params: Any) -> str:
        """Render the route with *params* substituted into its placeholders.

        Raises:
            ValueError: If the number of parameters does not match the
                template.
        """
        if len(params) != self.arity:
            raise ValueError(
                f"Route {self.value!r} takes {self.arity} parameter(s), got {len(params)}"
            )
        return self.value.format(*(quote(str(param), safe="") for param in params))
