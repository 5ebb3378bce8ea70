"""Session attributes (e.g. "Subtitled", "Sensory friendly")."""

from __future__ import annotations

from typing import TYPE_CHECKING

from veezi.domain._base import VeeziRecord

if TYPE_CHECKING:
    from veezi.client.client import VeeziClient
    from veezi.query import SessionList


class Attribute(VeeziRecord):
    """A label that can be attached to sessions.

    Colours are hex codes as configured in Veezi.
    """

    id: str
    description: str
    short_name: str
    font_color: str
    background_color: str
    show_on_sessions_with_no_comps: bool

    async def sessions(self, client: VeeziClient) -> SessionList:
        """All future sessions carrying this attribute."""
        return await client.list_sessions_with_attribute(self.id)
