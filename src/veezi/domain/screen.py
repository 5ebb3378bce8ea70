"""Screens (auditoriums) of a site."""

from __future__ import annotations

from typing import TYPE_CHECKING

from veezi.domain._base import VeeziRecord

if TYPE_CHECKING:
    from veezi.client.client import VeeziClient
    from veezi.query import SessionList


class Screen(VeeziRecord):
    id: int
    name: str
    screen_number: str
    has_custom_layout: bool
    total_seats: int
    house_seats: int

    async def sessions(self, client: VeeziClient) -> SessionList:
        """All future sessions on this screen."""
        return await client.list_sessions_for_screen(self.id)
