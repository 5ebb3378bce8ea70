"""The Veezi site (cinema location) the access token belongs to."""

from __future__ import annotations

from typing import Optional

from pydantic import field_validator

from veezi.domain._base import VeeziRecord, unwrap_ids


class Site(VeeziRecord):
    """Site details as returned by ``v1/site``.

    ``screens`` holds the ids of the site's screens; the API nests them as
    ``[{"Id": 1}, ...]``.
    """

    name: str
    short_name: str
    legal_name: str
    national_code: Optional[str] = None
    address_1: Optional[str] = None
    address_2: Optional[str] = None
    address_3: Optional[str] = None
    post_code: Optional[str] = None
    phone_1: Optional[str] = None
    phone_2: Optional[str] = None
    fax: Optional[str] = None
    sales_tax_registration: Optional[str] = None
    ticket_message_1: Optional[str] = None
    ticket_message_2: Optional[str] = None
    receipt_message_1: Optional[str] = None
    receipt_message_2: Optional[str] = None
    receipt_message_3: Optional[str] = None
    receipt_message_4: Optional[str] = None
    receipt_message_5: Optional[str] = None
    receipt_message_6: Optional[str] = None
    time_zone_identifier: str
    country: str
    screens: tuple[int, ...]

    @field_validator("screens", mode="before")
    @classmethod
    def _unwrap_screen_ids(cls, value):
        return unwrap_ids(value)

    @property
    def address_lines(self) -> list[str]:
        """Non-empty address lines followed by the post code, if set."""
        lines = [self.address_1, self.address_2, self.address_3, self.post_code]
        return [line for line in lines if line]

    @property
    def display_address(self) -> str:
        return ", ".join(self.address_lines)
