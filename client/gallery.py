"""Gallery of submitted spouses: fetch state and HTML rendering."""

from __future__ import annotations

import logging
from html import escape
from typing import List, Optional

from client.api_client import SpouseApiClient
from models.spouse_record import SpouseRecord
from utils.errors import ApiRequestError

LOGGER = logging.getLogger(__name__)

LOADING, LOADED, ERRORED = "loading", "loaded", "errored"
SKELETON_COUNT = 6

_SKELETON_CARD = (
    '<div class="card skeleton">'
    '<div class="skeleton-image" style="height:200px;width:100%"></div>'
    '<div class="skeleton-line" style="width:50%"></div>'
    '<div class="skeleton-line" style="width:75%"></div>'
    "</div>"
)


class Gallery:
    """Tracks the list fetch (loading -> loaded | errored) and renders cards."""

    def __init__(self) -> None:
        self.state = LOADING
        self.spouses: List[SpouseRecord] = []
        self.error: Optional[str] = None

    async def refresh(self, api: SpouseApiClient) -> None:
        """Re-fetch the spouse list; the gallery shows skeletons until it returns."""
        self.state = LOADING
        self.error = None
        try:
            self.spouses = await api.list_spouses()
        except ApiRequestError as exc:
            LOGGER.error("Failed to load gallery: %s", exc.message)
            self.error = exc.message
            self.state = ERRORED
            return
        self.state = LOADED

    def render(self) -> str:
        """Return the gallery grid as an HTML fragment."""
        if self.state == LOADING:
            cards = _SKELETON_CARD * SKELETON_COUNT
        elif self.state == ERRORED:
            cards = f'<p class="gallery-error">{escape(self.error or "Failed to fetch spouses")}</p>'
        else:
            cards = "".join(render_card(spouse) for spouse in self.spouses)
        return f'<div class="gallery">{cards}</div>'


def render_card(spouse: SpouseRecord) -> str:
    """Render one spouse as a card with its image, name and submitter."""
    return (
        f'<div class="card" data-id="{spouse.id}">'
        f'<img src="{escape(spouse.image_data, quote=True)}" alt="{escape(spouse.spouse_name, quote=True)}">'
        f"<h3>{escape(spouse.spouse_name)}</h3>"
        f'<p class="added-by">Added by {escape(spouse.user_name)}</p>'
        "</div>"
    )
