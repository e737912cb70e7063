"""
Swipe controller: a locally fetched page of listings and a cursor.
Decisions are recorded in the background; the cursor advances immediately.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple
from timbr.client.api import TimbrClient
from timbr.client.tasks import BestEffortDispatcher
from timbr.config import settings
import time
import logging

logger = logging.getLogger(__name__)

LEFT = "LEFT"
RIGHT = "RIGHT"

KEY_DIRECTIONS = {
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
}


class SwipeController:
    """
    Drives the swipe deck.

    Args:
        client: API client used to fetch listings and record swipes
        dispatcher: Runs swipe recording without blocking the deck
        page_size: Listings fetched per refresh
        threshold_ratio: Fraction of the card width a drag must pass to count
        clock: Seconds source used for dwell time
    """

    def __init__(
        self,
        client: TimbrClient,
        dispatcher: Optional[BestEffortDispatcher] = None,
        page_size: int = settings.client_page_size,
        threshold_ratio: float = settings.swipe_threshold_ratio,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.dispatcher = dispatcher or BestEffortDispatcher()
        self.page_size = page_size
        self.threshold_ratio = threshold_ratio
        self._clock = clock
        self.houses: List[Dict[str, Any]] = []
        self.cursor = 0
        self._shown_at = clock()

    @property
    def current(self) -> Optional[Dict[str, Any]]:
        if self.cursor < len(self.houses):
            return self.houses[self.cursor]
        return None

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.houses)

    @property
    def progress(self) -> Tuple[int, int]:
        """(listings decided, listings loaded)"""
        return min(self.cursor, len(self.houses)), len(self.houses)

    async def refresh(self) -> int:
        """
        Fetch the first page again and start over.
        Listings already swiped may come back.

        Returns:
            Number of listings loaded
        """
        self.houses = await self.client.list_houses(take=self.page_size, skip=0)
        self.cursor = 0
        self._shown_at = self._clock()
        logger.info(f"Loaded {len(self.houses)} listings")
        return len(self.houses)

    def swipe(self, direction: str) -> Optional[Dict[str, Any]]:
        """
        Decide on the current listing.

        Returns:
            The listing decided on, or None when there is none
        """
        house = self.current
        if house is None:
            return None
        if direction not in (LEFT, RIGHT):
            raise ValueError(f"Unknown swipe direction: {direction}")

        dwell_ms = max(0, int((self._clock() - self._shown_at) * 1000))
        self.dispatcher.submit(
            self.client.record_swipe(house["id"], direction, dwell_ms),
            description=f"Recording {direction} swipe on {house['id']}",
        )

        self.cursor += 1
        self._shown_at = self._clock()
        return house

    def on_gesture_release(self, dx: float, width: float) -> Optional[Dict[str, Any]]:
        """Drag released at horizontal offset `dx`; short drags snap back."""
        threshold = self.threshold_ratio * width
        if dx > threshold:
            return self.swipe(RIGHT)
        if dx < -threshold:
            return self.swipe(LEFT)
        return None

    def on_key(self, key: str) -> Optional[Dict[str, Any]]:
        direction = KEY_DIRECTIONS.get(key)
        if direction is None:
            return None
        return self.swipe(direction)

    def on_button(self, direction: str) -> Optional[Dict[str, Any]]:
        return self.swipe(direction)
