"""
View state machine for the single-page client.

Views are flat (no history stack). ``drawing`` is a real state that sits
between pressing draw and seeing the result.
"""

import asyncio
import logging
import random
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Optional

from outfit_draw.client.camera import CameraDevice, CameraFlow
from outfit_draw.client.catalog import draw_suggestion
from outfit_draw.client.storage import ClientRecord, RecordBackend

logger = logging.getLogger(__name__)

DRAW_DELAY_SECONDS = 1.5
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


class View(str, Enum):
    HOME = "home"
    DRAWING = "drawing"
    RESULT = "result"
    RECORDS = "records"
    DONATE = "donate"


class Event(str, Enum):
    DRAW = "draw"
    REVEAL = "reveal"
    SAVE = "save"
    DELETE = "delete"
    GO_HOME = "go_home"
    GO_RECORDS = "go_records"
    GO_DONATE = "go_donate"


_NAVIGATION = {
    View.HOME: Event.GO_HOME,
    View.RECORDS: Event.GO_RECORDS,
    View.DONATE: Event.GO_DONATE,
}

TRANSITIONS: dict[tuple[View, Event], View] = {
    (View.HOME, Event.DRAW): View.DRAWING,
    (View.RESULT, Event.DRAW): View.DRAWING,
    (View.DRAWING, Event.REVEAL): View.RESULT,
    (View.RESULT, Event.SAVE): View.RECORDS,
    (View.RECORDS, Event.DELETE): View.RECORDS,
}
# Navigation works from every view; leaving DRAWING abandons the draw
for _source in View:
    for _dest, _event in _NAVIGATION.items():
        TRANSITIONS[(_source, _event)] = _dest


class InvalidTransition(Exception):
    def __init__(self, view: View, event: Event):
        super().__init__(f"{event.value} is not allowed in {view.value}")
        self.view = view
        self.event = event


class OutfitPicker:
    """
    Drives draw -> (photo) -> save, and the records list.

    ``backend`` decides where records go (device or API). The pending
    draft (suggestion, photo, note) only lives while the result view is
    shown.
    """

    def __init__(
        self,
        backend: RecordBackend,
        camera_device: CameraDevice,
        *,
        draw_delay: float = DRAW_DELAY_SECONDS,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.backend = backend
        self.camera = CameraFlow(camera_device)
        self.draw_delay = draw_delay
        self.rng = rng
        self.clock = clock
        self.view = View.HOME
        self.current: Optional[str] = None
        self.note = ""
        self.records: list[ClientRecord] = []
        self._draw_seq = 0

    async def start(self) -> None:
        """Rehydrate the record collection."""
        self.records = await self.backend.load()

    def can(self, event: Event) -> bool:
        return (self.view, event) in TRANSITIONS

    def _target(self, event: Event) -> View:
        try:
            return TRANSITIONS[(self.view, event)]
        except KeyError:
            raise InvalidTransition(self.view, event) from None

    def _fire(self, event: Event) -> View:
        target = self._target(event)
        logger.debug("%s --%s--> %s", self.view.value, event.value, target.value)
        if target is View.DRAWING or (self.view is View.DRAWING and event is not Event.REVEAL):
            self._draw_seq += 1
        if self.view is View.RESULT and target is not View.RESULT:
            self._discard_draft()
        self.view = target
        return target

    def _discard_draft(self) -> None:
        self.camera.reset()
        self.note = ""

    async def draw(self) -> Optional[str]:
        """
        Draw a suggestion after the fixed delay.

        Returns None if the user navigated away while drawing.
        """
        self._fire(Event.DRAW)
        self._discard_draft()
        token = self._draw_seq
        await asyncio.sleep(self.draw_delay)
        # A later navigation or draw owns the view now
        if token != self._draw_seq:
            return None
        self.current = draw_suggestion(self.rng)
        self._fire(Event.REVEAL)
        return self.current

    async def save(self) -> list[ClientRecord]:
        """Store the current draft as a new record and show the records view."""
        self._target(Event.SAVE)
        self.records = await self.backend.add(
            date=self.clock().strftime(DATE_FORMAT),
            style=self.current or "",
            image=self.camera.image,
            note=self.note,
        )
        self._fire(Event.SAVE)
        return self.records

    async def delete(self, record_id: str) -> list[ClientRecord]:
        self._target(Event.DELETE)
        self.records = await self.backend.remove(record_id)
        self._fire(Event.DELETE)
        return self.records

    def navigate(self, view: View) -> View:
        try:
            event = _NAVIGATION[view]
        except KeyError:
            raise ValueError(f"{view.value} is not a navigation target") from None
        return self._fire(event)
