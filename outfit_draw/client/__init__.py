"""Client-side view state machine, camera flow and record backends."""

from outfit_draw.client.camera import CameraFlow, CameraState, CameraUnavailable
from outfit_draw.client.catalog import (
    DONATION_TIERS,
    SUGGESTIONS,
    DonationTier,
    draw_suggestion,
)
from outfit_draw.client.machine import InvalidTransition, OutfitPicker, View
from outfit_draw.client.storage import (
    ApiRecordBackend,
    ClientRecord,
    LocalRecordStorage,
)

__all__ = [
    "ApiRecordBackend",
    "CameraFlow",
    "CameraState",
    "CameraUnavailable",
    "ClientRecord",
    "DONATION_TIERS",
    "DonationTier",
    "InvalidTransition",
    "LocalRecordStorage",
    "OutfitPicker",
    "SUGGESTIONS",
    "View",
    "draw_suggestion",
]
