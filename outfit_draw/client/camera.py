"""
Camera sub-flow of the result view.

idle -> requesting -> streaming -> captured -> idle

The device itself is a capability handed in by the host UI. Failing to
open it is reported through ``error`` and leaves the flow idle.
"""

import base64
import logging
from enum import Enum
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

CAMERA_ERROR_MESSAGE = "Unable to access the camera. Please check permissions."


class CameraState(str, Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    STREAMING = "streaming"
    CAPTURED = "captured"


class CameraUnavailable(Exception):
    """The device could not be opened (denied permission, no hardware)."""


class CameraStream(Protocol):
    def grab_frame(self) -> bytes:
        """Return the current frame as JPEG bytes."""

    def stop(self) -> None:
        """Release the device."""


class CameraDevice(Protocol):
    async def open(self) -> CameraStream:
        """Start streaming from the front camera."""


class InvalidCameraTransition(Exception):
    pass


class CameraFlow:
    def __init__(self, device: CameraDevice):
        self.device = device
        self.state = CameraState.IDLE
        self.image: Optional[str] = None
        self.error: Optional[str] = None
        self._stream: Optional[CameraStream] = None

    async def start(self) -> None:
        """Request the camera. Also used for a retake after a capture."""
        if self.state not in (CameraState.IDLE, CameraState.CAPTURED):
            raise InvalidCameraTransition(f"cannot start camera while {self.state.value}")
        self.image = None
        self.error = None
        self.state = CameraState.REQUESTING
        try:
            stream = await self.device.open()
        except CameraUnavailable:
            logger.exception("Error accessing camera")
            self.error = CAMERA_ERROR_MESSAGE
            self.state = CameraState.IDLE
            return
        if self.state is not CameraState.REQUESTING:
            # Reset while the request was pending
            stream.stop()
            return
        self._stream = stream
        self.state = CameraState.STREAMING

    def capture(self) -> str:
        """Freeze the current frame as a JPEG data URL and stop streaming."""
        if self.state is not CameraState.STREAMING or self._stream is None:
            raise InvalidCameraTransition(f"cannot capture while {self.state.value}")
        frame = self._stream.grab_frame()
        self.image = "data:image/jpeg;base64," + base64.b64encode(frame).decode("ascii")
        self._stop_stream()
        self.state = CameraState.CAPTURED
        return self.image

    def cancel(self) -> None:
        """Stop streaming without taking a photo."""
        self._stop_stream()
        if self.state is not CameraState.CAPTURED:
            self.state = CameraState.IDLE

    def clear(self) -> None:
        """Drop the captured photo."""
        self.image = None
        if self.state is CameraState.CAPTURED:
            self.state = CameraState.IDLE

    def reset(self) -> None:
        self._stop_stream()
        self.image = None
        self.error = None
        self.state = CameraState.IDLE

    def _stop_stream(self) -> None:
        if self._stream is not None:
            self._stream.stop()
            self._stream = None
