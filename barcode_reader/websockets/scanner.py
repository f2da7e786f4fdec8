"""
==============================================================================
Scanner WebSocket Module
==============================================================================

Streaming barcode decoding over a WebSocket connection.

Protocol:
---------
1. Client sends {"type": "init", "formats": [...], "crop_width", "crop_height"}
2. Client sends {"type": "frame", "frame": <base64>} messages
3. Server answers each frame with "detection" or "no_detection"
4. Client sends {"type": "stop"} (or disconnects)

Malformed messages are answered with an "error" message; after init the
session stays open. Each session owns a private Reader, released when the
session ends.

==============================================================================
"""

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from barcode_reader.config import get_settings
from barcode_reader.core.exceptions import ReaderException, invalid_format, invalid_message
from barcode_reader.formats import FormatSet
from barcode_reader.scanner import Reader
from barcode_reader.services import load_base64_image


# Module logger
logger = logging.getLogger(__name__)

router = APIRouter()


def _crop_value(data: dict, key: str) -> int:
    """
    Read an optional crop dimension from a message.

    Raises:
        InvalidMessageError: If the value is not a whole number
    """
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise invalid_message(f"{key} must be a number, got {value!r}")
    try:
        return int(value)
    except (ValueError, OverflowError) as e:
        raise invalid_message(f"{key} must be finite, got {value!r}") from e


class ScannerWebSocketHandler:
    """
    Handler for one streaming scan session.

    Manages the lifecycle of a scanning session including:
    - Reader creation from the init message
    - Frame decoding
    - Reader release on stop, disconnect or error
    """

    def __init__(self, websocket: WebSocket):
        self._websocket = websocket
        self._settings = get_settings()
        self._reader: Optional[Reader] = None
        self._crop_width = 0
        self._crop_height = 0

    async def send_error(self, message: str, code: str = "ERROR") -> None:
        """Send error message to client."""
        await self._websocket.send_json({
            "type": "error",
            "code": code,
            "message": message
        })

    async def receive_message(self) -> Optional[dict]:
        """
        Receive one JSON object from the client.

        Returns:
            The message, or None after reporting a malformed one
        """
        text = await self._websocket.receive_text()

        try:
            data: Any = json.loads(text)
        except ValueError:
            exc = invalid_message("not valid JSON")
            await self.send_error(exc.message, exc.code)
            return None

        if not isinstance(data, dict):
            exc = invalid_message(f"expected a JSON object, got {type(data).__name__}")
            await self.send_error(exc.message, exc.code)
            return None

        return data

    async def handle_init(self, data: dict) -> bool:
        """Create the session reader from the init message."""
        if data.get("type") != "init":
            await self.send_error("First message must be init", "INIT_REQUIRED")
            return False

        try:
            formats = FormatSet.coerce(data.get("formats") or ())
        except (TypeError, ValueError) as e:
            exc = invalid_format(str(e))
            await self.send_error(exc.message, exc.code)
            return False

        try:
            self._crop_width = _crop_value(data, "crop_width")
            self._crop_height = _crop_value(data, "crop_height")
        except ReaderException as e:
            await self.send_error(e.message, e.code)
            return False

        engine_factory = getattr(self._websocket.app.state, "engine_factory", None)

        try:
            self._reader = Reader(formats, engine_factory)
        except ReaderException as e:
            await self.send_error(e.message, e.code)
            return False

        logger.info(f"Scan session started: formats=[{formats or 'all'}]")

        await self._websocket.send_json({
            "type": "init",
            "backend": self._reader.backend,
            "formats": formats.names(),
            "crop_width": self._crop_width,
            "crop_height": self._crop_height
        })

        return True

    async def handle_frame(self, data: dict, frame_count: int) -> None:
        """Decode one frame and report the outcome."""
        try:
            image = load_base64_image(data.get("frame", ""), self._settings.max_image_bytes)
        except ReaderException as e:
            await self.send_error(e.message, e.code)
            return

        region = self._reader.scan_region(image, self._crop_width, self._crop_height)
        result = self._reader.decode(image, self._crop_width, self._crop_height)

        if result is None:
            await self._websocket.send_json({
                "type": "no_detection",
                "frame_id": frame_count
            })
            return

        await self._websocket.send_json({
            "type": "detection",
            "frame_id": frame_count,
            "format": result.format.name,
            "text": result.text,
            "region": region.model_dump()
        })

    async def run(self) -> None:
        """Main handler loop."""
        await self._websocket.accept()
        logger.info("📱 Scanner WebSocket connected")

        try:
            init_data = await self.receive_message()
            if init_data is None or not await self.handle_init(init_data):
                await self._websocket.close()
                return

            frame_count = 0

            while True:
                data = await self.receive_message()
                if data is None:
                    continue

                message_type = data.get("type")

                if message_type == "frame":
                    frame_count += 1
                    await self.handle_frame(data, frame_count)

                elif message_type == "stop":
                    logger.info("🛑 Client requested stop")
                    await self._websocket.close()
                    break

                else:
                    exc = invalid_message(f"unknown message type {message_type!r}")
                    await self.send_error(exc.message, exc.code)

        except WebSocketDisconnect:
            logger.info("📱 Client disconnected")
        except Exception as e:
            logger.error(f"WebSocket error: {e}")
            await self.send_error(str(e))
            raise
        finally:
            if self._reader is not None:
                self._reader.release()
            logger.info("✅ Scanner WebSocket closed")


@router.websocket("/ws/scan")
async def websocket_scan(websocket: WebSocket):
    """Streaming barcode decoding via WebSocket."""
    handler = ScannerWebSocketHandler(websocket)
    await handler.run()
