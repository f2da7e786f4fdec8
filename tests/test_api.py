"""
==============================================================================
API Integration Tests
==============================================================================

Tests for REST API and WebSocket endpoints.

==============================================================================
"""

import base64

import pytest
from fastapi.testclient import TestClient

from barcode_reader.core.exceptions import ResourceAllocationError
from barcode_reader.formats import BarcodeFormat
from barcode_reader.main import create_app
from barcode_reader.services import DecodeService

from tests.conftest import RecordingEngine


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test health check returns status."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["reader"] == "healthy"
        assert data["details"]["backend"] == "recording"
        assert data["details"]["formats"] == ["QR_CODE", "EAN_13"]

    def test_readiness_probe(self, client: TestClient):
        """Test readiness probe."""
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_liveness_probe(self, client: TestClient):
        """Test liveness probe."""
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True

    def test_health_without_startup(self, app):
        """Test health reports degraded before the reader is allocated."""
        client = TestClient(app)
        data = client.get("/api/v1/health").json()
        assert data["status"] == "degraded"
        assert data["components"]["reader"] == "not_started"


class TestLifespan:
    """Tests for shared reader allocation and release."""

    def test_shutdown_releases_reader(self, app):
        """Test the shared reader is released exactly once on shutdown."""
        with TestClient(app):
            engine = RecordingEngine.created[0]
            assert engine.destroy_count == 0

        assert engine.destroy_count == 1
        assert app.state.decode_service is None

    def test_startup_failure_propagates(self):
        """Test allocation errors abort startup."""
        def failing_service():
            return DecodeService(
                [BarcodeFormat.QR_CODE],
                engine_factory="no-such-engine",
            )

        app = create_app(service_factory=failing_service)

        with pytest.raises(ResourceAllocationError) as exc_info:
            with TestClient(app):
                pass

        assert exc_info.value.code == "RESOURCE_ALLOCATION_FAILED"


class TestFormatsEndpoint:
    """Tests for GET /formats."""

    def test_list_formats(self, client: TestClient):
        """Test enabled and available formats are listed."""
        response = client.get("/api/v1/formats")
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["backend"] == "recording"
        assert data["enabled"] == ["QR_CODE", "EAN_13"]
        assert len(data["available"]) == 17


class TestDecodeEndpoint:
    """Tests for POST /decode."""

    def test_decode_found(self, client: TestClient, png_base64: str, engine_match):
        """Test a detected barcode is returned with its region."""
        engine_match(BarcodeFormat.EAN_13, "4006381333931")

        response = client.post(
            "/api/v1/decode",
            json={"image": png_base64, "crop_width": 400, "crop_height": 400}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["found"] is True
        assert data["format"] == "EAN_13"
        assert data["text"] == "4006381333931"
        assert data["region"] == {"left": 120, "top": 40, "width": 400, "height": 400}

    def test_decode_not_found(self, client: TestClient, png_base64: str):
        """Test no barcode is a normal response."""
        response = client.post("/api/v1/decode", json={"image": png_base64})

        assert response.status_code == 200
        data = response.json()
        assert data["found"] is False
        assert data["format"] is None
        assert data["region"] == {"left": 0, "top": 0, "width": 640, "height": 480}

    def test_decode_data_url(self, client: TestClient, png_base64: str):
        """Test data URL prefixes are accepted."""
        response = client.post(
            "/api/v1/decode",
            json={"image": f"data:image/png;base64,{png_base64}"}
        )
        assert response.status_code == 200

    def test_decode_invalid_base64(self, client: TestClient):
        """Test malformed base64 returns INVALID_IMAGE."""
        response = client.post("/api/v1/decode", json={"image": "not base64!!"})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "INVALID_IMAGE"
        assert "timestamp" in data["error"]

    def test_decode_not_an_image(self, client: TestClient):
        """Test bytes that are not an image return INVALID_IMAGE."""
        payload = base64.b64encode(b"plain text, not a picture").decode("ascii")

        response = client.post("/api/v1/decode", json={"image": payload})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_IMAGE"

    def test_decode_missing_image(self, client: TestClient):
        """Test request validation."""
        response = client.post("/api/v1/decode", json={"crop_width": 10})
        assert response.status_code == 422

    def test_decode_after_shutdown(self, app, png_base64: str):
        """Test decoding without a started service returns 503."""
        client = TestClient(app)
        response = client.post("/api/v1/decode", json={"image": png_base64})

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"


class TestScannerWebSocket:
    """Tests for the /ws/scan streaming endpoint."""

    def test_scan_session(self, client: TestClient, png_base64: str, engine_match):
        """Test init, detection, no_detection and stop."""
        with client.websocket_connect("/ws/scan") as ws:
            ws.send_json({
                "type": "init",
                "formats": ["QR_CODE"],
                "crop_width": 200,
                "crop_height": 200
            })
            init = ws.receive_json()
            assert init["type"] == "init"
            assert init["backend"] == "recording"
            assert init["formats"] == ["QR_CODE"]

            ws.send_json({"type": "frame", "frame": png_base64})
            assert ws.receive_json() == {"type": "no_detection", "frame_id": 1}

            engine_match(BarcodeFormat.QR_CODE, "https://example.com")
            ws.send_json({"type": "frame", "frame": png_base64})
            detection = ws.receive_json()
            assert detection["type"] == "detection"
            assert detection["frame_id"] == 2
            assert detection["format"] == "QR_CODE"
            assert detection["text"] == "https://example.com"
            assert detection["region"] == {"left": 220, "top": 140, "width": 200, "height": 200}

            ws.send_json({"type": "stop"})

        # shared service reader plus the session reader
        session_engine = RecordingEngine.created[1]
        assert session_engine.formats.names() == ["QR_CODE"]
        assert session_engine.destroy_count == 1

    def test_init_required(self, client: TestClient):
        """Test the first message must be init."""
        with client.websocket_connect("/ws/scan") as ws:
            ws.send_json({"type": "frame", "frame": ""})
            message = ws.receive_json()
            assert message["type"] == "error"
            assert message["code"] == "INIT_REQUIRED"

    def test_init_unknown_format(self, client: TestClient):
        """Test unknown format names are rejected at init."""
        with client.websocket_connect("/ws/scan") as ws:
            ws.send_json({"type": "init", "formats": ["NOT_A_FORMAT"]})
            message = ws.receive_json()
            assert message["type"] == "error"
            assert message["code"] == "INVALID_FORMAT"

    def test_invalid_frame(self, client: TestClient):
        """Test a bad frame reports an error and keeps the session open."""
        with client.websocket_connect("/ws/scan") as ws:
            ws.send_json({"type": "init"})
            assert ws.receive_json()["type"] == "init"

            ws.send_json({"type": "frame", "frame": "%%%"})
            message = ws.receive_json()
            assert message["type"] == "error"
            assert message["code"] == "INVALID_IMAGE"

            ws.send_json({"type": "stop"})

    def test_non_string_frame(self, client: TestClient, png_base64: str):
        """Test a frame that is not a string is reported and the session continues."""
        with client.websocket_connect("/ws/scan") as ws:
            ws.send_json({"type": "init"})
            assert ws.receive_json()["type"] == "init"

            ws.send_json({"type": "frame", "frame": 123})
            message = ws.receive_json()
            assert message["type"] == "error"
            assert message["code"] == "INVALID_IMAGE"

            ws.send_json({"type": "frame", "frame": png_base64})
            assert ws.receive_json()["type"] == "no_detection"

            ws.send_json({"type": "stop"})

    @pytest.mark.parametrize("crop", ["wide", [400], {"w": 1}, True, float("inf")])
    def test_init_bad_crop(self, client: TestClient, crop):
        """Test non-numeric crop values are rejected at init."""
        with client.websocket_connect("/ws/scan") as ws:
            ws.send_json({"type": "init", "crop_width": crop})
            message = ws.receive_json()
            assert message["type"] == "error"
            assert message["code"] == "INVALID_MESSAGE"

        assert len(RecordingEngine.created) == 1

    def test_init_not_an_object(self, client: TestClient):
        """Test an init that is not a JSON object is rejected."""
        with client.websocket_connect("/ws/scan") as ws:
            ws.send_json(["init"])
            message = ws.receive_json()
            assert message["type"] == "error"
            assert message["code"] == "INVALID_MESSAGE"

    def test_malformed_messages_keep_session(self, client: TestClient, png_base64: str):
        """Test bad JSON, non-objects and unknown types are reported without ending the session."""
        with client.websocket_connect("/ws/scan") as ws:
            ws.send_json({"type": "init", "crop_width": 100.0})
            assert ws.receive_json()["crop_width"] == 100

            ws.send_text("{not json")
            assert ws.receive_json()["code"] == "INVALID_MESSAGE"

            ws.send_json([1, 2, 3])
            assert ws.receive_json()["code"] == "INVALID_MESSAGE"

            ws.send_json({"type": "pause"})
            assert ws.receive_json()["code"] == "INVALID_MESSAGE"

            ws.send_json({"type": "frame", "frame": png_base64})
            assert ws.receive_json() == {"type": "no_detection", "frame_id": 1}

            ws.send_json({"type": "stop"})

    def test_disconnect_releases_session_reader(self, client: TestClient):
        """Test the session reader is released when the client goes away."""
        with client.websocket_connect("/ws/scan") as ws:
            ws.send_json({"type": "init"})
            ws.receive_json()

        client.get("/api/v1/health/live")
        assert RecordingEngine.created[1].destroy_count == 1
