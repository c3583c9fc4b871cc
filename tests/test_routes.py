import time
from contextlib import asynccontextmanager
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from nmea_gps.config import Settings
from nmea_gps.gps_reader import ReaderState
from nmea_gps.routes.navigation import router as navigation_router
from nmea_gps.routes.status import router as status_router
from nmea_gps.sentence_parser import SentenceParser

RMC = "$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A"
GSA = "$GPGSA,A,3,04,05,,09,12,,,24,,,,,2.5,1.3,2.1*39"


def _make_app(parser: SentenceParser, *, reader=None) -> FastAPI:
    """Build a test app with no real lifespan (no serial reader task)."""

    @asynccontextmanager
    async def _noop_lifespan(app: FastAPI):
        app.state.config = Settings()
        app.state.parser = parser
        app.state.gps_reader = reader
        app.state.start_time = time.monotonic()
        yield

    test_app = FastAPI(lifespan=_noop_lifespan)
    test_app.include_router(navigation_router)
    test_app.include_router(status_router)
    return test_app


@pytest.fixture()
def client():
    parser = SentenceParser()
    with TestClient(_make_app(parser), raise_server_exceptions=False) as tc:
        yield tc, parser


class TestNavigation:
    def test_defaults(self, client):
        tc, _ = client
        resp = tc.get("/navigation")
        assert resp.status_code == 200
        data = resp.json()
        assert data["valid"] is False
        assert data["latitude"] == 0
        assert data["utc_time"] == ""
        assert data["satellites_in_view"] == 0
        assert data["sentences_received"] == 0

    def test_reflects_parser(self, client):
        tc, parser = client
        parser.parse_sentence(RMC)
        data = tc.get("/navigation").json()
        assert data["valid"] is True
        assert abs(data["latitude"] - 48.1173) < 0.001
        assert abs(data["longitude"] - 11.5167) < 0.001
        assert data["utc_date"] == "230394"
        assert data["last_sentence"] == RMC


class TestPostSentences:
    def test_applies_in_order(self, client):
        tc, parser = client
        resp = tc.post("/sentences", json={"lines": [RMC, GSA, "$GPXYZ,1"]})
        assert resp.status_code == 200
        data = resp.json()
        assert data["valid"] is True
        assert data["fix_type"] == 3
        assert abs(data["hdop"] - 1.3) < 0.001
        assert data["last_sentence"] == "$GPXYZ,1"
        assert data["sentences_applied"] == 2
        assert data["sentences_ignored"] == 1
        assert parser.gsa_pdop() == pytest.approx(2.5)

    def test_short_sentence_counted(self, client):
        tc, _ = client
        data = tc.post("/sentences", json={"lines": ["$GPGSA,A,3"]}).json()
        assert data["fix_type"] == 0
        assert data["sentences_discarded"] == 1

    def test_invalid_body(self, client):
        tc, _ = client
        resp = tc.post("/sentences", json={"line": RMC})
        assert resp.status_code == 422


class TestHealth:
    def test_no_data(self, client):
        tc, _ = client
        data = tc.get("/health").json()
        assert data["status"] == "no_data"
        assert data["last_sentence_age_s"] is None
        assert data["reader_enabled"] is False
        assert data["serial_connected"] is False

    def test_ok_after_sentence(self, client):
        tc, parser = client
        parser.parse_sentence(RMC)
        data = tc.get("/health").json()
        assert data["status"] == "ok"
        assert data["last_sentence_age_s"] < 1.0

    def test_stale(self, client):
        tc, parser = client
        parser.parse_sentence(RMC)
        parser.stats.last_sentence_time = time.monotonic() - 60
        assert tc.get("/health").json()["status"] == "stale"

    def test_with_reader(self):
        reader = MagicMock()
        reader.state = ReaderState(serial_connected=True)
        app = _make_app(SentenceParser(), reader=reader)
        with TestClient(app, raise_server_exceptions=False) as tc:
            data = tc.get("/health").json()
            assert data["reader_enabled"] is True
            assert data["serial_connected"] is True
            assert data["last_line_age_s"] is None

    def test_reader_line_age(self):
        reader = MagicMock()
        reader.state = ReaderState(
            serial_connected=True, last_line_time=time.monotonic() - 30,
        )
        app = _make_app(SentenceParser(), reader=reader)
        with TestClient(app, raise_server_exceptions=False) as tc:
            data = tc.get("/health").json()
            assert 29.0 <= data["last_line_age_s"] <= 31.0
            assert data["status"] == "no_data"


class TestApp:
    def test_lifespan_without_reader(self, monkeypatch):
        monkeypatch.delenv("NMEA_GPS_SERIAL_PORT", raising=False)
        from nmea_gps.main import app

        with TestClient(app) as tc:
            data = tc.post("/sentences", json={"lines": [RMC]}).json()
            assert data["valid"] is True

            health = tc.get("/health").json()
            assert health["status"] == "ok"
            assert health["reader_enabled"] is False
