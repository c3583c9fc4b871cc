import asyncio
import logging
import time
from dataclasses import dataclass

import serial

from nmea_gps.config import Settings
from nmea_gps.sentence_parser import SentenceParser

logger = logging.getLogger(__name__)


@dataclass
class ReaderState:
    serial_connected: bool = False
    lines_received: int = 0
    last_line_time: float = 0.0


class GPSReader:
    """Reads NMEA lines from a serial GPS and feeds them to a SentenceParser."""

    def __init__(self, config: Settings, parser: SentenceParser) -> None:
        self.config = config
        self.parser = parser
        self.state = ReaderState()
        self._task: asyncio.Task | None = None

    # ── Lifecycle ──────────────────────────────────────────

    async def start(self) -> None:
        self._task = asyncio.create_task(self._read_loop(), name="gps-reader")
        logger.info(
            "GPSReader started — port=%s baud=%s",
            self.config.serial_port,
            self.config.serial_baud,
        )

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
        self.state.serial_connected = False
        logger.info("GPSReader stopped")

    # ── Main loop ─────────────────────────────────────────

    async def _read_loop(self) -> None:
        backoff = 1.0

        while True:
            try:
                ser = serial.Serial(
                    self.config.serial_port,
                    self.config.serial_baud,
                    timeout=2.0,
                )
                self.state.serial_connected = True
                backoff = 1.0
                logger.info("Serial port %s opened", self.config.serial_port)

                try:
                    while True:
                        raw = await asyncio.to_thread(ser.readline)
                        if raw:
                            self._handle_line(raw)
                finally:
                    ser.close()

            except serial.SerialException as exc:
                self.state.serial_connected = False
                logger.warning(
                    "Serial error on %s: %s. Reconnecting in %.0fs…",
                    self.config.serial_port,
                    exc,
                    backoff,
                )
            except asyncio.CancelledError:
                self.state.serial_connected = False
                return
            except Exception as exc:
                self.state.serial_connected = False
                logger.error("Unexpected GPS error: %s", exc)

            try:
                await asyncio.sleep(backoff)
            except asyncio.CancelledError:
                return
            backoff = min(backoff * 2, 10.0)

    # ── Line handling ─────────────────────────────────────

    def _handle_line(self, raw: bytes) -> None:
        line = raw.decode("ascii", errors="replace")
        self.state.lines_received += 1
        self.state.last_line_time = time.monotonic()
        self.parser.parse_sentence(line)
