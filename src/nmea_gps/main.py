import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from nmea_gps.config import Settings
from nmea_gps.gps_reader import GPSReader
from nmea_gps.routes.navigation import router as navigation_router
from nmea_gps.routes.status import router as status_router
from nmea_gps.sentence_parser import SentenceParser


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = Settings()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
    )
    logger = logging.getLogger("nmea_gps")

    parser = SentenceParser()
    reader = GPSReader(config, parser) if config.reader_enabled else None

    app.state.config = config
    app.state.parser = parser
    app.state.gps_reader = reader
    app.state.start_time = time.monotonic()

    if reader:
        await reader.start()
    logger.info("NMEA GPS service ready — serial reader %s",
                "enabled" if reader else "disabled")

    yield

    if reader:
        await reader.stop()
    logger.info("NMEA GPS service stopped")


app = FastAPI(
    title="NMEA GPS",
    description="Decodes NMEA 0183 sentences into a navigation snapshot",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(navigation_router)
app.include_router(status_router)


def run() -> None:
    config = Settings()
    uvicorn.run(
        app,
        host=config.api_host,
        port=config.api_port,
        log_level=config.log_level.lower(),
    )
