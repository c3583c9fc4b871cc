import time

from fastapi import APIRouter, Request

from nmea_gps.models import HealthResponse

router = APIRouter(tags=["status"])


@router.get("/health", response_model=HealthResponse)
async def get_health(request: Request) -> HealthResponse:
    parser = request.app.state.parser
    config = request.app.state.config
    reader = getattr(request.app.state, "gps_reader", None)
    now = time.monotonic()

    last = parser.stats.last_sentence_time
    if last == 0.0:
        age = None
        status = "no_data"
    else:
        age = round(now - last, 1)
        status = "stale" if now - last > config.stale_after_s else "ok"

    line_age = None
    if reader and reader.state.last_line_time:
        line_age = round(now - reader.state.last_line_time, 1)

    return HealthResponse(
        status=status,
        reader_enabled=reader is not None,
        serial_connected=reader.state.serial_connected if reader else False,
        last_line_age_s=line_age,
        last_sentence_age_s=age,
        uptime_s=round(now - request.app.state.start_time, 1),
    )
