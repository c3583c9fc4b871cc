from pydantic import BaseModel, Field

from nmea_gps.nav_state import NavigationState, ParserStats


# ── Requests ───────────────────────────────────────────────


class SentenceBatchRequest(BaseModel):
    lines: list[str] = Field(
        ..., description="Raw NMEA sentences, applied in order",
    )


# ── Responses ──────────────────────────────────────────────


class NavigationResponse(BaseModel):
    latitude: float
    longitude: float
    utc_time: str
    utc_date: str
    speed_knots: float
    course_deg: float
    valid: bool
    fix_type: int
    pdop: float
    hdop: float
    vdop: float
    satellites_in_view: int
    last_sentence: str

    sentences_received: int
    sentences_applied: int
    sentences_discarded: int
    sentences_ignored: int

    @classmethod
    def from_state(cls, s: NavigationState, stats: ParserStats) -> "NavigationResponse":
        return cls(
            latitude=s.latitude,
            longitude=s.longitude,
            utc_time=s.time_utc,
            utc_date=s.date_utc,
            speed_knots=s.speed_knots,
            course_deg=s.course_deg,
            valid=s.valid,
            fix_type=s.fix_type,
            pdop=s.pdop,
            hdop=s.hdop,
            vdop=s.vdop,
            satellites_in_view=s.sats_in_view,
            last_sentence=s.last_sentence,
            sentences_received=stats.sentences_received,
            sentences_applied=stats.sentences_applied,
            sentences_discarded=stats.sentences_discarded,
            sentences_ignored=stats.sentences_ignored,
        )


class HealthResponse(BaseModel):
    status: str
    reader_enabled: bool
    serial_connected: bool
    last_sentence_age_s: float | None
    last_line_age_s: float | None
    uptime_s: float
