import dataclasses
import enum
import logging
import time

from nmea_gps.fields import convert_coordinate, safe_float, safe_int, strip_checksum
from nmea_gps.nav_state import NavigationState, ParserStats

logger = logging.getLogger(__name__)


class SentenceKind(enum.Enum):
    RMC = "RMC"
    GGA = "GGA"
    GSA = "GSA"
    GSV = "GSV"
    VTG = "VTG"


SENTENCE_PREFIXES: dict[str, SentenceKind] = {
    f"${talker}{kind.value}": kind
    for talker in ("GP", "GN")
    for kind in SentenceKind
}

# Comma-delimited fields a sentence must have before any of it is applied
MIN_FIELDS: dict[SentenceKind, int] = {
    SentenceKind.RMC: 10,
    SentenceKind.GGA: 7,
    SentenceKind.GSA: 17,
    SentenceKind.GSV: 4,
    SentenceKind.VTG: 9,
}


def sanitize_line(line: str) -> str:
    """Remove any trailing run of CR/LF characters."""
    return line.rstrip("\r\n")


def classify(line: str) -> SentenceKind | None:
    """Map the 6-character talker+type prefix to a sentence kind."""
    return SENTENCE_PREFIXES.get(line[:6])


class SentenceParser:
    """Decodes NMEA 0183 sentences into a running navigation snapshot.

    Malformed or unknown sentences are dropped silently; fields a sentence
    does not carry keep their previous values. Calls must be serialised by
    the caller (one line at a time).
    """

    def __init__(self) -> None:
        self.state = NavigationState()
        self.stats = ParserStats()
        self._extractors = {
            SentenceKind.RMC: self._apply_rmc,
            SentenceKind.GGA: self._apply_gga,
            SentenceKind.GSA: self._apply_gsa,
            SentenceKind.GSV: self._apply_gsv,
            SentenceKind.VTG: self._apply_vtg,
        }

    # ── Parsing ───────────────────────────────────────────

    def parse_sentence(self, line: str | None) -> None:
        if not line:
            return

        line = sanitize_line(line)
        self.state.last_sentence = line
        self.stats.sentences_received += 1
        self.stats.last_sentence_time = time.monotonic()

        kind = classify(line)
        if kind is None:
            self.stats.sentences_ignored += 1
            logger.debug("Ignoring unrecognised sentence: %.20s", line)
            return

        fields = line.split(",")
        if len(fields) < MIN_FIELDS[kind]:
            self.stats.sentences_discarded += 1
            logger.debug(
                "Discarding short %s sentence (%d fields, need %d)",
                kind.value,
                len(fields),
                MIN_FIELDS[kind],
            )
            return

        self._extractors[kind](fields)
        self.stats.sentences_applied += 1

    # $--RMC,hhmmss.ss,A,llll.ll,a,yyyyy.yy,a,speed,course,ddmmyy,...
    def _apply_rmc(self, p: list[str]) -> None:
        s = self.state
        s.time_utc = p[1]
        s.valid = p[2] == "A"
        s.latitude = convert_coordinate(p[3], p[4])
        s.longitude = convert_coordinate(p[5], p[6])
        s.speed_knots = safe_float(p[7])
        s.course_deg = safe_float(p[8])
        s.date_utc = p[9]

    # $--GGA,hhmmss.ss,llll.ll,a,yyyyy.yy,a,quality,...
    def _apply_gga(self, p: list[str]) -> None:
        s = self.state
        s.time_utc = p[1]
        s.latitude = convert_coordinate(p[2], p[3])
        s.longitude = convert_coordinate(p[4], p[5])
        quality = safe_int(p[6])
        s.valid = quality > 0

    # $--GSA,mode,fix,sv1..sv12,PDOP,HDOP,VDOP*hh
    def _apply_gsa(self, p: list[str]) -> None:
        s = self.state
        s.fix_type = safe_int(p[2])
        s.pdop = safe_float(strip_checksum(p[15]))
        s.hdop = safe_float(strip_checksum(p[16]))
        if len(p) > 17:
            s.vdop = safe_float(strip_checksum(p[17]))

    # $--GSV,total,msg,in_view,...
    def _apply_gsv(self, p: list[str]) -> None:
        self.state.sats_in_view = safe_int(p[3])

    # $--VTG,course,T,,M,knots,N,kmh,K*hh
    def _apply_vtg(self, p: list[str]) -> None:
        self.state.course_deg = safe_float(p[1])
        self.state.speed_knots = safe_float(p[5])

    # ── Accessors ─────────────────────────────────────────

    def snapshot(self) -> NavigationState:
        return dataclasses.replace(self.state)

    def latitude(self) -> float:
        return self.state.latitude

    def longitude(self) -> float:
        return self.state.longitude

    def utc_time(self) -> str:
        return self.state.time_utc

    def utc_date(self) -> str:
        return self.state.date_utc

    def speed_knots(self) -> float:
        return self.state.speed_knots

    def course_deg(self) -> float:
        return self.state.course_deg

    def is_valid(self) -> bool:
        return self.state.valid

    def gsa_fix_type(self) -> int:
        return self.state.fix_type

    def gsa_pdop(self) -> float:
        return self.state.pdop

    def gsa_hdop(self) -> float:
        return self.state.hdop

    def gsa_vdop(self) -> float:
        return self.state.vdop

    def satellites_in_view(self) -> int:
        return self.state.sats_in_view

    def last_raw_sentence(self) -> str:
        return self.state.last_sentence
