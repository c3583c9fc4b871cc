from dataclasses import dataclass


@dataclass
class NavigationState:
    last_sentence: str = ""

    # From RMC / GGA
    latitude: float = 0.0
    longitude: float = 0.0
    time_utc: str = ""
    valid: bool = False

    # From RMC
    date_utc: str = ""

    # From RMC / VTG
    speed_knots: float = 0.0
    course_deg: float = 0.0

    # From GSA (fix_type: 1 = none, 2 = 2D, 3 = 3D)
    fix_type: int = 0
    pdop: float = 0.0
    hdop: float = 0.0
    vdop: float = 0.0

    # From GSV
    sats_in_view: int = 0


@dataclass
class ParserStats:
    sentences_received: int = 0
    sentences_applied: int = 0
    sentences_discarded: int = 0
    sentences_ignored: int = 0

    # Monotonic; 0.0 until the first non-empty line
    last_sentence_time: float = 0.0
