"""
Replay a recorded NMEA log through the sentence parser.

    nmea-replay track.nmea
    nmea-replay track.nmea --json
    cat track.nmea | nmea-replay -
"""

import argparse
import sys
from collections.abc import Iterable

from nmea_gps.models import NavigationResponse
from nmea_gps.sentence_parser import SentenceParser


def replay(lines: Iterable[str], parser: SentenceParser | None = None) -> SentenceParser:
    parser = parser or SentenceParser()
    for line in lines:
        parser.parse_sentence(line)
    return parser


def print_summary(parser: SentenceParser) -> None:
    s = parser.snapshot()
    stats = parser.stats

    print("=== Navigation ===")
    print(f"  Valid:      {s.valid}")
    print(f"  Position:   {s.latitude:.6f}, {s.longitude:.6f}")
    print(f"  UTC:        {s.date_utc or '-'} {s.time_utc or '-'}")
    print(f"  Speed:      {s.speed_knots} kn")
    print(f"  Course:     {s.course_deg}°")
    print(f"  Fix type:   {s.fix_type}")
    print(f"  DOP:        P={s.pdop} H={s.hdop} V={s.vdop}")
    print(f"  Satellites: {s.sats_in_view}")

    print("\n=== Sentences ===")
    print(f"  Received:   {stats.sentences_received}")
    print(f"  Applied:    {stats.sentences_applied}")
    print(f"  Discarded:  {stats.sentences_discarded}")
    print(f"  Ignored:    {stats.sentences_ignored}")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Replay an NMEA 0183 log")
    ap.add_argument(
        "path", type=argparse.FileType("r", encoding="ascii", errors="replace"),
        help="NMEA text file, one sentence per line ('-' for stdin)",
    )
    ap.add_argument(
        "--json", action="store_true",
        help="Print the final snapshot as JSON",
    )
    args = ap.parse_args(argv)

    with args.path as fh:
        parser = replay(fh)

    if args.json:
        print(NavigationResponse.from_state(parser.snapshot(), parser.stats).model_dump_json(indent=2))
    else:
        print_summary(parser)
    return 0


if __name__ == "__main__":
    sys.exit(main())
