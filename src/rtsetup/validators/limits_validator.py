from __future__ import annotations

from typing import Iterable

from ..schemas import LimitsScan


MEMLOCK_KEYWORD = "memlock"
RTPRIO_KEYWORD = "rtprio"
HARD_AND_SOFT = "-"


def _has_all(line: str, needles: Iterable[str]) -> bool:
    return all(n in line for n in needles)


def memlock_line_ok(line: str, group_marker: str, value: str = "unlimited") -> bool:
    return _has_all(line, (MEMLOCK_KEYWORD, value, group_marker, HARD_AND_SOFT))


def rtprio_line_ok(line: str, group_marker: str, value: str = "50") -> bool:
    return _has_all(line, (RTPRIO_KEYWORD, value, group_marker, HARD_AND_SOFT))


def scan_limits(
    lines: Iterable[str],
    group_marker: str,
    memlock: str = "unlimited",
    rtprio: str = "50",
) -> LimitsScan:
    """
    Check limits.conf style lines for the two grants the toolkit needs.

    Plain substring matching, no parsing of the limits format:
    - a line is accepted when every required token occurs anywhere in it
    - the "-" token stands in for the hard+soft limit type, so any hyphen
      in the line satisfies it
    - commented-out lines are not special-cased
    """
    scan = LimitsScan()
    for line in lines:
        if not scan.memlock_ok and memlock_line_ok(line, group_marker, memlock):
            scan.memlock_ok = True
        if not scan.rtprio_ok and rtprio_line_ok(line, group_marker, rtprio):
            scan.rtprio_ok = True
    return scan
