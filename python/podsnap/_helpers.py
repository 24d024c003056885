# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Parsing and formatting utilities for timestamps, durations and sizes."""

from __future__ import annotations

import datetime
import re

_KIB = 1024

_US_PER_SECOND = 1_000_000
_US_PER_MINUTE = 60 * _US_PER_SECOND
_US_PER_HOUR = 60 * _US_PER_MINUTE


def format_bytes(n: int) -> str:
    """Format a byte count as a human-readable string (e.g. ``42.1 MB``)."""
    if n < 0:
        return "0 B"
    value = float(n)
    units = ("B", "KB", "MB", "GB")
    for unit in units:
        if value < _KIB:
            if unit == "B":
                return f"{int(value)} B"
            return f"{value:.1f} {unit}"
        value /= _KIB
    # Anything above GB is expressed in TB
    return f"{value:.1f} TB"


def parse_iso_timestamp(s: str) -> datetime.datetime:
    """Parse an ISO 8601 timestamp to an aware datetime.

    Handles both ``Z`` suffix and ``+00:00`` offset, truncates
    sub-microsecond precision, and treats naive values as UTC.
    """
    s = s.strip().replace("Z", "+00:00")
    # Truncate nanosecond precision; datetime holds microseconds
    s = re.sub(r"(\.\d{6})\d+", r"\1", s)
    dt = datetime.datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt


def format_rfc3339(dt: datetime.datetime) -> str:
    """Format *dt* as RFC 3339 with second precision (``Z`` for UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    text = dt.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def _trim_fraction(whole: int, frac: int, digits: int) -> str:
    """Render ``whole.frac`` with trailing zeros of the fraction removed."""
    if frac == 0:
        return str(whole)
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(td: datetime.timedelta) -> str:
    """Format *td* the way Go prints a ``time.Duration`` (``1h2m3.5s``).

    Precision stops at microseconds, the resolution of ``timedelta``.
    """
    total_us = (td.days * 86400 + td.seconds) * _US_PER_SECOND + td.microseconds
    if total_us == 0:
        return "0s"
    sign = "-" if total_us < 0 else ""
    us = abs(total_us)

    if us < 1000:
        return f"{sign}{us}µs"
    if us < _US_PER_SECOND:
        return f"{sign}{_trim_fraction(us // 1000, us % 1000, 3)}ms"

    hours, rem = divmod(us, _US_PER_HOUR)
    minutes, rem = divmod(rem, _US_PER_MINUTE)
    seconds, micros = divmod(rem, _US_PER_SECOND)
    secs = f"{_trim_fraction(seconds, micros, 6)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}"
    if minutes:
        return f"{sign}{minutes}m{secs}"
    return f"{sign}{secs}"
