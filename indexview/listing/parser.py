"""Parse pre-formatted autoindex markup into ``Entry`` records.

Parsing is tolerant: lines that do not look like a listing row are dropped,
and size/date tokens that cannot be decoded fall back to sentinels.
"""

from __future__ import annotations

import calendar
import html
import logging
import re
from datetime import datetime

from dateutil import parser as dateutil_parser

from .types import UNKNOWN_SIZE, UNKNOWN_TIMESTAMP, DateInfo, Entry, SizeInfo

logger = logging.getLogger(__name__)

PARENT_TOKEN = "../"

# link, then a two-word date token, then a size token
_ROW_RE = re.compile(r'<a\s+href="([^"]+)"[^>]*>([^<]+)</a>\s+(\S+\s+\S+)\s+(\S+)', re.IGNORECASE)
_PARENT_RE = re.compile(r'<a\s+href="(\.\./)"[^>]*>([^<]*)</a>', re.IGNORECASE)
_PRE_RE = re.compile(r"<pre[^>]*>(.*?)</pre>", re.IGNORECASE | re.DOTALL)
_SIZE_RE = re.compile(r"^([\d.]+)\s*([KMGT]?)$", re.IGNORECASE)

SIZE_MULTIPLIERS = {
    "": 1,
    "K": 1024,
    "M": 1024**2,
    "G": 1024**3,
    "T": 1024**4,
}

DATE_FORMATS = (
    "%d-%b-%Y %H:%M",
    "%d-%b-%Y %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
)


def parse_size_to_bytes(raw: str) -> int:
    """Decode ``512``, ``1.2K``, ``3.5M``... into bytes (truncated toward zero).

    Returns ``UNKNOWN_SIZE`` for ``-``, blanks, and anything unparseable.
    """
    token = (raw or "").strip()
    if not token or token == "-":
        return UNKNOWN_SIZE
    match = _SIZE_RE.match(token)
    if match is None:
        return UNKNOWN_SIZE
    try:
        number = float(match.group(1))
    except ValueError:
        return UNKNOWN_SIZE
    return int(number * SIZE_MULTIPLIERS[match.group(2).upper()])


def _epoch_millis(moment: datetime) -> int:
    # offset arithmetic instead of astimezone(), which overflows near year 1 / 9999
    millis = calendar.timegm(moment.timetuple()) * 1000 + moment.microsecond // 1000
    offset = moment.utcoffset()
    if offset is not None:
        millis -= int(offset.total_seconds() * 1000)
    return millis


def parse_date_to_timestamp(raw: str) -> int:
    """Decode a listing date into epoch milliseconds.

    Known server formats are tried first, then ISO-8601, then a tolerant
    ``dateutil`` parse for locale-formatted strings. Naive values are read as
    UTC. Failures return ``UNKNOWN_TIMESTAMP``.
    """
    token = (raw or "").strip()
    if not token or token == "-":
        return UNKNOWN_TIMESTAMP

    for fmt in DATE_FORMATS:
        try:
            return _epoch_millis(datetime.strptime(token, fmt))
        except (ValueError, OverflowError):
            continue
    try:
        return _epoch_millis(datetime.fromisoformat(token))
    except (ValueError, OverflowError):
        pass
    try:
        return _epoch_millis(dateutil_parser.parse(token))
    except (ValueError, OverflowError):
        return UNKNOWN_TIMESTAMP


def extract_pre_block(document: str) -> str:
    """Return the body of the first ``<pre>`` element, or ``document`` itself."""
    match = _PRE_RE.search(document)
    return match.group(1) if match is not None else document


def parse_line(line: str) -> Entry | None:
    """Parse one listing line; ``None`` when it is not a listing row."""
    match = _ROW_RE.search(line)
    if match is not None:
        href, raw_name, raw_date, raw_size = match.groups()
    else:
        # nginx emits the parent link alone, without date or size columns
        parent_match = _PARENT_RE.search(line)
        if parent_match is None:
            return None
        href, raw_name = parent_match.groups()
        raw_date, raw_size = "-", "-"

    name = html.unescape(raw_name)
    is_dir = href.endswith("/")
    is_parent = name == PARENT_TOKEN or href == PARENT_TOKEN
    if is_dir and name.endswith("/"):
        name = name[:-1]

    if is_dir:
        size = SizeInfo(raw="-", bytes=UNKNOWN_SIZE)
    else:
        size_token = raw_size.strip()
        size = SizeInfo(raw=size_token, bytes=parse_size_to_bytes(size_token))

    return Entry(
        href=href,
        name=name,
        is_dir=is_dir,
        is_parent=is_parent,
        size=size,
        date=DateInfo(raw=raw_date, timestamp=parse_date_to_timestamp(raw_date)),
    )


def parse_listing(markup: str) -> list[Entry]:
    """Parse listing markup into entries in document order.

    Accepts either a whole HTML page or the ``<pre>`` body alone. Duplicate
    hrefs and extra parent links after the first are dropped.
    """
    entries: list[Entry] = []
    seen_hrefs: set[str] = set()
    has_parent = False
    dropped = 0

    for line in extract_pre_block(markup or "").splitlines():
        entry = parse_line(line)
        if entry is None:
            if line.strip():
                dropped += 1
            continue
        if entry.href in seen_hrefs or (entry.is_parent and has_parent):
            dropped += 1
            continue
        seen_hrefs.add(entry.href)
        has_parent = has_parent or entry.is_parent
        entries.append(entry)

    if dropped:
        logger.debug("dropped %d non-listing line(s)", dropped)
    return entries


__all__ = [
    "PARENT_TOKEN",
    "SIZE_MULTIPLIERS",
    "DATE_FORMATS",
    "parse_size_to_bytes",
    "parse_date_to_timestamp",
    "extract_pre_block",
    "parse_line",
    "parse_listing",
]
