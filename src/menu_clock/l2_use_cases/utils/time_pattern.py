"""Render datetimes with Unicode (CLDR) date pattern letters such as ``HH:mm`` or ``EEE h:mm a``.

Names are English regardless of process locale. Letters without a mapping
are emitted as-is; text inside single quotes is literal and ``''`` is a quote.

Long zone names are not available from zoneinfo: ``z``..``zzz`` render the zone
abbreviation (``PST``) and ``zzzz`` renders the IANA key (``America/Los_Angeles``)
rather than a CLDR long name such as "Pacific Standard Time".
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timedelta

_MONTHS = (
    'January',
    'February',
    'March',
    'April',
    'May',
    'June',
    'July',
    'August',
    'September',
    'October',
    'November',
    'December',
)
_WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')


def tokenize(pattern: str) -> Iterator[tuple[bool, str]]:
    """Yield ``(is_field, text)`` pairs. Fields are runs of one repeated ASCII letter."""
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                yield False, "'"
                i += 2
                continue
            end = i + 1
            buf: list[str] = []
            while end < n:
                if pattern[end] == "'":
                    if end + 1 < n and pattern[end + 1] == "'":
                        buf.append("'")
                        end += 2
                        continue
                    break
                buf.append(pattern[end])
                end += 1
            yield False, ''.join(buf)
            i = end + 1  # unterminated quote runs to the end
            continue
        if ch.isascii() and ch.isalpha():
            j = i
            while j < n and pattern[j] == ch:
                j += 1
            yield True, pattern[i:j]
            i = j
            continue
        yield False, ch
        i += 1


def _pad(value: int, width: int) -> str:
    return str(value).zfill(width)


def _offset(moment: datetime, *, colon: bool, with_minutes: bool = True, zulu: bool = False) -> str:
    offset = moment.utcoffset() or timedelta(0)
    total = int(offset.total_seconds()) // 60
    if zulu and total == 0:
        return 'Z'
    sign = '-' if total < 0 else '+'
    hours, minutes = divmod(abs(total), 60)
    if not with_minutes:
        return f'{sign}{hours:02d}'
    sep = ':' if colon else ''
    return f'{sign}{hours:02d}{sep}{minutes:02d}'


def _name(names: tuple[str, ...], index: int, count: int) -> str:
    full = names[index]
    if count == 4:
        return full
    if count >= 5:
        return full[0]
    return full[:3]


def _render(moment: datetime, letter: str, count: int) -> str | None:
    if letter == 'G':
        return 'Anno Domini' if count == 4 else 'AD'
    if letter in 'yu':
        return _pad(moment.year % 100, 2) if count == 2 else _pad(moment.year, count)
    if letter in 'ML':
        if count <= 2:
            return _pad(moment.month, count)
        return _name(_MONTHS, moment.month - 1, count)
    if letter == 'd':
        return _pad(moment.day, count)
    if letter == 'D':
        return _pad(moment.timetuple().tm_yday, count)
    if letter in 'Ec':
        return _name(_WEEKDAYS, moment.weekday(), max(count, 3))
    if letter == 'a':
        return 'AM' if moment.hour < 12 else 'PM'
    if letter == 'h':
        return _pad(moment.hour % 12 or 12, count)
    if letter == 'H':
        return _pad(moment.hour, count)
    if letter == 'k':
        return _pad(moment.hour or 24, count)
    if letter == 'K':
        return _pad(moment.hour % 12, count)
    if letter == 'm':
        return _pad(moment.minute, count)
    if letter == 's':
        return _pad(moment.second, count)
    if letter == 'S':
        return f'{moment.microsecond:06d}'[:count].ljust(count, '0')
    if letter == 'z':
        if count >= 4:
            key = getattr(moment.tzinfo, 'key', None)
            if key:
                return key
        return moment.tzname() or ''
    if letter == 'Z':
        if count == 4:
            return 'GMT' + _offset(moment, colon=True)
        return _offset(moment, colon=count >= 5, zulu=count >= 5)
    if letter in 'Xx':
        zulu = letter == 'X'
        if count == 1:
            return _offset(moment, colon=False, with_minutes=False, zulu=zulu)
        return _offset(moment, colon=count >= 3, zulu=zulu)
    return None


def format_time(moment: datetime, pattern: str) -> str:
    """Format *moment* (already in the target zone) according to *pattern*."""
    parts: list[str] = []
    for is_field, text in tokenize(pattern):
        if not is_field:
            parts.append(text)
            continue
        rendered = _render(moment, text[0], len(text))
        parts.append(text if rendered is None else rendered)
    return ''.join(parts)
