"""Timestamp rendering with ``yyyy-MM-dd'T'HH:mm:ss.SSSZ`` style date patterns.

Pattern letters repeat to select a width or form, text between single
quotes is copied literally (``''`` is a quote) and any other non-letter
character is copied as is. Supported letters:

    y  year (``yy`` gives two digits)       a  AM/PM marker
    M  month (``MMM`` short, ``MMMM`` long)  E  weekday (``EEEE`` long)
    d  day of month                          S  fraction of a second
    H  hour 0-23, h hour 1-12                Z  zone offset (``+0000``)
    m  minute, s second

Month and weekday names are English regardless of the process locale.
"""

from datetime import datetime, timedelta
from functools import lru_cache
from typing import Optional, Tuple

_MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_FIELDS = frozenset("yMdHhmsSaEZ")

Token = Tuple[Optional[str], object]


@lru_cache(maxsize=32)
def _tokenize(pattern: str) -> Tuple[Token, ...]:
    tokens = []
    i, n = 0, len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                tokens.append((None, "'"))
                i += 2
                continue
            literal = []
            end = i + 1
            while end < n:
                if pattern[end] == "'":
                    if end + 1 < n and pattern[end + 1] == "'":
                        literal.append("'")
                        end += 2
                        continue
                    break
                literal.append(pattern[end])
                end += 1
            else:
                raise ValueError(f"Unterminated quote in date format: {pattern!r}")
            tokens.append((None, "".join(literal)))
            i = end + 1
        elif ch.isascii() and ch.isalpha():
            if ch not in _FIELDS:
                raise ValueError(f"Unsupported date format letter {ch!r} in {pattern!r}")
            end = i
            while end < n and pattern[end] == ch:
                end += 1
            tokens.append((ch, end - i))
            i = end
        else:
            tokens.append((None, ch))
            i += 1
    return tuple(tokens)


def _offset(delta: Optional[timedelta], width: int) -> str:
    minutes = int((delta or timedelta(0)).total_seconds()) // 60
    if width == 5 and minutes == 0:
        return "Z"
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    if width == 4:
        return "GMT" if hours == minutes == 0 else f"GMT{sign}{hours:02d}:{minutes:02d}"
    if width == 5:
        return f"{sign}{hours:02d}:{minutes:02d}"
    return f"{sign}{hours:02d}{minutes:02d}"


def _field(moment: datetime, letter: str, width: int) -> str:
    if letter == "y":
        return f"{moment.year % 100:02d}" if width == 2 else f"{moment.year:0{width}d}"
    if letter == "M":
        if width == 3:
            return _MONTHS[moment.month - 1][:3]
        if width > 3:
            return _MONTHS[moment.month - 1]
        return f"{moment.month:0{width}d}"
    if letter == "d":
        return f"{moment.day:0{width}d}"
    if letter == "H":
        return f"{moment.hour:0{width}d}"
    if letter == "h":
        return f"{moment.hour % 12 or 12:0{width}d}"
    if letter == "m":
        return f"{moment.minute:0{width}d}"
    if letter == "s":
        return f"{moment.second:0{width}d}"
    if letter == "S":
        # truncated, not rounded
        return f"{moment.microsecond:06d}"[:width].ljust(width, "0")
    if letter == "a":
        return "AM" if moment.hour < 12 else "PM"
    if letter == "E":
        name = _WEEKDAYS[moment.weekday()]
        return name if width > 3 else name[:3]
    return _offset(moment.utcoffset(), width)


def validate_pattern(pattern: str) -> None:
    """Raise ``ValueError`` if ``pattern`` is not a usable date format."""
    _tokenize(pattern)


def render_timestamp(moment: datetime, pattern: str) -> str:
    """Render ``moment`` with a date pattern.

    Args:
        moment (datetime): Instant to render. Naive values are taken as local time.
        pattern (str): Date pattern, e.g. ``yyyy-MM-dd'T'HH:mm:ss.SSSZ``.

    Returns:
        str: The rendered timestamp.

    Raises:
        ValueError: If the pattern is malformed or uses an unsupported letter.
    """
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return "".join(
        str(value) if letter is None else _field(moment, letter, value)
        for letter, value in _tokenize(pattern)
    )


def local_now() -> datetime:
    """Current time, aware, in the local timezone."""
    return datetime.now().astimezone()


def current_timestamp(pattern: str) -> str:
    return render_timestamp(local_now(), pattern)
