"""Dispatch display-number allocation.

Numbers come from two snapshot reads: the configured start number (the
floor) and the display number of the most recently inserted dispatch. The
next number is ``max(last + 1, start)``, or ``start`` when no dispatch exists,
formatted as a zero-padded decimal string.

"Most recently inserted" means highest internal id, not highest numeric
value: a ticket renumbered by an administrator still drives the next
allocation if it is the newest row.
"""
import logging
import re

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import DISPATCH_START_NUMBER_KEY, ConfigEntry, Dispatch

logger = logging.getLogger(__name__)

NUMBER_WIDTH = 7
DEFAULT_START_NUMBER = 1

_LEADING_DIGITS = re.compile(r"^\s*\+?(\d+)")


def format_dispatch_number(number: int) -> str:
    # Wider numbers are kept as-is, never truncated.
    return f"{number:0{NUMBER_WIDTH}d}"


def parse_dispatch_number(display_number: str | None) -> int:
    """Numeric value of a display number; 0 when it has no leading digits."""
    if not display_number:
        return 0
    match = _LEADING_DIGITS.match(display_number)
    return int(match.group(1)) if match else 0


def parse_start_number(raw_value) -> int | None:
    try:
        value = int(str(raw_value).strip())
    except (TypeError, ValueError):
        return None
    return value if value >= 1 else None


def next_dispatch_number(start_number: int, last_issued: int | None) -> int:
    if last_issued is None:
        return start_number
    return max(last_issued + 1, start_number)


def get_start_number(db: Session, for_update: bool = False) -> int:
    """Configured floor, falling back to 1 when unset, invalid or unreadable."""
    stmt = select(ConfigEntry.value).where(ConfigEntry.key == DISPATCH_START_NUMBER_KEY)
    if for_update:
        stmt = stmt.with_for_update()
    try:
        # A failed read rolls back only this savepoint.
        with db.begin_nested():
            raw_value = db.execute(stmt).scalar_one_or_none()
    except SQLAlchemyError:
        logger.warning(
            "Could not read %s, using %s", DISPATCH_START_NUMBER_KEY, DEFAULT_START_NUMBER,
            exc_info=True,
        )
        return DEFAULT_START_NUMBER
    if raw_value is None:
        return DEFAULT_START_NUMBER
    start_number = parse_start_number(raw_value)
    if start_number is None:
        logger.warning(
            "Invalid %s value %r, using %s",
            DISPATCH_START_NUMBER_KEY,
            raw_value,
            DEFAULT_START_NUMBER,
        )
        return DEFAULT_START_NUMBER
    return start_number


def last_issued_number(db: Session) -> int | None:
    """Number of the newest dispatch by insertion order, or None when empty.

    Read errors propagate: a dispatch must never be created without a number.
    """
    last_display = db.execute(
        select(Dispatch.despacho_no).order_by(Dispatch.id.desc()).limit(1)
    ).scalar_one_or_none()
    if last_display is None:
        return None
    return parse_dispatch_number(last_display)


def allocate_dispatch_number(db: Session) -> str:
    start_number = get_start_number(db, for_update=True)
    last_issued = last_issued_number(db)
    number = next_dispatch_number(start_number, last_issued)
    display_number = format_dispatch_number(number)
    logger.info(
        "Allocated dispatch number %s (start=%s, last=%s)",
        display_number,
        start_number,
        last_issued if last_issued is not None else "none",
    )
    return display_number
