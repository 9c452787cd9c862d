from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import DISPATCH_START_NUMBER_KEY, ConfigEntry
from .numbering import parse_start_number

DEFAULTS = {
    DISPATCH_START_NUMBER_KEY: ("1", "Starting number for the dispatch sequence"),
}


class InvalidConfigValue(ValueError):
    pass


def get_entry(db: Session, key: str) -> ConfigEntry | None:
    return db.execute(select(ConfigEntry).where(ConfigEntry.key == key)).scalar_one_or_none()


def list_entries(db: Session) -> list[ConfigEntry]:
    return list(db.scalars(select(ConfigEntry).order_by(ConfigEntry.key)))


def normalise_value(key: str, raw_value) -> str:
    value = str(raw_value).strip() if raw_value is not None else ""
    if not value:
        raise InvalidConfigValue("Value is required")
    if key == DISPATCH_START_NUMBER_KEY:
        start_number = parse_start_number(value)
        if start_number is None:
            raise InvalidConfigValue("Start number must be a whole number of at least 1")
        return str(start_number)
    return value


def set_value(db: Session, entry: ConfigEntry, raw_value) -> ConfigEntry:
    entry.value = normalise_value(entry.key, raw_value)
    db.flush()
    return entry


def ensure_defaults(db: Session) -> int:
    created = 0
    for key, (value, description) in DEFAULTS.items():
        if get_entry(db, key) is None:
            db.add(ConfigEntry(key=key, value=value, description=description))
            created += 1
    if created:
        db.flush()
    return created
