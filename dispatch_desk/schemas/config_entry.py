from datetime import datetime

from .base import CamelModel


class ConfigRead(CamelModel):
    id: int
    key: str
    value: str
    description: str | None
    updated_at: datetime | None


class ConfigUpdate(CamelModel):
    value: str | int | None = None


class ConfigList(CamelModel):
    data: list[ConfigRead]
