from datetime import date, datetime, time
from decimal import Decimal

from sqlalchemy import (
    JSON,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Time,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow


class Dispatch(Base):
    __tablename__ = "dispatches"
    __table_args__ = (
        Index("ix_dispatches_fecha", "fecha"),
        Index("ix_dispatches_placa", "placa"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    despacho_no: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    fecha: Mapped[date] = mapped_column(Date, nullable=False)
    hora: Mapped[time] = mapped_column(Time, nullable=False)
    camion: Mapped[str | None] = mapped_column(String(100))
    placa: Mapped[str | None] = mapped_column(String(20))
    color: Mapped[str | None] = mapped_column(String(50))
    ficha: Mapped[str | None] = mapped_column(String(50))
    numero_orden: Mapped[str | None] = mapped_column(String(50))
    ticket_orden: Mapped[str | None] = mapped_column(String(50))
    chofer: Mapped[str | None] = mapped_column(String(100))
    m3: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    materials: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    cliente: Mapped[str] = mapped_column(String(255), nullable=False)
    celular: Mapped[str | None] = mapped_column(String(50))
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id"))
    equipment_id: Mapped[int | None] = mapped_column(ForeignKey("equipment.id"))
    operator_id: Mapped[int | None] = mapped_column(ForeignKey("operators.id"))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    user: Mapped["User | None"] = relationship("User")
    equipment: Mapped["Equipment | None"] = relationship("Equipment")
    operator: Mapped["Operator | None"] = relationship("Operator")

    @property
    def user_name(self) -> str | None:
        return self.user.username if self.user else None

    @property
    def equipment_name(self) -> str | None:
        return self.equipment.name if self.equipment else None

    @property
    def operator_name(self) -> str | None:
        return self.operator.name if self.operator else None
