# biathlon_targets/db/models/race.py
from datetime import datetime
from typing import List, TYPE_CHECKING
from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from biathlon_targets.db.session import Base
from biathlon_targets.schemas.prediction import RaceType

if TYPE_CHECKING:
    from biathlon_targets.db.models.prediction import Prediction
    from biathlon_targets.db.models.race_result import RaceResult

class Race(Base):
    __tablename__ = "races"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    external_id: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    short_description: Mapped[str | None] = mapped_column(String, nullable=True)  # Ej: "Men 4x7.5 km Relay"
    event_name: Mapped[str | None] = mapped_column(String, nullable=True)
    location: Mapped[str | None] = mapped_column(String, nullable=True)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String, default="upcoming")  # upcoming / in_progress / completed
    results_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # Relaciones
    predictions: Mapped[List["Prediction"]] = relationship("Prediction", back_populates="race")
    results: Mapped[List["RaceResult"]] = relationship(
        "RaceResult", back_populates="race", cascade="all, delete-orphan"
    )

    @property
    def race_type(self) -> RaceType:
        return RaceType.from_flag(self.is_relay)

    @property
    def is_relay(self) -> bool:
        # Los relevos se puntúan por país
        return "relay" in (self.short_description or "").lower()
