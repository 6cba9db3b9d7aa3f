# biathlon_targets/db/models/prediction.py
from datetime import datetime
from typing import Optional
from sqlalchemy import Integer, ForeignKey, UniqueConstraint, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from biathlon_targets.db.session import Base

class Prediction(Base):
    __tablename__ = "predictions"
    __table_args__ = (
        # Un usuario solo puede hacer 1 predicción por carrera
        UniqueConstraint("user_id", "race_id", name="uq_user_race"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    race_id: Mapped[int] = mapped_column(Integer, ForeignKey("races.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now())

    # Relaciones
    race: Mapped["Race"] = relationship("Race", back_populates="predictions")
    targets: Mapped[list["PredictionTarget"]] = relationship(
        "PredictionTarget",
        back_populates="prediction",
        order_by="PredictionTarget.target_number",
        cascade="all, delete-orphan",
    )
    score: Mapped[Optional["PredictionScore"]] = relationship(
        "PredictionScore", back_populates="prediction", uselist=False, cascade="all, delete-orphan"
    )
