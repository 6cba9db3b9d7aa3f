# biathlon_targets/db/models/prediction_score.py
from datetime import datetime
from sqlalchemy import Integer, ForeignKey, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from biathlon_targets.db.session import Base

class PredictionScore(Base):
    __tablename__ = "prediction_scores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    prediction_id: Mapped[int] = mapped_column(Integer, ForeignKey("predictions.id"), unique=True, nullable=False)
    hits: Mapped[int] = mapped_column(Integer, default=0)  # 0–5
    precise_hits: Mapped[int] = mapped_column(Integer, default=0)
    range_hits: Mapped[int] = mapped_column(Integer, default=0)
    total_score: Mapped[int] = mapped_column(Integer, default=0)
    calculated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # Relaciones
    prediction: Mapped["Prediction"] = relationship("Prediction", back_populates="score")
