# biathlon_targets/db/models/prediction_target.py
from sqlalchemy import Integer, String, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from biathlon_targets.db.session import Base

class PredictionTarget(Base):
    __tablename__ = "prediction_targets"
    __table_args__ = (
        # Cada blanco (1-5) una sola vez por predicción
        UniqueConstraint("prediction_id", "target_number", name="uq_prediction_target"),
        # Atleta o país, nunca los dos
        CheckConstraint(
            "(athlete_id IS NULL) <> (country_code IS NULL)",
            name="ck_prediction_target_one_subject",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    prediction_id: Mapped[int] = mapped_column(Integer, ForeignKey("predictions.id"), nullable=False)
    target_number: Mapped[int] = mapped_column(Integer, nullable=False)  # 1–5
    athlete_id: Mapped[str | None] = mapped_column(String, nullable=True)  # ibu_id
    country_code: Mapped[str | None] = mapped_column(String(3), nullable=True)
    predicted_position: Mapped[int] = mapped_column(Integer, nullable=False)  # 1–120
    extra_rounds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # 0–10

    # Relaciones
    prediction: Mapped["Prediction"] = relationship("Prediction", back_populates="targets")
