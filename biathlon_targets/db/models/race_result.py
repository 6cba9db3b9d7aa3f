# biathlon_targets/db/models/race_result.py
from sqlalchemy import Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from biathlon_targets.db.session import Base

class RaceResult(Base):
    __tablename__ = "race_results"
    __table_args__ = (
        CheckConstraint(
            "(athlete_id IS NULL) <> (country_code IS NULL)",
            name="ck_race_result_one_subject",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    race_id: Mapped[int] = mapped_column(Integer, ForeignKey("races.id"), nullable=False, index=True)
    athlete_id: Mapped[str | None] = mapped_column(String, nullable=True)  # ibu_id
    country_code: Mapped[str | None] = mapped_column(String(3), nullable=True)
    finish_position: Mapped[int] = mapped_column(Integer, nullable=False)
    total_time: Mapped[str | None] = mapped_column(String, nullable=True)
    behind: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, default="finished")  # finished / dnf / dns / dsq

    # Relaciones
    race: Mapped["Race"] = relationship("Race", back_populates="results")
