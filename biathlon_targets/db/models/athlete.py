# biathlon_targets/db/models/athlete.py
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from biathlon_targets.db.session import Base

class Athlete(Base):
    __tablename__ = "athletes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    ibu_id: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)  # Ej: BTNOR11605199301
    given_name: Mapped[str] = mapped_column(String, nullable=False)
    family_name: Mapped[str] = mapped_column(String, nullable=False)
    nationality: Mapped[str | None] = mapped_column(String(3), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(1), nullable=True)  # M / W

    @property
    def full_name(self) -> str:
        return f"{self.given_name} {self.family_name}"
