from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime, timezone
from typing import Optional

from biathlon_targets.schemas.prediction import RaceType, ResultEntry

# Esquemas para Carreras
class RaceBase(BaseModel):
    external_id: str
    name: str
    short_description: Optional[str] = None
    event_name: Optional[str] = None
    location: Optional[str] = None
    start_time: datetime

    @field_validator("start_time")
    @classmethod
    def start_time_in_utc(cls, value: datetime) -> datetime:
        # Se guarda siempre en UTC: SQLite pierde el offset. Sin zona = UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

class RaceCreate(RaceBase):
    pass

class RaceOut(RaceBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    is_relay: bool
    race_type: RaceType
    results_synced_at: Optional[datetime] = None

# Esquemas para Resultados
class RaceResultsOut(BaseModel):
    race_id: int
    is_relay: bool
    results_synced_at: Optional[datetime] = None
    results: list[ResultEntry]

class StandingOut(BaseModel):
    user_id: int
    prediction_id: int
    hits: int
    precise_hits: int
    range_hits: int
    total_score: int
