from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from biathlon_targets.core.rules import (
    MAX_EXTRA_ROUNDS_PER_TARGET,
    MAX_POSITION,
    TOTAL_TARGETS,
)


class RaceType(str, Enum):
    INDIVIDUAL = "individual"
    RELAY = "relay"

    @classmethod
    def from_flag(cls, is_relay: bool) -> "RaceType":
        return cls.RELAY if is_relay else cls.INDIVIDUAL


class ResultStatus(str, Enum):
    FINISHED = "finished"
    DNF = "dnf"
    DNS = "dns"
    DSQ = "dsq"


# -----------------------
# Sujeto de un blanco: atleta (individual) o país (relevos)
# -----------------------
class AthleteSubject(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["athlete"] = "athlete"
    athlete_id: str = Field(min_length=1)
    display_name: str | None = None

    @property
    def key(self) -> str:
        return self.athlete_id

    @property
    def label(self) -> str:
        return self.display_name or self.athlete_id


class CountrySubject(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["country"] = "country"
    country_code: str = Field(min_length=2, max_length=3)

    # Antes de comprobar la longitud: " nor" -> "NOR"
    @field_validator("country_code", mode="before")
    @classmethod
    def normalize_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def key(self) -> str:
        return self.country_code

    @property
    def label(self) -> str:
        return self.country_code


Subject = Annotated[Union[AthleteSubject, CountrySubject], Field(discriminator="kind")]


def _subject_from_flat(data: Any) -> Any:
    """
    Acepta también el formato plano {athlete_id | country_code} y lo
    convierte en `subject`. Los dos a la vez no tienen sentido.
    """
    if not isinstance(data, dict) or "subject" in data:
        return data

    data = dict(data)
    athlete_id = data.pop("athlete_id", None)
    country_code = data.pop("country_code", None)
    display_name = data.pop("athlete_name", None)

    if athlete_id and country_code:
        raise ValueError("A target cannot name both an athlete and a country")

    if athlete_id:
        data["subject"] = {"kind": "athlete", "athlete_id": athlete_id, "display_name": display_name}
    elif country_code:
        data["subject"] = {"kind": "country", "country_code": country_code}
    return data


# -----------------------
# Blancos
# -----------------------
class TargetIn(BaseModel):
    """
    Blanco tal y como llega del usuario. Sin límites en los campos: el
    validador de predicciones devuelve un mensaje concreto por cada regla.
    """
    target_number: int
    subject: Optional[Subject] = None
    predicted_position: int
    extra_rounds: int

    @model_validator(mode="before")
    @classmethod
    def subject_from_flat(cls, data: Any) -> Any:
        return _subject_from_flat(data)


class Target(BaseModel):
    """Blanco ya validado (lo que se guarda y lo que puntúa)."""
    model_config = ConfigDict(frozen=True)

    target_number: int = Field(ge=1, le=TOTAL_TARGETS)
    subject: Subject
    predicted_position: int = Field(ge=1, le=MAX_POSITION)
    extra_rounds: int = Field(ge=0, le=MAX_EXTRA_ROUNDS_PER_TARGET)

    @model_validator(mode="before")
    @classmethod
    def subject_from_flat(cls, data: Any) -> Any:
        return _subject_from_flat(data)


class PredictionIn(BaseModel):
    targets: list[TargetIn]


# -----------------------
# Resultados
# -----------------------
class ResultEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    subject: Subject
    finish_position: int = Field(ge=1)
    status: ResultStatus = ResultStatus.FINISHED
    total_time: str | None = None
    behind: str | None = None

    @model_validator(mode="before")
    @classmethod
    def subject_from_flat(cls, data: Any) -> Any:
        return _subject_from_flat(data)


class RaceResultsIn(BaseModel):
    results: list[ResultEntry]


# -----------------------
# Salida del motor de puntuación
# -----------------------
class HitRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int
    max: int


class TargetPoints(BaseModel):
    model_config = ConfigDict(frozen=True)

    points: int
    is_precise: bool
    is_hit: bool
    has_multiplier: bool


class TargetOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_number: int
    subject_id: str
    subject_label: str
    predicted_position: int
    actual_position: int | None
    extra_rounds: int
    hit_range_min: int
    hit_range_max: int
    is_hit: bool
    is_precise: bool
    points_earned: int
    has_multiplier: bool


class PredictionScore(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    hits: int = Field(ge=0, le=TOTAL_TARGETS)
    precise_hits: int = Field(ge=0, le=TOTAL_TARGETS)
    range_hits: int = Field(ge=0, le=TOTAL_TARGETS)
    total_score: int = Field(ge=0)

    @model_validator(mode="after")
    def check_counts(self) -> "PredictionScore":
        if self.precise_hits > self.hits:
            raise ValueError("precise_hits cannot exceed hits")
        if self.range_hits != self.hits - self.precise_hits:
            raise ValueError("range_hits must equal hits - precise_hits")
        return self


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)


# -----------------------
# Respuestas de la API
# -----------------------
class PredictionOut(BaseModel):
    id: int
    race_id: int
    user_id: int
    targets: list[Target]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PredictionDetailOut(PredictionOut):
    outcomes: list[TargetOutcome] = []
    score: PredictionScore | None = None
