from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

# Esquemas para Atletas
class AthleteIn(BaseModel):
    ibu_id: str = Field(min_length=1)
    given_name: str
    family_name: str
    nationality: Optional[str] = Field(default=None, max_length=3)
    gender: Optional[str] = None  # M / W

    @field_validator("nationality", mode="before")
    @classmethod
    def normalize_nationality(cls, value):
        if isinstance(value, str):
            return value.strip().upper() or None
        return value

class AthleteOut(AthleteIn):
    model_config = ConfigDict(from_attributes=True)

    id: int
