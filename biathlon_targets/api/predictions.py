import logging
from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session
from biathlon_targets.core.config import get_settings
from biathlon_targets.core.deps import get_db, get_current_user_id
from biathlon_targets.core.errors import BiathlonTargetsError, PredictionValidationError
from biathlon_targets.db.models.race import Race
from biathlon_targets.schemas.prediction import PredictionIn, PredictionOut, PredictionDetailOut
from biathlon_targets.services import repository
from biathlon_targets.services.race_scoring import get_scorable_race, evaluate_prediction
from biathlon_targets.services.validation import ensure_valid_prediction

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/predictions", tags=["Predictions"])

def _as_utc(value: datetime) -> datetime:
    # SQLite devuelve fechas sin zona horaria
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

def is_prediction_locked(race: Race) -> bool:
    return datetime.now(timezone.utc) >= _as_utc(race.start_time)

@router.post("/{race_id}", response_model=PredictionOut)
def upsert_prediction(
    race_id: int,
    prediction_in: PredictionIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    race = db.get(Race, race_id)
    if not race:
        raise HTTPException(status_code=404, detail="Carrera no encontrada")

    if get_settings().enforce_prediction_cutoff and is_prediction_locked(race):
        raise HTTPException(status_code=400, detail="Predicción bloqueada")

    try:
        ensure_valid_prediction(prediction_in.targets, race.is_relay)
    except PredictionValidationError as exc:
        logger.info("Rejected prediction from user %s for race %s: %s", user_id, race_id, exc.message)
        raise HTTPException(status_code=400, detail=exc.message)

    prediction = repository.get_or_create_prediction(db, user_id, race_id)

    # 🔄 Borramos los blancos anteriores y guardamos los nuevos
    repository.replace_prediction_targets(db, prediction, prediction_in.targets)
    db.commit()

    return PredictionOut(
        id=prediction.id,
        race_id=race_id,
        user_id=user_id,
        targets=repository.load_prediction_targets(db, prediction),
        created_at=prediction.created_at,
        updated_at=prediction.updated_at,
    )

@router.get("/{race_id}/me", response_model=PredictionDetailOut | None)
def get_my_prediction(
    race_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    prediction = repository.get_prediction(db, user_id, race_id)
    if not prediction:
        return None

    detail = PredictionDetailOut(
        id=prediction.id,
        race_id=race_id,
        user_id=user_id,
        targets=repository.load_prediction_targets(db, prediction),
        created_at=prediction.created_at,
        updated_at=prediction.updated_at,
    )

    # Si ya hay resultados, enseñamos cómo ha ido cada blanco
    try:
        race, results = get_scorable_race(db, race_id)
    except BiathlonTargetsError:
        return detail

    outcomes, score = evaluate_prediction(db, prediction, race, results)
    return detail.model_copy(update={"outcomes": outcomes, "score": score})
