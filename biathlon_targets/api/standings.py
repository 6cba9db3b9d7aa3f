from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session
from biathlon_targets.core.deps import get_db
from biathlon_targets.db.models.prediction import Prediction
from biathlon_targets.db.models.prediction_score import PredictionScore
from biathlon_targets.db.models.race import Race
from biathlon_targets.schemas.race import StandingOut

router = APIRouter(prefix="/standings", tags=["Standings"])

@router.get("/race/{race_id}", response_model=list[StandingOut])
def race_standings(race_id: int, db: Session = Depends(get_db)):
    if not db.get(Race, race_id):
        raise HTTPException(status_code=404, detail="Carrera no encontrada")

    results = (
        db.query(
            Prediction.user_id,
            Prediction.id.label("prediction_id"),
            PredictionScore.hits,
            PredictionScore.precise_hits,
            PredictionScore.range_hits,
            PredictionScore.total_score,
        )
        .join(PredictionScore, PredictionScore.prediction_id == Prediction.id)
        .filter(Prediction.race_id == race_id)
        .order_by(PredictionScore.total_score.desc(), PredictionScore.precise_hits.desc())
        .all()
    )

    return [StandingOut(**row._mapping) for row in results]
