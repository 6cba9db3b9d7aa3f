from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session
from biathlon_targets.core.deps import get_db, get_current_user_id
from biathlon_targets.core.errors import NoResultsError, RaceNotFoundError, ResultsNotSyncedError
from biathlon_targets.services.race_scoring import score_race

router = APIRouter(prefix="/scores", tags=["Scoring"])

@router.post("/calculate/{race_id}")
def calculate_race_scores(
    race_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        summary = score_race(db, race_id)
    except (RaceNotFoundError, NoResultsError) as exc:
        raise HTTPException(status_code=404, detail=exc.message)
    except ResultsNotSyncedError as exc:
        raise HTTPException(status_code=400, detail=exc.message)

    return {"success": True, "scores_calculated": summary.scores_calculated}
