from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session
from biathlon_targets.core.deps import get_db
from biathlon_targets.db.models.race import Race
from biathlon_targets.schemas.prediction import RaceResultsIn
from biathlon_targets.schemas.race import RaceResultsOut
from biathlon_targets.services import repository

router = APIRouter(prefix="/results", tags=["Race Results"])

@router.post("/{race_id}")
def upsert_race_result(
    race_id: int,
    results_in: RaceResultsIn,
    db: Session = Depends(get_db),
):
    race = db.get(Race, race_id)
    if not race:
        raise HTTPException(status_code=404, detail="Carrera no encontrada")

    if not results_in.results:
        raise HTTPException(status_code=400, detail="La clasificación está vacía")

    stored = repository.replace_race_results(db, race, results_in.results)
    race.status = "completed"
    db.commit()

    return {"message": "Resultados guardados", "results_count": len(stored)}

@router.get("/{race_id}", response_model=RaceResultsOut)
def get_race_result(race_id: int, db: Session = Depends(get_db)):
    race = db.get(Race, race_id)
    if not race:
        raise HTTPException(status_code=404, detail="Carrera no encontrada")

    if not race.results_synced_at:
        raise HTTPException(status_code=404, detail="Resultados no disponibles aún")

    return RaceResultsOut(
        race_id=race.id,
        is_relay=race.is_relay,
        results_synced_at=race.results_synced_at,
        results=repository.load_race_results(db, race.id),
    )
