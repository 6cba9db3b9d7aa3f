from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session
from biathlon_targets.core.deps import get_db
from biathlon_targets.db.models.race import Race
from biathlon_targets.schemas.race import RaceCreate, RaceOut

router = APIRouter(prefix="/races", tags=["Races"])

@router.post("/", response_model=RaceOut)
def create_race(race_in: RaceCreate, db: Session = Depends(get_db)):
    existing = db.query(Race).filter(Race.external_id == race_in.external_id).first()
    if existing:
        raise HTTPException(status_code=400, detail="La carrera ya existe")

    race = Race(**race_in.model_dump())
    db.add(race)
    db.commit()
    db.refresh(race)

    return race

@router.get("/", response_model=list[RaceOut])
def list_races(db: Session = Depends(get_db)):
    return db.query(Race).order_by(Race.start_time).all()

@router.get("/{race_id}", response_model=RaceOut)
def get_race(race_id: int, db: Session = Depends(get_db)):
    race = db.get(Race, race_id)
    if not race:
        raise HTTPException(status_code=404, detail="Carrera no encontrada")
    return race
