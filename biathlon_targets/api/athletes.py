from fastapi import APIRouter, Depends
from sqlalchemy import or_
from sqlalchemy.orm import Session
from biathlon_targets.core.deps import get_db
from biathlon_targets.db.models.athlete import Athlete
from biathlon_targets.schemas.athlete import AthleteIn, AthleteOut

router = APIRouter(prefix="/athletes", tags=["Athletes"])

SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 10

@router.post("/", response_model=AthleteOut)
def upsert_athlete(athlete_in: AthleteIn, db: Session = Depends(get_db)):
    athlete = db.query(Athlete).filter(Athlete.ibu_id == athlete_in.ibu_id).first()

    if not athlete:
        athlete = Athlete(ibu_id=athlete_in.ibu_id)
        db.add(athlete)

    # Si ya existe, actualizamos sus datos
    athlete.given_name = athlete_in.given_name
    athlete.family_name = athlete_in.family_name
    athlete.nationality = athlete_in.nationality
    athlete.gender = athlete_in.gender

    db.commit()
    db.refresh(athlete)
    return athlete

@router.get("/search", response_model=list[AthleteOut])
def search_athletes(
    q: str | None = None,
    gender: str | None = None,
    db: Session = Depends(get_db),
):
    if not q or len(q) < SEARCH_MIN_LENGTH:
        return []

    pattern = f"%{q}%"
    query = db.query(Athlete).filter(
        or_(
            Athlete.family_name.ilike(pattern),
            Athlete.given_name.ilike(pattern),
        )
    )

    if gender:
        query = query.filter(Athlete.gender == gender)

    return query.order_by(Athlete.family_name).limit(SEARCH_LIMIT).all()
