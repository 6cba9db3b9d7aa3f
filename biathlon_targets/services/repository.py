"""
Acceso a datos del juego.

Todo lo que se recalcula (blancos de una predicción, resultados de una
carrera, puntuación) se guarda con semántica de REEMPLAZO: se borra lo
anterior y se inserta lo nuevo en la misma transacción. Nunca se mezcla
con lo que había.
"""
import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from pydantic import ValidationError
from sqlalchemy.orm import Session

from biathlon_targets.db.models.athlete import Athlete
from biathlon_targets.db.models.prediction import Prediction
from biathlon_targets.db.models.prediction_score import PredictionScore as PredictionScoreRow
from biathlon_targets.db.models.prediction_target import PredictionTarget
from biathlon_targets.db.models.race import Race
from biathlon_targets.db.models.race_result import RaceResult
from biathlon_targets.schemas.prediction import (
    AthleteSubject,
    CountrySubject,
    PredictionScore,
    ResultEntry,
    Target,
    TargetIn,
)

logger = logging.getLogger(__name__)


# -----------------------
# Conversión filas <-> registros
# -----------------------
def _subject_columns(subject) -> dict:
    if isinstance(subject, CountrySubject):
        return {"athlete_id": None, "country_code": subject.country_code}
    return {"athlete_id": subject.athlete_id, "country_code": None}


def _subject_from_row(row, athlete_names: dict[str, str]) -> AthleteSubject | CountrySubject:
    if row.country_code:
        return CountrySubject(country_code=row.country_code)
    return AthleteSubject(
        athlete_id=row.athlete_id,
        display_name=athlete_names.get(row.athlete_id),
    )


def get_athlete_names(db: Session, ibu_ids: Iterable[str]) -> dict[str, str]:
    """
    Devuelve: {ibu_id: "Nombre Apellido"}
    """
    ibu_ids = {i for i in ibu_ids if i}
    if not ibu_ids:
        return {}

    athletes = db.query(Athlete).filter(Athlete.ibu_id.in_(ibu_ids)).all()
    return {a.ibu_id: a.full_name for a in athletes}


def target_rows_to_records(db: Session, rows: Sequence[PredictionTarget]) -> list[Target]:
    names = get_athlete_names(db, (r.athlete_id for r in rows))
    return [
        Target(
            target_number=r.target_number,
            subject=_subject_from_row(r, names),
            predicted_position=r.predicted_position,
            extra_rounds=r.extra_rounds,
        )
        for r in rows
    ]


# -----------------------
# Predicciones
# -----------------------
def get_prediction(db: Session, user_id: int, race_id: int) -> Prediction | None:
    return (
        db.query(Prediction)
        .filter(
            Prediction.user_id == user_id,
            Prediction.race_id == race_id
        )
        .first()
    )


def get_or_create_prediction(db: Session, user_id: int, race_id: int) -> Prediction:
    prediction = get_prediction(db, user_id, race_id)

    if not prediction:
        prediction = Prediction(user_id=user_id, race_id=race_id)
        db.add(prediction)
        db.flush()  # importante para tener prediction.id

    return prediction


def replace_prediction_targets(
    db: Session,
    prediction: Prediction,
    targets: Sequence[TargetIn | Target],
) -> list[Target]:
    """Borra los blancos anteriores e inserta los nuevos. No hace commit."""
    records = [Target.model_validate(t.model_dump()) for t in targets]

    db.query(PredictionTarget).filter(
        PredictionTarget.prediction_id == prediction.id
    ).delete()

    for target in records:
        db.add(PredictionTarget(
            prediction_id=prediction.id,
            target_number=target.target_number,
            predicted_position=target.predicted_position,
            extra_rounds=target.extra_rounds,
            **_subject_columns(target.subject),
        ))

    prediction.updated_at = datetime.now(timezone.utc)
    db.flush()
    # La colección en memoria ya no refleja la BD tras el delete masivo
    db.expire(prediction, ["targets"])

    return records


def load_prediction_targets(db: Session, prediction: Prediction) -> list[Target]:
    rows = (
        db.query(PredictionTarget)
        .filter(PredictionTarget.prediction_id == prediction.id)
        .order_by(PredictionTarget.target_number)
        .all()
    )
    return target_rows_to_records(db, rows)


# -----------------------
# Puntuaciones
# -----------------------
def replace_prediction_score(
    db: Session,
    prediction_id: int,
    score: PredictionScore,
) -> PredictionScoreRow:
    """Sustituye la puntuación de una predicción (recalcular = reemplazar)."""
    db.query(PredictionScoreRow).filter(
        PredictionScoreRow.prediction_id == prediction_id
    ).delete()

    row = PredictionScoreRow(
        prediction_id=prediction_id,
        hits=score.hits,
        precise_hits=score.precise_hits,
        range_hits=score.range_hits,
        total_score=score.total_score,
        calculated_at=datetime.now(timezone.utc),
    )
    db.add(row)
    db.flush()
    return row


def load_prediction_score(db: Session, prediction_id: int) -> PredictionScore | None:
    row = (
        db.query(PredictionScoreRow)
        .filter(PredictionScoreRow.prediction_id == prediction_id)
        .first()
    )
    if not row:
        return None
    return PredictionScore.model_validate(row)


# -----------------------
# Resultados de carrera
# -----------------------
def best_result_per_subject(entries: Iterable[ResultEntry]) -> list[ResultEntry]:
    """
    En relevos el feed trae una fila por relevista: nos quedamos con la
    mejor posición de cada país. Sirve igual para atletas repetidos.
    """
    best: dict[tuple[str, str], ResultEntry] = {}

    for entry in entries:
        key = (entry.subject.kind, entry.subject.key)
        current = best.get(key)
        if current is None or entry.finish_position < current.finish_position:
            best[key] = entry

    return sorted(best.values(), key=lambda e: e.finish_position)


def replace_race_results(db: Session, race: Race, entries: Sequence[ResultEntry]) -> list[ResultEntry]:
    """Borra la clasificación anterior e inserta la nueva. No hace commit."""
    if race.is_relay:
        entries = best_result_per_subject(entries)

    db.query(RaceResult).filter(RaceResult.race_id == race.id).delete()

    for entry in entries:
        db.add(RaceResult(
            race_id=race.id,
            finish_position=entry.finish_position,
            total_time=entry.total_time,
            behind=entry.behind,
            status=entry.status.value,
            **_subject_columns(entry.subject),
        ))

    race.results_synced_at = datetime.now(timezone.utc)
    db.flush()
    db.expire(race, ["results"])

    return list(entries)


def load_race_results(db: Session, race_id: int) -> list[ResultEntry]:
    rows = (
        db.query(RaceResult)
        .filter(RaceResult.race_id == race_id)
        .order_by(RaceResult.finish_position)
        .all()
    )
    names = get_athlete_names(db, (r.athlete_id for r in rows))

    entries = []
    for r in rows:
        try:
            entries.append(ResultEntry(
                subject=_subject_from_row(r, names),
                finish_position=r.finish_position,
                status=r.status,
                total_time=r.total_time,
                behind=r.behind,
            ))
        except ValidationError as exc:
            logger.warning("Skipping malformed result row %s for race %s: %s", r.id, race_id, exc)

    return entries
