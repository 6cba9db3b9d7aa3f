import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from biathlon_targets.core.errors import NoResultsError, RaceNotFoundError, ResultsNotSyncedError
from biathlon_targets.core.locks import acquire_lock
from biathlon_targets.db.models.prediction import Prediction
from biathlon_targets.db.models.race import Race
from biathlon_targets.schemas.prediction import PredictionScore, ResultEntry, TargetOutcome
from biathlon_targets.services import repository
from biathlon_targets.services.scoring import score_prediction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringRunSummary:
    race_id: int
    scores_calculated: int


def get_scorable_race(db: Session, race_id: int) -> tuple[Race, list[ResultEntry]]:
    race = db.get(Race, race_id)
    if not race:
        raise RaceNotFoundError("Race not found")

    if not race.results_synced_at:
        raise ResultsNotSyncedError("Race results have not been synced yet")

    results = repository.load_race_results(db, race_id)
    if not results:
        raise NoResultsError("No race results found")

    return race, results


def evaluate_prediction(
    db: Session,
    prediction: Prediction,
    race: Race,
    results: list[ResultEntry],
) -> tuple[list[TargetOutcome], PredictionScore]:
    targets = repository.load_prediction_targets(db, prediction)
    return score_prediction(targets, results, race.is_relay)


def score_race(db: Session, race_id: int) -> ScoringRunSummary:
    """
    Recalcula la puntuación de todas las predicciones de una carrera.
    Se puede repetir (p.ej. tras corregir resultados): cada puntuación se
    reemplaza entera, nunca se acumula.
    """
    with acquire_lock(f"score:race:{race_id}"):
        race, results = get_scorable_race(db, race_id)

        predictions = (
            db.query(Prediction)
            .filter(Prediction.race_id == race_id)
            .all()
        )

        if not predictions:
            logger.info("Race %s has no predictions to score", race_id)
            return ScoringRunSummary(race_id=race_id, scores_calculated=0)

        try:
            for prediction in predictions:
                _, score = evaluate_prediction(db, prediction, race, results)
                repository.replace_prediction_score(db, prediction.id, score)
                logger.debug(
                    "Prediction %s scored: %s pts (%s hits, %s precise)",
                    prediction.id, score.total_score, score.hits, score.precise_hits,
                )
            db.commit()
        except Exception:
            db.rollback()
            raise

    logger.info("Scored %s predictions for race %s", len(predictions), race_id)
    return ScoringRunSummary(race_id=race_id, scores_calculated=len(predictions))
