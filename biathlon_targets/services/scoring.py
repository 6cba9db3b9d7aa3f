import math
from collections.abc import Iterable, Sequence

from biathlon_targets.core.rules import (
    MULTIPLIER,
    MULTIPLIER_THRESHOLD,
    PRECISE_HIT_POINTS,
    RANGE_HIT_POINTS,
)
from biathlon_targets.schemas.prediction import (
    AthleteSubject,
    CountrySubject,
    HitRange,
    PredictionScore,
    ResultEntry,
    ResultStatus,
    Target,
    TargetOutcome,
    TargetPoints,
)


def calculate_hit_range(predicted_position: int, extra_rounds: int) -> HitRange:
    """
    Ventana de acierto: posición ± balas extra.
    Solo se limita por abajo (no existe la posición 0).
    """
    return HitRange(
        min=max(1, predicted_position - extra_rounds),
        max=predicted_position + extra_rounds,
    )


def is_target_hit(actual_position: int | None, hit_range_min: int, hit_range_max: int) -> bool:
    if actual_position is None:
        return False
    return hit_range_min <= actual_position <= hit_range_max


def is_precise_hit(actual_position: int | None, predicted_position: int) -> bool:
    return actual_position == predicted_position


def has_multiplier(predicted_position: int) -> bool:
    return predicted_position > MULTIPLIER_THRESHOLD


def calculate_target_points(
    predicted_position: int,
    actual_position: int | None,
    extra_rounds: int,
) -> TargetPoints:
    hit_range = calculate_hit_range(predicted_position, extra_rounds)
    multiplier = has_multiplier(predicted_position)

    if not is_target_hit(actual_position, hit_range.min, hit_range.max):
        return TargetPoints(points=0, is_precise=False, is_hit=False, has_multiplier=multiplier)

    precise = is_precise_hit(actual_position, predicted_position)
    points = PRECISE_HIT_POINTS if precise else RANGE_HIT_POINTS
    if multiplier:
        points = math.floor(points * MULTIPLIER)

    return TargetPoints(points=points, is_precise=precise, is_hit=True, has_multiplier=multiplier)


def build_position_index(results: Iterable[ResultEntry], is_relay: bool) -> dict[str, int]:
    """
    Devuelve: {athlete_id o country_code: posición}
    Solo entran los que terminaron; si un sujeto sale repetido se queda la mejor posición.
    """
    subject_type = CountrySubject if is_relay else AthleteSubject
    index: dict[str, int] = {}

    for entry in results:
        if not isinstance(entry.subject, subject_type):
            continue
        if entry.status != ResultStatus.FINISHED:
            continue

        key = entry.subject.key
        current = index.get(key)
        if current is None or entry.finish_position < current:
            index[key] = entry.finish_position

    return index


def find_actual_position(target: Target, position_index: dict[str, int]) -> int | None:
    return position_index.get(target.subject.key)


def score_target(target: Target, actual_position: int | None) -> TargetOutcome:
    hit_range = calculate_hit_range(target.predicted_position, target.extra_rounds)
    result = calculate_target_points(
        target.predicted_position,
        actual_position,
        target.extra_rounds,
    )

    return TargetOutcome(
        target_number=target.target_number,
        subject_id=target.subject.key,
        subject_label=target.subject.label,
        predicted_position=target.predicted_position,
        actual_position=actual_position,
        extra_rounds=target.extra_rounds,
        hit_range_min=hit_range.min,
        hit_range_max=hit_range.max,
        is_hit=result.is_hit,
        is_precise=result.is_precise,
        points_earned=result.points,
        has_multiplier=result.has_multiplier,
    )


def calculate_prediction_results(
    targets: Sequence[Target],
    results: Iterable[ResultEntry],
    is_relay: bool,
) -> list[TargetOutcome]:
    """Resultado de cada blanco. Cada blanco se busca por separado en la clasificación."""
    position_index = build_position_index(results, is_relay)

    return [
        score_target(target, find_actual_position(target, position_index))
        for target in targets
    ]


def calculate_total_score(outcomes: Iterable[TargetOutcome]) -> PredictionScore:
    hits = 0
    precise_hits = 0
    total_score = 0

    for outcome in outcomes:
        if outcome.is_hit:
            hits += 1
        if outcome.is_precise:
            precise_hits += 1
        total_score += outcome.points_earned

    return PredictionScore(
        hits=hits,
        precise_hits=precise_hits,
        range_hits=hits - precise_hits,
        total_score=total_score,
    )


def score_prediction(
    targets: Sequence[Target],
    results: Iterable[ResultEntry],
    is_relay: bool,
) -> tuple[list[TargetOutcome], PredictionScore]:
    outcomes = calculate_prediction_results(targets, results, is_relay)
    return outcomes, calculate_total_score(outcomes)
