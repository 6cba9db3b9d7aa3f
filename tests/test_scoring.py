import random

import pytest
from pydantic import ValidationError

from biathlon_targets.schemas.prediction import (
    AthleteSubject,
    CountrySubject,
    PredictionScore,
    ResultEntry,
    ResultStatus,
    Target,
)
from biathlon_targets.services.scoring import (
    build_position_index,
    calculate_hit_range,
    calculate_prediction_results,
    calculate_target_points,
    calculate_total_score,
    score_prediction,
)


def athlete_result(athlete_id, position, status=ResultStatus.FINISHED):
    return ResultEntry(subject=AthleteSubject(athlete_id=athlete_id), finish_position=position, status=status)


def country_result(code, position):
    return ResultEntry(subject=CountrySubject(country_code=code), finish_position=position)


def target(number, athlete_id, position, rounds):
    return Target(
        target_number=number,
        subject=AthleteSubject(athlete_id=athlete_id, display_name=f"Name {athlete_id}"),
        predicted_position=position,
        extra_rounds=rounds,
    )


# -----------------------
# Ventana de acierto
# -----------------------
@pytest.mark.parametrize("predicted, rounds, expected", [
    (10, 3, (7, 13)),
    (3, 5, (1, 8)),
    (1, 0, (1, 1)),
    (118, 10, (108, 128)),   # sin límite por arriba
])
def test_hit_range(predicted, rounds, expected):
    hit_range = calculate_hit_range(predicted, rounds)

    assert (hit_range.min, hit_range.max) == expected


# -----------------------
# Puntos por blanco
# -----------------------
def test_precise_top_hit():
    result = calculate_target_points(predicted_position=3, actual_position=3, extra_rounds=0)

    assert result.is_precise is True
    assert result.is_hit is True
    assert result.has_multiplier is False
    assert result.points == 100


def test_range_hit_with_multiplier():
    result = calculate_target_points(predicted_position=25, actual_position=28, extra_rounds=5)

    assert result.is_hit is True
    assert result.is_precise is False
    assert result.has_multiplier is True
    assert result.points == 75


def test_precise_long_shot_hit():
    result = calculate_target_points(predicted_position=40, actual_position=40, extra_rounds=2)

    assert result.points == 150
    assert result.is_precise and result.has_multiplier


def test_threshold_position_has_no_multiplier():
    assert calculate_target_points(20, 20, 0).points == 100
    assert calculate_target_points(21, 21, 0).points == 150


def test_miss_when_result_absent():
    result = calculate_target_points(predicted_position=10, actual_position=None, extra_rounds=3)

    assert result.is_hit is False
    assert result.is_precise is False
    assert result.points == 0


def test_miss_outside_range_still_reports_multiplier():
    result = calculate_target_points(predicted_position=30, actual_position=45, extra_rounds=4)

    assert result.is_hit is False
    assert result.points == 0
    assert result.has_multiplier is True


def test_range_edges_are_inclusive():
    assert calculate_target_points(10, 7, 3).is_hit
    assert calculate_target_points(10, 13, 3).is_hit
    assert not calculate_target_points(10, 6, 3).is_hit
    assert not calculate_target_points(10, 14, 3).is_hit


def test_precise_implies_hit_and_beats_range_hit():
    for predicted in (1, 5, 20, 21, 60, 120):
        for rounds in (0, 1, 5, 10):
            precise = calculate_target_points(predicted, predicted, rounds)
            assert precise.is_precise and precise.is_hit

            if rounds:
                near = calculate_target_points(predicted, predicted + 1, rounds)
                assert near.is_hit and not near.is_precise
                assert precise.points > near.points


# -----------------------
# Búsqueda en la clasificación
# -----------------------
def test_index_only_keeps_subjects_of_the_race_type():
    results = [athlete_result("A1", 1), country_result("NOR", 1), country_result("FRA", 2)]

    assert build_position_index(results, is_relay=False) == {"A1": 1}
    assert build_position_index(results, is_relay=True) == {"NOR": 1, "FRA": 2}


def test_index_keeps_best_position_and_skips_non_finishers():
    results = [
        country_result("NOR", 4),
        country_result("NOR", 2),
        athlete_result("A9", 7, status=ResultStatus.DNF),
    ]

    assert build_position_index(results, is_relay=True) == {"NOR": 2}
    assert build_position_index(results, is_relay=False) == {}


def test_absent_subject_is_an_independent_miss():
    targets = [target(1, "A1", 1, 0), target(2, "GONE", 2, 10)]
    results = [athlete_result("A1", 1), athlete_result("A2", 2)]

    outcomes = calculate_prediction_results(targets, results, is_relay=False)

    assert outcomes[0].is_precise and outcomes[0].points_earned == 100
    assert outcomes[1].actual_position is None
    assert outcomes[1].is_hit is False
    assert outcomes[1].points_earned == 0


def test_outcome_carries_range_and_display_label():
    outcome = calculate_prediction_results(
        [target(4, "A4", 25, 5)], [athlete_result("A4", 28)], is_relay=False
    )[0]

    assert outcome.target_number == 4
    assert outcome.subject_id == "A4"
    assert outcome.subject_label == "Name A4"
    assert (outcome.hit_range_min, outcome.hit_range_max) == (20, 30)
    assert outcome.actual_position == 28
    assert outcome.points_earned == 75


def test_relay_matches_by_country():
    relay_target = Target(
        target_number=1,
        subject=CountrySubject(country_code="swe"),
        predicted_position=2,
        extra_rounds=1,
    )

    outcome = calculate_prediction_results(
        [relay_target], [country_result("SWE", 3), athlete_result("SWE", 2)], is_relay=True
    )[0]

    assert outcome.subject_label == "SWE"
    assert outcome.actual_position == 3
    assert outcome.is_hit and not outcome.is_precise
    assert outcome.points_earned == 50


# -----------------------
# Total
# -----------------------
def full_prediction():
    return [
        target(1, "A1", 1, 0),
        target(2, "A2", 2, 0),
        target(3, "A3", 3, 0),
        target(4, "A4", 25, 5),
        target(5, "A5", 10, 5),
    ]


def test_all_precise_prediction_scores_500():
    targets = [target(n, f"A{n}", n, 2) for n in range(1, 6)]
    results = [athlete_result(f"A{n}", n) for n in range(1, 6)]

    _, score = score_prediction(targets, results, is_relay=False)

    assert score == PredictionScore(hits=5, precise_hits=5, range_hits=0, total_score=500)


def test_mixed_prediction_total():
    results = [
        athlete_result("A1", 1),
        athlete_result("A2", 3),
        athlete_result("A3", 3),
        athlete_result("A4", 28),
    ]

    outcomes, score = score_prediction(full_prediction(), results, is_relay=False)

    assert [o.points_earned for o in outcomes] == [100, 0, 100, 75, 0]
    assert score.hits == 3
    assert score.precise_hits == 2
    assert score.range_hits == 1
    assert score.total_score == 275


def test_scoring_is_idempotent_and_order_independent():
    results = [athlete_result(f"A{n}", p) for n, p in [(1, 2), (2, 2), (3, 9), (4, 21), (5, 14)]]
    targets = full_prediction()

    first = score_prediction(targets, results, is_relay=False)
    second = score_prediction(targets, results, is_relay=False)
    assert first == second

    shuffled = targets[:]
    random.Random(7).shuffle(shuffled)
    _, shuffled_score = score_prediction(shuffled, list(reversed(results)), is_relay=False)
    assert shuffled_score == first[1]


def test_empty_results_score_zero():
    _, score = score_prediction(full_prediction(), [], is_relay=False)

    assert score == PredictionScore(hits=0, precise_hits=0, range_hits=0, total_score=0)


def test_total_of_no_outcomes_is_zero():
    assert calculate_total_score([]).total_score == 0


def test_prediction_score_rejects_inconsistent_counts():
    with pytest.raises(ValidationError):
        PredictionScore(hits=2, precise_hits=3, range_hits=0, total_score=100)

    with pytest.raises(ValidationError):
        PredictionScore(hits=3, precise_hits=1, range_hits=1, total_score=100)
