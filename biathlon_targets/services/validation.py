from collections.abc import Sequence

from biathlon_targets.core.errors import PredictionValidationError
from biathlon_targets.core.rules import (
    MAX_EXTRA_ROUNDS_PER_TARGET,
    MAX_POSITION,
    TARGET_NUMBERS,
    TOTAL_EXTRA_ROUNDS,
    TOTAL_TARGETS,
)
from biathlon_targets.schemas.prediction import (
    AthleteSubject,
    CountrySubject,
    TargetIn,
    ValidationResult,
)


def _check_target(target: TargetIn, is_relay: bool) -> str | None:
    if target.predicted_position < 1 or target.predicted_position > MAX_POSITION:
        return f"Position must be between 1 and {MAX_POSITION}"

    if target.extra_rounds < 0 or target.extra_rounds > MAX_EXTRA_ROUNDS_PER_TARGET:
        return f"Extra rounds must be between 0 and {MAX_EXTRA_ROUNDS_PER_TARGET}"

    # Un sujeto del tipo equivocado cuenta como ausente
    if is_relay:
        if not isinstance(target.subject, CountrySubject):
            return "Each target must have a country"
    else:
        if not isinstance(target.subject, AthleteSubject):
            return "Each target must have an athlete"

    return None


def validate_prediction_targets(
    targets: Sequence[TargetIn],
    is_relay: bool,
) -> ValidationResult:
    """
    Comprueba una predicción antes de guardarla.
    Devuelve el primer error encontrado (mismo orden siempre).
    """
    if len(targets) != TOTAL_TARGETS:
        return ValidationResult.fail(f"Must have exactly {TOTAL_TARGETS} targets")

    target_numbers = sorted(t.target_number for t in targets)
    if target_numbers != TARGET_NUMBERS:
        return ValidationResult.fail(
            "Target numbers must be " + ", ".join(str(n) for n in TARGET_NUMBERS)
        )

    total_rounds = sum(t.extra_rounds for t in targets)
    if total_rounds != TOTAL_EXTRA_ROUNDS:
        return ValidationResult.fail(
            f"Total extra rounds must equal {TOTAL_EXTRA_ROUNDS}, got {total_rounds}"
        )

    for target in targets:
        error = _check_target(target, is_relay)
        if error:
            return ValidationResult.fail(error)

    keys = [t.subject.key for t in targets]
    if len(set(keys)) != len(keys):
        what = "country" if is_relay else "athlete"
        return ValidationResult.fail(f"Cannot select the same {what} twice")

    return ValidationResult.ok()


def ensure_valid_prediction(targets: Sequence[TargetIn], is_relay: bool) -> None:
    result = validate_prediction_targets(targets, is_relay)
    if not result.valid:
        raise PredictionValidationError(result.error)
