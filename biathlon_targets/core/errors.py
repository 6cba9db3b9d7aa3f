class BiathlonTargetsError(Exception):
    """Base de los errores de dominio."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PredictionValidationError(BiathlonTargetsError):
    """La predicción no cumple alguna regla estructural."""


class RaceNotFoundError(BiathlonTargetsError):
    pass


class ResultsNotSyncedError(BiathlonTargetsError):
    pass


class NoResultsError(BiathlonTargetsError):
    pass
