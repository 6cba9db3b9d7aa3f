# Importa todos los modelos para que queden registrados en Base.metadata
from biathlon_targets.db.models.athlete import Athlete  # noqa: F401
from biathlon_targets.db.models.race import Race  # noqa: F401
from biathlon_targets.db.models.race_result import RaceResult  # noqa: F401
from biathlon_targets.db.models.prediction import Prediction  # noqa: F401
from biathlon_targets.db.models.prediction_target import PredictionTarget  # noqa: F401
from biathlon_targets.db.models.prediction_score import PredictionScore  # noqa: F401
