import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from biathlon_targets.core.config import get_settings
from biathlon_targets.core.logging_config import setup_logging

# IMPORTANTE: init_db importa todos los modelos antes de crear las tablas
from biathlon_targets.db.session import init_db

# Importar las rutas (los routers)
from biathlon_targets.api.athletes import router as athletes_router
from biathlon_targets.api.races import router as races_router
from biathlon_targets.api.predictions import router as predictions_router
from biathlon_targets.api.race_results import router as race_results_router
from biathlon_targets.api.scoring import router as scoring_router
from biathlon_targets.api.standings import router as standings_router

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_output=settings.log_json,
    log_file=settings.log_file,
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version="1.0.0"
)

# Creamos las tablas en la base de datos
init_db()

# Conectamos las piezas (routers)
app.include_router(athletes_router)
app.include_router(races_router)
app.include_router(predictions_router)
app.include_router(race_results_router)
app.include_router(scoring_router)
app.include_router(standings_router)

# Configuramos el permiso para que el frontend pueda hablar con Python
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info("%s API ready", settings.app_name)

@app.get("/")
def read_root():
    return {"message": "API Biathlon Targets funcionando 🎯"}
