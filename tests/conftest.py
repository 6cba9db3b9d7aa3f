import os

# Antes de importar la app: BD en memoria y logs solo por stdout
os.environ["BIATHLON_DATABASE_URL"] = "sqlite://"
os.environ["BIATHLON_LOG_FILE"] = ""

import pytest
from fastapi.testclient import TestClient

from main import app
from biathlon_targets.db.models.athlete import Athlete
from biathlon_targets.db.session import Base, SessionLocal, engine


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def athletes():
    db = SessionLocal()
    rows = [
        Athlete(ibu_id=f"A{i}", given_name=f"Given{i}", family_name=f"Family{i}", nationality="NOR", gender="M")
        for i in range(1, 8)
    ]
    db.add_all(rows)
    db.commit()
    db.close()
    return [r.ibu_id for r in rows]
