from fastapi import Header, HTTPException
from biathlon_targets.db.session import SessionLocal

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_user_id(x_user_id: int | None = Header(default=None)) -> int:
    # La autenticación la hace el gateway; aquí solo llega el id del usuario
    if x_user_id is None:
        raise HTTPException(status_code=401, detail="Falta la cabecera X-User-Id")
    return x_user_id
