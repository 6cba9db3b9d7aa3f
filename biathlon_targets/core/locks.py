import threading
from contextlib import contextmanager

_registry_lock = threading.Lock()
# clave -> [lock, nº de hilos que lo usan o esperan]
_locks: dict[str, list] = {}


@contextmanager
def acquire_lock(key: str):
    """
    Lock en proceso por clave (ej: "score:race:12").
    Evita que dos recálculos de la misma carrera mezclen sus escrituras.
    La entrada se borra cuando nadie la usa, así el registro no crece.
    """
    with _registry_lock:
        entry = _locks.setdefault(key, [threading.Lock(), 0])
        entry[1] += 1

    try:
        with entry[0]:
            yield
    finally:
        with _registry_lock:
            entry[1] -= 1
            if entry[1] == 0:
                del _locks[key]
