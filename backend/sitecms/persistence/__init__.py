from flask import current_app

from .bridge import PersistenceBridge, PersistenceError
from .stores import JsonFileStore, SqlDocumentStore, StorageError, StorageQuotaExceeded

EXTENSION_KEY = "settings_bridge"


def init_persistence(app):
    backend = app.config.get("SETTINGS_BACKEND", "sql")

    if backend == "sql":
        store = SqlDocumentStore()
    elif backend == "file":
        store = JsonFileStore(
            app.config["SETTINGS_FILE_PATH"],
            max_bytes=app.config.get("SETTINGS_FILE_MAX_BYTES"),
        )
    else:
        raise ValueError(f"Unknown SETTINGS_BACKEND: {backend!r}")

    bridge = PersistenceBridge(store)
    app.extensions[EXTENSION_KEY] = bridge
    return bridge


def get_bridge() -> PersistenceBridge:
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "PersistenceBridge",
    "PersistenceError",
    "JsonFileStore",
    "SqlDocumentStore",
    "StorageError",
    "StorageQuotaExceeded",
    "init_persistence",
    "get_bridge",
]
