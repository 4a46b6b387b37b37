"""
Load / save / notify boundary between settings editors and durable storage.

``save`` serializes a whole settings document, writes it under its key and
then broadcasts ``settings_saved`` with the saved snapshot. Subscribers get
the value itself, so they never need to re-read and re-parse the store.
"""
from __future__ import annotations

import copy
import json
import logging
from datetime import datetime
from typing import Any, Callable, Optional

from sitecms.signals import settings_saved
from .stores import StorageError

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, Any], None]


class PersistenceError(Exception):
    """A settings document could not be written. Safe to retry."""

    def __init__(self, key: str, message: str):
        super().__init__(message)
        self.key = key


class PersistenceBridge:
    def __init__(self, store):
        self.store = store

    def load(self, key: str, default: Any = None) -> Any:
        try:
            raw = self.store.read(key)
        except StorageError:
            logger.exception("Could not read settings key %r, using default", key)
            return copy.deepcopy(default)

        if raw is None:
            return copy.deepcopy(default)

        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Stored value for %r is not valid JSON, using default", key)
            return copy.deepcopy(default)

    def save(self, key: str, value: Any, actor_id: Optional[str] = None) -> None:
        """
        Write ``value`` under ``key`` and notify subscribers.

        Raises PersistenceError when serialization or the store fails.
        Nothing is broadcast in that case.
        """
        try:
            text = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            logger.error("Could not serialize settings key %r: %s", key, exc)
            raise PersistenceError(key, f"Settings '{key}' are not serializable: {exc}") from exc

        try:
            self.store.write(key, text, actor_id=actor_id)
        except StorageError as exc:
            logger.error("Could not save settings key %r: %s", key, exc)
            raise PersistenceError(key, f"Settings '{key}' could not be saved: {exc}") from exc

        logger.info("Saved settings key %r (%d bytes)", key, len(text))
        self.notify(key, value)

    def notify(self, key: str, value: Any = None) -> None:
        settings_saved.send(key, value=copy.deepcopy(value))

    def subscribe(self, key: str, callback: Subscriber) -> Callable[[], None]:
        """
        Call ``callback(key, value)`` after every successful save of ``key``.
        Returns a function that removes the subscription.
        """
        def receiver(sender, value=None, **extra):
            try:
                callback(sender, value)
            except Exception:
                # one broken reader must not fail the writer's save
                logger.exception("Subscriber for settings key %r failed", sender)

        settings_saved.connect(receiver, sender=key, weak=False)

        def unsubscribe():
            settings_saved.disconnect(receiver, sender=key)

        return unsubscribe

    def last_modified(self, key: str) -> Optional[datetime]:
        try:
            return self.store.last_modified(key)
        except StorageError:
            logger.exception("Could not read modification time of settings key %r", key)
            return None
