from __future__ import annotations

import json
import os
import tempfile
import unittest
from unittest import mock

from sqlalchemy.exc import OperationalError

from sitecms.domain.documents import DOCUMENTS, SITE_SETTINGS_KEY
from sitecms.extensions import db
from sitecms.models.settings_document import SettingsDocument
from sitecms.persistence import get_bridge
from sitecms.persistence.bridge import PersistenceBridge, PersistenceError
from sitecms.persistence.stores import JsonFileStore, SqlDocumentStore

from support import AppTestCase


class FileBridgeTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.path = os.path.join(tmp.name, "settings.json")
        self.store = JsonFileStore(self.path)
        self.bridge = PersistenceBridge(self.store)

    def test_round_trip(self):
        value = DOCUMENTS[SITE_SETTINGS_KEY].initial_document()
        self.bridge.save(SITE_SETTINGS_KEY, value)
        self.assertEqual(self.bridge.load(SITE_SETTINGS_KEY, {}), value)

    def test_round_trip_keeps_unicode(self):
        value = {"faqs": {"enabled": True, "items": [{"id": "f", "order": 1, "question": "Bảo hành?"}]}}
        self.bridge.save("faqs", value)
        self.assertEqual(self.bridge.load("faqs"), value)

    def test_missing_key_returns_default_copy(self):
        default = {"items": []}
        loaded = self.bridge.load("absent", default)
        self.assertEqual(loaded, default)
        loaded["items"].append(1)
        self.assertEqual(default, {"items": []})

    def test_corrupt_value_returns_default(self):
        self.store.write("broken", "{not json")
        with self.assertLogs("sitecms.persistence.bridge", level="WARNING"):
            self.assertEqual(self.bridge.load("broken", "fallback"), "fallback")

    def test_unreadable_file_returns_default(self):
        with open(self.path, "w", encoding="utf-8") as fh:
            fh.write("[1, 2")
        with self.assertLogs("sitecms.persistence.bridge", level="ERROR"):
            self.assertEqual(self.bridge.load("k", 7), 7)

    def test_keys_share_one_file(self):
        self.bridge.save("a", [1])
        self.bridge.save("b", {"x": True})
        with open(self.path, encoding="utf-8") as fh:
            raw = json.load(fh)
        self.assertEqual(set(raw), {"a", "b"})
        self.assertEqual(json.loads(raw["a"]), [1])

    def test_quota_exceeded_is_surfaced_without_notify(self):
        self.store.max_bytes = 64
        received = []
        self.addCleanup(self.bridge.subscribe("big", lambda key, value: received.append(value)))

        with self.assertLogs("sitecms.persistence.bridge", level="ERROR"):
            with self.assertRaises(PersistenceError) as caught:
                self.bridge.save("big", {"text": "x" * 500})

        self.assertEqual(caught.exception.key, "big")
        self.assertEqual(received, [])
        self.assertIsNone(self.store.read("big"))

    def test_unserializable_value(self):
        with self.assertLogs("sitecms.persistence.bridge", level="ERROR"):
            with self.assertRaises(PersistenceError):
                self.bridge.save("bad", {"when": object()})

    def test_subscribers_receive_saved_value(self):
        received = []
        unsubscribe = self.bridge.subscribe("faqs", lambda key, value: received.append((key, value)))

        self.bridge.save("faqs", {"n": 1})
        self.bridge.save("other", {"n": 2})
        unsubscribe()
        self.bridge.save("faqs", {"n": 3})

        self.assertEqual(received, [("faqs", {"n": 1})])

    def test_subscriber_gets_a_copy(self):
        received = []
        self.addCleanup(self.bridge.subscribe("k", lambda key, value: received.append(value)))
        value = {"items": [1]}

        self.bridge.save("k", value)
        received[0]["items"].append(2)

        self.assertEqual(value, {"items": [1]})

    def test_failing_subscriber_does_not_fail_save(self):
        def broken(key, value):
            raise RuntimeError("reader crashed")

        self.addCleanup(self.bridge.subscribe("k", broken))
        with self.assertLogs("sitecms.persistence.bridge", level="ERROR"):
            self.bridge.save("k", {"ok": True})
        self.assertEqual(self.bridge.load("k"), {"ok": True})

    def test_file_store_has_no_timestamps(self):
        self.bridge.save("k", 1)
        self.assertIsNone(self.bridge.last_modified("k"))

    def test_failed_replace_leaves_no_temp_file(self):
        self.bridge.save("k", {"v": 1})
        directory = os.path.dirname(self.path)

        with mock.patch("sitecms.persistence.stores.os.replace", side_effect=OSError("read-only")):
            with self.assertLogs("sitecms.persistence.bridge", level="ERROR"):
                with self.assertRaises(PersistenceError):
                    self.bridge.save("k", {"v": 2})

        self.assertEqual([n for n in os.listdir(directory) if n.endswith(".tmp")], [])
        self.assertEqual(self.bridge.load("k"), {"v": 1})


class SqlBridgeTests(AppTestCase):
    def test_bridge_uses_sql_store(self):
        self.assertIsInstance(get_bridge().store, SqlDocumentStore)

    def test_round_trip_and_revision(self):
        bridge = get_bridge()
        bridge.save("faqs", {"v": 1}, actor_id="u1")
        bridge.save("faqs", {"v": 2}, actor_id="u2")

        self.assertEqual(bridge.load("faqs"), {"v": 2})
        row = SettingsDocument.query.filter_by(key="faqs").one()
        self.assertEqual(row.revision, 2)
        self.assertEqual(row.updated_by, "u2")
        self.assertIsNotNone(bridge.last_modified("faqs"))

    def test_delete(self):
        bridge = get_bridge()
        bridge.save("faqs", {"v": 1})
        bridge.store.delete("faqs")
        self.assertEqual(bridge.load("faqs", "gone"), "gone")

    def _failing_query(self):
        error = OperationalError("SELECT", {}, Exception("database is locked"))
        return mock.patch.object(db.session, "execute", side_effect=error)

    def test_database_read_failure_returns_default(self):
        bridge = get_bridge()
        bridge.save("faqs", {"v": 1})

        with self._failing_query():
            with self.assertLogs("sitecms.persistence.bridge", level="ERROR"):
                self.assertEqual(bridge.load("faqs", "fallback"), "fallback")

    def test_database_read_failure_has_no_timestamp(self):
        bridge = get_bridge()
        bridge.save("faqs", {"v": 1})

        with self._failing_query():
            with self.assertLogs("sitecms.persistence.bridge", level="ERROR"):
                self.assertIsNone(bridge.last_modified("faqs"))


class FileBackendAppTests(AppTestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        from sitecms.config import TestingConfig

        class FileConfig(TestingConfig):
            SETTINGS_BACKEND = "file"
            SETTINGS_FILE_PATH = os.path.join(tmp.name, "settings.json")

        from sitecms.config import config_by_name
        config_by_name["testing-file"] = FileConfig
        self.addCleanup(config_by_name.pop, "testing-file")
        self.config_name = "testing-file"
        super().setUp()

    def test_bridge_uses_file_store(self):
        self.assertIsInstance(get_bridge().store, JsonFileStore)

    def test_api_writes_to_file(self):
        response = self.client.post(
            "/api/v1/documents/faqs/sections/faqs/lists/items/items",
            headers=self.auth_headers(),
        )
        self.assertEqual(response.status_code, 201)
        stored = get_bridge().load("faqs")
        self.assertEqual(len(stored["faqs"]["items"]), 3)


if __name__ == "__main__":
    unittest.main()
