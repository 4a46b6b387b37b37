from __future__ import annotations

import os
import tempfile
import unittest
from unittest import mock

from sitecms.application.document_editor import DocumentEditor, load_document
from sitecms.application.list_editor import DeleteNotConfirmed, ListEditor
from sitecms.domain.documents import DOCUMENTS, FAQS_KEY, SITE_SETTINGS_KEY
from sitecms.domain.record_kinds import STAT
from sitecms.domain.sections import SectionContainer, SectionSchema, with_field, with_list
from sitecms.persistence.bridge import PersistenceBridge, PersistenceError
from sitecms.persistence.stores import JsonFileStore, StorageError

STATS_SCHEMA = SectionSchema(key="stats", label="Stats", lists={"stats": STAT})


def _stats_settings():
    return {
        "enabled": True,
        "title": "Numbers",
        "stats": [
            {"id": "s1", "order": 1, "label": "One", "count": "1", "icon_class": "x"},
            {"id": "s2", "order": 2, "label": "Two", "count": "2", "icon_class": "x"},
            {"id": "s3", "order": 3, "label": "Three", "count": "3", "icon_class": "x"},
        ],
    }


class SectionContainerTests(unittest.TestCase):
    def test_with_field_preserves_other_keys(self):
        settings = _stats_settings()
        updated = with_field(settings, "title", "")
        self.assertEqual(updated["title"], "")
        self.assertIs(updated["stats"], settings["stats"])
        self.assertEqual(settings["title"], "Numbers")

    def test_with_list_replaces_only_that_list(self):
        settings = _stats_settings()
        updated = with_list(settings, "stats", [])
        self.assertEqual(updated["stats"], [])
        self.assertEqual(updated["title"], "Numbers")

    def test_on_change_replaces_wholesale_and_forwards(self):
        received = []
        container = SectionContainer(STATS_SCHEMA, _stats_settings(), on_change=received.append)
        replacement = {"enabled": False, "stats": []}

        container.on_change(replacement)

        self.assertIs(container.settings, replacement)
        self.assertEqual(received, [replacement])
        self.assertNotIn("title", container.settings)

    def test_set_field(self):
        container = SectionContainer(STATS_SCHEMA, _stats_settings())
        container.set_field("enabled", False)
        self.assertFalse(container.enabled)

    def test_initial_documents_have_every_section(self):
        for schema in DOCUMENTS.values():
            document = schema.initial_document()
            self.assertEqual(set(document), set(schema.sections))
            for section_key, section_schema in schema.sections.items():
                self.assertIn("enabled", document[section_key])
                for list_name in section_schema.lists:
                    self.assertIsInstance(document[section_key][list_name], list)


class ListEditorTests(unittest.TestCase):
    def setUp(self):
        self.changes = []
        self.container = SectionContainer(STATS_SCHEMA, _stats_settings(), on_change=self.changes.append)
        self.editor = ListEditor(self.container, "stats", STAT)

    def test_toggle_keeps_one_item_expanded(self):
        self.editor.toggle("s1")
        self.assertEqual(self.editor.expanded_id, "s1")
        self.editor.toggle("s2")
        self.assertEqual(self.editor.expanded_id, "s2")
        self.editor.toggle("s2")
        self.assertIsNone(self.editor.expanded_id)
        self.editor.toggle("s1")
        self.editor.collapse()
        self.assertIsNone(self.editor.expanded_id)

    def test_add_expands_new_record(self):
        new_id = self.editor.add()
        self.assertEqual(self.editor.expanded_id, new_id)
        self.assertEqual(len(self.changes), 1)
        self.assertEqual(self.changes[0]["stats"][-1]["order"], 4)
        self.assertEqual(self.changes[0]["title"], "Numbers")

    def test_update_field_sends_full_settings(self):
        self.editor.update_field("s2", "label", "Deux")
        latest = self.changes[-1]
        self.assertEqual(latest["stats"][1]["label"], "Deux")
        self.assertEqual(latest["enabled"], True)

    def test_move_record(self):
        self.assertTrue(self.editor.move_record("s3", "up"))
        ids = [r["id"] for r in self.editor.sorted_records()]
        self.assertEqual(ids, ["s1", "s3", "s2"])

    def test_boundary_move_does_not_emit_change(self):
        self.assertFalse(self.editor.move(0, "up"))
        self.assertFalse(self.editor.move_record("s3", "down"))
        self.assertFalse(self.editor.move_record("missing", "up"))
        self.assertEqual(self.changes, [])

    def test_delete_needs_request_first(self):
        with self.assertRaises(DeleteNotConfirmed):
            self.editor.confirm_delete("s1")
        self.assertEqual(self.changes, [])

    def test_two_phase_delete(self):
        self.editor.toggle("s1")
        self.assertTrue(self.editor.request_delete("s1"))
        self.editor.confirm_delete("s1")

        self.assertEqual([r["id"] for r in self.editor.records], ["s2", "s3"])
        self.assertIsNone(self.editor.expanded_id)
        self.assertIsNone(self.editor.pending_delete_id)

    def test_confirm_for_other_record_fails(self):
        self.editor.request_delete("s1")
        with self.assertRaises(DeleteNotConfirmed):
            self.editor.confirm_delete("s2")

    def test_cancel_delete(self):
        self.editor.request_delete("s1")
        self.editor.cancel_delete()
        with self.assertRaises(DeleteNotConfirmed):
            self.editor.confirm_delete("s1")

    def test_request_delete_unknown_record(self):
        self.assertFalse(self.editor.request_delete("nope"))
        self.assertIsNone(self.editor.pending_delete_id)

    def test_rows_flags(self):
        self.editor.toggle("s2")
        rows = self.editor.rows()
        self.assertEqual([row["record"]["id"] for row in rows], ["s1", "s2", "s3"])
        self.assertFalse(rows[0]["can_move_up"])
        self.assertTrue(rows[0]["can_move_down"])
        self.assertFalse(rows[2]["can_move_down"])
        self.assertTrue(rows[1]["expanded"])
        self.assertEqual(rows[1]["label"], "Two")

    def test_deleting_everything_renders_empty(self):
        for record_id in ("s1", "s2", "s3"):
            self.editor.request_delete(record_id)
            self.editor.confirm_delete(record_id)
        self.assertEqual(self.editor.rows(), [])
        self.editor.add()
        self.assertEqual(self.editor.records[0]["order"], 1)


class DocumentEditorTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.store = JsonFileStore(os.path.join(tmp.name, "settings.json"))
        self.bridge = PersistenceBridge(self.store)

    def test_missing_document_loads_initial(self):
        schema = DOCUMENTS[FAQS_KEY]
        self.assertEqual(load_document(self.bridge, schema), schema.initial_document())

    def test_missing_sections_are_filled_in(self):
        schema = DOCUMENTS[SITE_SETTINGS_KEY]
        self.bridge.save(SITE_SETTINGS_KEY, {"homepageBrandLogos": {"enabled": False, "logos": []}})

        document = load_document(self.bridge, schema)

        self.assertFalse(document["homepageBrandLogos"]["enabled"])
        self.assertIn("homepageProcess", document)

    def test_explicit_save_document(self):
        editor = DocumentEditor(DOCUMENTS[SITE_SETTINGS_KEY], self.bridge)
        editor.list_editor("homepageStatsCounter", "stats").add()

        self.assertTrue(editor.dirty)
        self.assertIsNone(self.store.read(SITE_SETTINGS_KEY))

        editor.save()
        stored = self.bridge.load(SITE_SETTINGS_KEY)
        self.assertEqual(len(stored["homepageStatsCounter"]["stats"]), 4)
        self.assertFalse(editor.dirty)

    def test_autosave_document(self):
        editor = DocumentEditor(DOCUMENTS[FAQS_KEY], self.bridge)
        new_id = editor.list_editor("faqs", "items").add()

        stored = self.bridge.load(FAQS_KEY)
        self.assertIn(new_id, [r["id"] for r in stored["faqs"]["items"]])
        self.assertFalse(editor.dirty)

    def test_failed_save_keeps_in_memory_state(self):
        editor = DocumentEditor(DOCUMENTS[FAQS_KEY], self.bridge)
        items = editor.list_editor("faqs", "items")

        with mock.patch.object(self.store, "write", side_effect=StorageError("disk full")):
            with self.assertRaises(PersistenceError):
                items.update_field("faq-1", "question", "Changed?")

        self.assertEqual(editor.document["faqs"]["items"][0]["question"], "Changed?")
        self.assertTrue(editor.dirty)
        self.assertIsNone(self.store.read(FAQS_KEY))

    def test_reload_discards_unsaved_changes(self):
        editor = DocumentEditor(DOCUMENTS[SITE_SETTINGS_KEY], self.bridge)
        editor.section("homepageProcess").set_field("title", "Draft")
        self.assertTrue(editor.dirty)

        editor.reload()

        self.assertFalse(editor.dirty)
        self.assertEqual(editor.document["homepageProcess"]["title"], "Our process")

    def test_unknown_section_or_list(self):
        editor = DocumentEditor(DOCUMENTS[FAQS_KEY], self.bridge)
        with self.assertRaises(KeyError):
            editor.section("nope")
        with self.assertRaises(KeyError):
            editor.list_editor("faqs", "nope")


if __name__ == "__main__":
    unittest.main()
