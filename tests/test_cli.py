"""Tests for the checknote CLI."""

import json
import os
import tempfile
import unittest
from unittest.mock import patch

from fakes import FakeStore, make_store
from typer.testing import CliRunner

from checknote.cli.main import app
from checknote.cli.utils import config
from checknote.services.notes import SaveNoteRequest

URL = ["--url", "https://example.com/api"]


class CapitalizingStore(FakeStore):
    """Store that rewrites item names on save, as a normalizing backend would."""

    def save(self, request):
        if request.body:
            lines = [line[:1].upper() + line[1:] for line in request.body.split("\n")]
            request = request.model_copy(update={"body": "\n".join(lines)})
        return super().save(request)


class CliTestCase(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        path_patch = patch.object(
            config, "config_path", os.path.join(self.tmp.name, "config.json")
        )
        path_patch.start()
        self.addCleanup(path_patch.stop)
        env_patch = patch.dict(os.environ)
        env_patch.start()
        self.addCleanup(env_patch.stop)
        for key in (config.ENV_URL, config.ENV_NOTE_ID, config.ENV_AUTHOR):
            os.environ.pop(key, None)

    def use_store(self, store):
        store_patch = patch.object(config, "get_store", return_value=store)
        self.get_store = store_patch.start()
        self.addCleanup(store_patch.stop)
        return store

    def items(self, *args, **kwargs):
        return self.runner.invoke(app, ["items", *URL, *args], **kwargs)


class ItemsCommandTest(CliTestCase):
    """Tests for `checknote items`."""

    def setUp(self):
        super().setUp()
        self.store = self.use_store(make_store())

    def body(self):
        return self.store.get().body

    def test_show(self):
        result = self.items("show")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Groceries", result.output)
        self.assertIn("milk", result.output)
        self.assertIn("eggs", result.output)

    def test_show_search(self):
        result = self.items("show", "--search", "mlk")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("milk", result.output)
        self.assertNotIn("eggs", result.output)

    def test_show_search_without_match_lists_everything(self):
        result = self.items("show", "--search", "zzzzzz")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("No matches", result.output)
        self.assertIn("eggs", result.output)

    def test_add(self):
        result = self.items("add", "bread")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.body(), "bread\to\nmilk\to\neggs\tx")

    def test_check(self):
        result = self.items("check", "1")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.body(), "milk\tx\neggs\tx")

    def test_check_reports_state_when_refetch_renames_items(self):
        note = make_store().get()
        self.use_store(CapitalizingStore([note], default_note_id="n1"))
        result = self.items("check", "1")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("milk", result.output)
        self.assertIn("checked", result.output)
        self.assertNotIn("unchecked", result.output)
        self.assertEqual(self.get_store.return_value.get().body, "Milk\tx\neggs\tx")

    def test_uncheck(self):
        result = self.items("check", "2")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("unchecked", result.output)
        self.assertEqual(self.body(), "milk\to\neggs\to")

    def test_check_out_of_range(self):
        result = self.items("check", "5")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No item at position 5", result.output)
        self.assertEqual(self.store.saves, [])

    def test_edit(self):
        result = self.items("edit", "1", "oat milk")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.body(), "oat milk\to\neggs\tx")

    def test_edit_checked_item_refused(self):
        result = self.items("edit", "2", "spam")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Uncheck the item", result.output)
        self.assertEqual(self.store.saves, [])

    def test_delete_force(self):
        result = self.items("delete", "1", "--force")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.body(), "eggs\tx")

    def test_delete_cancelled(self):
        result = self.items("delete", "1", input="n\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Deletion cancelled", result.output)
        self.assertEqual(self.store.saves, [])

    def test_move(self):
        self.store.save(
            SaveNoteRequest(id="n1", title="= Groceries", body="a\to\nb\to", author="me")
        )
        result = self.items("move", "2", "1")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.body(), "b\to\na\to")

    def test_dupes(self):
        result = self.items("dupes")
        self.assertIn("No duplicates", result.output)

    def test_save_failure(self):
        self.store.fail_saves = True
        result = self.items("add", "bread")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Save failed", result.output)
        self.assertEqual(self.body(), "milk\to\neggs\tx")


class ItemsErrorTest(CliTestCase):
    def test_note_not_found(self):
        self.use_store(FakeStore(default_note_id="missing"))
        result = self.items("show")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Note not found", result.output)

    def test_duplicates_listed(self):
        self.use_store(make_store("a\to\na\tx\nb\to"))
        result = self.items("dupes")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("- a", result.output)

    def test_missing_url(self):
        self.use_store(make_store())
        result = self.runner.invoke(app, ["items", "show"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No notes URL configured", result.output)

    def test_options_resolve_into_store_config(self):
        self.use_store(make_store())
        os.environ[config.ENV_NOTE_ID] = "from-env"
        result = self.runner.invoke(app, ["items", *URL, "--author", "bob", "show"])
        self.assertEqual(result.exit_code, 0, result.output)
        store_config = self.get_store.call_args.args[0]
        self.assertEqual(store_config.base_url, "https://example.com/api")
        self.assertEqual(store_config.note_id, "from-env")
        self.assertEqual(store_config.author, "bob")


class ConfigCommandTest(CliTestCase):
    """Tests for `checknote config`."""

    def test_set_and_show(self):
        result = self.runner.invoke(
            app, ["config", "set", "--url", "https://example.com", "--note-id", "n1"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        with open(config.config_path, encoding="utf-8") as f:
            self.assertEqual(
                json.load(f), {"url": "https://example.com", "note_id": "n1"}
            )
        result = self.runner.invoke(app, ["config", "show"])
        self.assertIn("https://example.com", result.output)

    def test_set_nothing(self):
        result = self.runner.invoke(app, ["config", "set"])
        self.assertIn("No updates specified", result.output)

    def test_saved_url_is_used(self):
        config.save_config({"url": "https://saved.example.com", "note_id": "n1"})
        store_config = config.resolve_store_config()
        self.assertEqual(store_config.base_url, "https://saved.example.com")
        self.assertEqual(store_config.note_id, "n1")


if __name__ == "__main__":
    unittest.main()
