import logging
import sys
import types
import unittest
from pathlib import Path

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from nntags.configuration import ControlConfiguration  # noqa: E402
from nntags.tag_state import Tag, TagSet  # noqa: E402
from nntags.tools.tags import alert, choose_tag, confirm_alert  # noqa: E402
from nntags.tools.view import filter_tags, tag_style, visible_columns  # noqa: E402


logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stdout,
    force=True,
)


def _install_fake_inquirer(selections):
    module = types.ModuleType("InquirerPy")
    resolver = types.ModuleType("InquirerPy.resolver")
    calls = {"index": 0, "questions": []}

    def prompt(questions):
        calls["questions"].append(questions)
        value = selections[calls["index"]]
        calls["index"] += 1
        return value

    resolver.prompt = prompt
    module.resolver = resolver
    sys.modules["InquirerPy"] = module
    sys.modules["InquirerPy.resolver"] = resolver
    return calls


def _tags():
    return TagSet(
        [
            Tag(id="a", display_columns=("Alpha", "Red")),
            Tag(id="b", display_columns=("Beta", "Blue"), associated=True),
            Tag(id="c", display_columns=("Gamma", ""), locked=True),
        ]
    )


class ViewTests(unittest.TestCase):
    def test_visible_columns_sorted_and_filtered(self):
        columns = [
            {"name": "code", "order": 2},
            {"name": "hidden", "order": -1},
            {"name": "name", "order": 0},
            {"name": "", "order": 1},
            {"name": "no_order"},
        ]
        self.assertEqual(visible_columns(columns), ["name", "code"])

    def test_visible_columns_empty(self):
        self.assertEqual(visible_columns(None), [])
        self.assertEqual(visible_columns([]), [])

    def test_filter_empty_query_shows_all(self):
        visible, collapsed = filter_tags(_tags(), "")
        self.assertEqual([tag.id for tag in visible], ["a", "b", "c"])
        self.assertEqual(collapsed, [])

    def test_filter_case_insensitive_substring(self):
        visible, collapsed = filter_tags(_tags(), "alp")
        self.assertEqual([tag.id for tag in visible], ["a", "b"])
        self.assertEqual([tag.id for tag in collapsed], ["c"])

    def test_filter_matches_any_column(self):
        visible, _collapsed = filter_tags(_tags(), "RED")
        self.assertIn("a", [tag.id for tag in visible])

    def test_filter_never_collapses_associated(self):
        visible, collapsed = filter_tags(_tags(), "zzz")
        self.assertEqual([tag.id for tag in visible], ["b"])
        self.assertEqual([tag.id for tag in collapsed], ["a", "c"])

    def test_tag_style(self):
        configuration = ControlConfiguration(associated_color="#2fa8ed")
        tags = _tags()
        self.assertEqual(tag_style(tags.get("b"), configuration)["background-color"], "#2fa8ed")
        self.assertEqual(tag_style(tags.get("b"), configuration)["class"], "Associated")
        style = tag_style(tags.get("a"), configuration)
        self.assertEqual(style["background-color"], "")
        self.assertEqual(style["class"], "Unassociated")
        self.assertEqual(style["label"], "Alpha | Red")
        self.assertTrue(tag_style(tags.get("c"), configuration)["busy"])


class ConsoleToolsTests(unittest.TestCase):
    def tearDown(self) -> None:
        sys.modules.pop("InquirerPy", None)
        sys.modules.pop("InquirerPy.resolver", None)

    def test_choose_tag_returns_id(self):
        calls = _install_fake_inquirer([{"selection": ("tag", "b")}])
        self.assertEqual(choose_tag(_tags()), "b")
        question = calls["questions"][0][0]
        self.assertEqual(question["type"], "list")
        names = [choice["name"] for choice in question["choices"]]
        self.assertEqual(names, [" X Done", "[ ] Alpha | Red", "[x] Beta | Blue", "[~] Gamma"])

    def test_choose_tag_fuzzy_when_search_enabled(self):
        calls = _install_fake_inquirer([{"selection": ("done", None)}])
        configuration = ControlConfiguration(enable_search=True)
        self.assertIsNone(choose_tag(_tags(), configuration))
        self.assertEqual(calls["questions"][0][0]["type"], "fuzzy")

    def test_choose_tag_applies_query(self):
        calls = _install_fake_inquirer([{"selection": ("done", None)}])
        choose_tag(_tags(), query="gam")
        values = [choice["value"] for choice in calls["questions"][0][0]["choices"]]
        self.assertEqual(values, [("done", None), ("tag", "b"), ("tag", "c")])

    def test_choose_tag_invalid_result(self):
        _install_fake_inquirer(["cancel"])
        self.assertIsNone(choose_tag(_tags()))
        _install_fake_inquirer([{"selection": "bad"}])
        self.assertIsNone(choose_tag(_tags()))

    def test_confirm_alert_prompts_with_message(self):
        calls = _install_fake_inquirer([{"ok": True}])
        confirm_alert("404 Not Found")
        question = calls["questions"][0][0]
        self.assertEqual(question["type"], "confirm")
        self.assertIn("404 Not Found", question["message"])


class AlertTests(unittest.IsolatedAsyncioTestCase):
    def tearDown(self) -> None:
        sys.modules.pop("InquirerPy", None)
        sys.modules.pop("InquirerPy.resolver", None)

    async def test_alert_runs_prompt(self):
        calls = _install_fake_inquirer([{"ok": True}])
        await alert("boom")
        self.assertEqual(calls["index"], 1)


if __name__ == "__main__":
    unittest.main()
