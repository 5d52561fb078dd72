import logging
import sys
import unittest
from pathlib import Path

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))
if str(PROJECT_ROOT / "tests") not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT / "tests"))

import requests  # noqa: E402

from fakes import FakeResponse, QueueSession  # noqa: E402
from nntags.client import WebApi  # noqa: E402
from nntags.context import RelationshipContext  # noqa: E402
from nntags.errors import HttpFailure  # noqa: E402


logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stdout,
    force=True,
)

BASE = "https://org.example.com/api/data/v9.1"


def make_context():
    return RelationshipContext(
        entity_logical_name="account",
        entity_set_name="accounts",
        entity_id="{AAAA-1}",
        relationship_name="new_account_tag",
        related_logical_name="new_tag",
        related_set_name="new_tags",
    )


class RelationshipsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.context = make_context()

    def _api(self, *responses):
        session = QueueSession(*responses)
        return WebApi(client_url="https://org.example.com", session=session), session

    def test_create_link_posts_reference(self):
        api, session = self._api(FakeResponse(status_code=204, content=b""))
        api.relationships.create_link(self.context, "{T1}")
        method, url, params, json, _headers, _timeout = session.calls[0]
        self.assertEqual(method, "POST")
        self.assertEqual(url, f"{BASE}/accounts(aaaa-1)/new_account_tag/$ref")
        self.assertIsNone(params)
        self.assertEqual(json, {"@odata.id": f"{BASE}/new_tags(t1)"})

    def test_create_link_accepts_1223(self):
        api, _session = self._api(FakeResponse(status_code=1223, content=b""))
        self.assertIsNone(api.relationships.create_link(self.context, "t1"))

    def test_create_link_failure_raises(self):
        api, _session = self._api(FakeResponse(status_code=400, reason="Bad Request", json_payload={}))
        with self.assertRaises(HttpFailure) as ctx:
            api.relationships.create_link(self.context, "t1")
        self.assertEqual(ctx.exception.status, 400)

    def test_create_link_transport_failure_raises(self):
        api, _session = self._api(requests.ConnectionError("offline"))
        with self.assertRaises(HttpFailure) as ctx:
            api.relationships.create_link(self.context, "t1")
        self.assertIsNone(ctx.exception.status)

    def test_create_link_invalid_id(self):
        api, session = self._api()
        with self.assertRaises(ValueError):
            api.relationships.create_link(self.context, "  ")
        self.assertEqual(session.calls, [])

    def test_remove_link_deletes_member_reference(self):
        api, session = self._api(FakeResponse(status_code=204, content=b""))
        api.relationships.remove_link(self.context, "T2")
        method, url, _params, json, _headers, _timeout = session.calls[0]
        self.assertEqual(method, "DELETE")
        self.assertEqual(url, f"{BASE}/accounts(aaaa-1)/new_account_tag(t2)/$ref")
        self.assertIsNone(json)

    def test_remove_link_not_found_raises(self):
        api, _session = self._api(FakeResponse(status_code=404, reason="Not Found", json_payload={}))
        with self.assertRaises(HttpFailure) as ctx:
            api.relationships.remove_link(self.context, "t2")
        self.assertEqual(ctx.exception.message, "404 Not Found")

    def test_remove_link_invalid_id(self):
        api, _session = self._api()
        with self.assertRaises(ValueError):
            api.relationships.remove_link(self.context, None)  # type: ignore[arg-type]

    def test_list_linked_ids_queries_relationship(self):
        api, session = self._api(
            FakeResponse(json_payload={"value": [{"new_tagid": "{R7}"}, {"new_tagid": "r9"}]})
        )
        self.assertEqual(api.relationships.list_linked_ids(self.context), {"r7", "r9"})
        method, url, params, _json, _headers, _timeout = session.calls[0]
        self.assertEqual(method, "GET")
        self.assertEqual(url, f"{BASE}/new_account_tag")
        self.assertEqual(params, {"$select": "new_tagid", "$filter": "accountid eq aaaa-1"})

    def test_list_linked_ids_follows_next_link(self):
        next_link = f"{BASE}/new_account_tag?$skiptoken=2"
        api, session = self._api(
            FakeResponse(json_payload={"value": [{"new_tagid": "r1"}], "@odata.nextLink": next_link}),
            FakeResponse(json_payload={"value": [{"new_tagid": "r2"}]}),
        )
        self.assertEqual(api.relationships.list_linked_ids(self.context), {"r1", "r2"})
        self.assertEqual(session.calls[1][1], next_link)
        self.assertIsNone(session.calls[1][2])

    def test_list_linked_ids_skips_entities_without_id(self):
        api, _session = self._api(
            FakeResponse(json_payload={"value": [{"other": 1}, "junk", {"new_tagid": "r3"}]})
        )
        self.assertEqual(api.relationships.list_linked_ids(self.context), {"r3"})

    def test_list_linked_ids_empty(self):
        api, _session = self._api(FakeResponse(json_payload={"value": []}))
        self.assertEqual(api.relationships.list_linked_ids(self.context), set())

    def test_list_linked_ids_unexpected_payload(self):
        api, _session = self._api(FakeResponse(json_payload={"data": []}))
        with self.assertRaises(HttpFailure):
            api.relationships.list_linked_ids(self.context)

    def test_list_linked_ids_failure(self):
        api, _session = self._api(FakeResponse(status_code=500, reason="Server Error", json_payload={}))
        with self.assertRaises(HttpFailure):
            api.relationships.list_linked_ids(self.context)


if __name__ == "__main__":
    unittest.main()
