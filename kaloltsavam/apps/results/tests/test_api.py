from __future__ import annotations

from unittest import mock

from django.test import Client, TestCase, override_settings

from kaloltsavam.apps.results.exceptions import StoreReadError
from kaloltsavam.apps.results.models import Result

URL = "/api/results/"


class ResultsEndpointTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        Result.objects.create(participant_id="P2", participant_name="Bob", event="B Event", rank=None, category="UP")
        Result.objects.create(participant_id="P1", participant_name="Alice", event="B Event", rank=1, category="LP")
        Result.objects.create(participant_id="P3", participant_name="Cara", event="A Event", rank=5, category="LP")

    def setUp(self):
        self.client = Client()

    @override_settings(RESULTS_API_KEY="")
    def test_get_returns_sorted_results_with_cors(self):
        r = self.client.get(URL)
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r["Access-Control-Allow-Origin"], "*")
        body = r.json()
        self.assertEqual([x["participant_id"] for x in body["results"]], ["P3", "P1", "P2"])
        self.assertIsNone(body["results"][2]["rank"])
        self.assertEqual(
            set(body["results"][0]),
            {"id", "participant_id", "participant_name", "event", "category", "time", "rank", "points", "status", "created_at", "updated_at"},
        )

    @override_settings(RESULTS_API_KEY="")
    def test_filters(self):
        r = self.client.get(URL, {"search": "ali", "event": "B Event", "category": "LP"})
        self.assertEqual([x["participant_id"] for x in r.json()["results"]], ["P1"])

        r = self.client.get(URL, {"search": "nobody"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"results": []})

    @override_settings(RESULTS_API_KEY="")
    def test_seq_is_echoed(self):
        r = self.client.get(URL, {"seq": "7"})
        self.assertEqual(r.json()["seq"], "7")

    def test_options_preflight(self):
        r = self.client.options(URL)
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r["Access-Control-Allow-Origin"], "*")
        self.assertIn("apikey", r["Access-Control-Allow-Headers"])

    @override_settings(RESULTS_API_KEY="secret")
    def test_api_key_required_when_configured(self):
        r = self.client.get(URL)
        self.assertEqual(r.status_code, 401)
        self.assertIn("error", r.json())

        r = self.client.get(URL, HTTP_APIKEY="wrong")
        self.assertEqual(r.status_code, 401)

        r = self.client.get(URL, HTTP_APIKEY="secret")
        self.assertEqual(r.status_code, 200)

        r = self.client.get(URL, HTTP_AUTHORIZATION="Bearer secret")
        self.assertEqual(r.status_code, 200)

    @override_settings(RESULTS_API_KEY="")
    def test_store_failure_is_400(self):
        with mock.patch(
            "kaloltsavam.apps.results.api.search_results",
            side_effect=StoreReadError("Could not fetch results. Please try again."),
        ):
            r = self.client.get(URL)
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json(), {"error": "Could not fetch results. Please try again."})
        self.assertEqual(r["Access-Control-Allow-Origin"], "*")

    @override_settings(RESULTS_API_KEY="")
    def test_unexpected_failure_is_500(self):
        with mock.patch("kaloltsavam.apps.results.api.search_results", side_effect=RuntimeError("kaboom")):
            r = self.client.get(URL)
        self.assertEqual(r.status_code, 500)
        # Sin detalles internos
        self.assertNotIn("kaboom", r.json()["error"])

    def test_post_not_allowed(self):
        r = self.client.post(URL)
        self.assertEqual(r.status_code, 405)

    def test_health(self):
        r = self.client.get("/api/health/")
        self.assertEqual(r.json(), {"ok": True})
