from __future__ import annotations

from unittest import mock

from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase

from kaloltsavam.apps.results.exceptions import StoreReadError, StoreWriteError
from kaloltsavam.apps.results.models import Result
from kaloltsavam.apps.results.query import ResultQuery, search_results
from kaloltsavam.apps.results.store import create_result, delete_result, update_result


def mk(pid, name, event, rank=None, category="LP", **extra):
    return Result.objects.create(
        participant_id=pid, participant_name=name, event=event, rank=rank, category=category, **extra
    )


class ResultQueryParamsTest(SimpleTestCase):
    def test_blank_params_are_absent(self):
        q = ResultQuery.from_params({"search": "  ", "event": "", "category": "UP "})
        self.assertEqual(q, ResultQuery(search=None, event=None, category="UP"))
        self.assertFalse(q.is_empty)

    def test_q_is_an_alias_for_search(self):
        self.assertEqual(ResultQuery.from_params({"q": "bk1"}).search, "bk1")
        self.assertTrue(ResultQuery.from_params({}).is_empty)


class SearchResultsTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.quiz_3 = mk("P10", "Abel", "Bible Quiz", rank=3)
        cls.quiz_none = mk("P11", "Merin", "Bible Quiz", rank=None)
        cls.quiz_1 = mk("P12", "Ruth", "Bible Quiz", rank=1, category="UP")
        cls.reading_none = mk("P20", "Sara", "Bible Reading", rank=None)
        cls.reading_2 = mk("P1234", "Joel", "Bible Reading", rank=2)
        cls.reading_name = mk("P30", "Anna p1234 Thomas", "Bible Reading", rank=1)

    def test_no_filters_sorted_by_event_then_rank_nulls_last(self):
        results = search_results(ResultQuery())
        self.assertEqual(
            [r.pk for r in results],
            [
                self.quiz_1.pk, self.quiz_3.pk, self.quiz_none.pk,
                self.reading_name.pk, self.reading_2.pk, self.reading_none.pk,
            ],
        )

    def test_search_matches_id_or_name_case_insensitive(self):
        results = search_results(ResultQuery(search="P1234"))
        self.assertEqual({r.pk for r in results}, {self.reading_2.pk, self.reading_name.pk})

    def test_search_is_substring(self):
        results = search_results(ResultQuery(search="ERIN"))
        self.assertEqual([r.pk for r in results], [self.quiz_none.pk])

    def test_event_and_category_are_exact_and_conjunctive(self):
        results = search_results(ResultQuery(event="Bible Quiz", category="LP"))
        self.assertEqual([r.pk for r in results], [self.quiz_3.pk, self.quiz_none.pk])
        self.assertEqual(search_results(ResultQuery(event="Bible")), [])

    def test_all_filters_combined(self):
        results = search_results(ResultQuery(search="p1", event="Bible Quiz", category="UP"))
        self.assertEqual([r.pk for r in results], [self.quiz_1.pk])

    def test_no_match_is_empty_list(self):
        self.assertEqual(search_results(ResultQuery(search="zzz")), [])

    def test_store_failure_raises_read_error(self):
        with mock.patch("kaloltsavam.apps.results.store.Result.objects.all", side_effect=DatabaseError("boom")):
            with self.assertRaises(StoreReadError):
                search_results(ResultQuery())


class StoreWriteTest(TestCase):
    def test_create_ignores_unknown_fields(self):
        r = create_result({"participant_id": "P1", "participant_name": "A", "event": "E", "bogus": 1})
        self.assertEqual(Result.objects.get(pk=r.pk).participant_id, "P1")

    def test_update_and_delete(self):
        r = mk("P1", "A", "E", rank=1)
        update_result(r.pk, {"rank": 4, "points": 40})
        r.refresh_from_db()
        self.assertEqual((r.rank, r.points), (4, 40))
        delete_result(r.pk)
        self.assertFalse(Result.objects.filter(pk=r.pk).exists())

    def test_missing_record_is_write_error(self):
        with self.assertRaises(StoreWriteError):
            update_result(999999, {"rank": 1})
        with self.assertRaises(StoreWriteError):
            delete_result(999999)
