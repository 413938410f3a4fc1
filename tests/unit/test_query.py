"""
Unit tests for the query pipeline and get_by_key.
"""
import pytest

from filedb.query import all_of, kv_eq, run_query

DOCS = [
    {"id": 1, "name": "c", "age": 30, "role": "admin"},
    {"id": 2, "name": "a", "age": 20, "role": "user"},
    {"id": 3, "name": "b", "age": 40, "role": "user"},
    {"id": 4, "name": "d", "role": "user"},
]


@pytest.mark.unit
class TestRunQuery:
    """Tests for where / order_by / offset / limit."""

    def test_no_options_returns_everything(self):
        assert run_query(DOCS) == DOCS

    def test_where(self):
        assert [d["id"] for d in run_query(DOCS, where=kv_eq("role", "user"))] == [2, 3, 4]

    def test_order_by_field_name_is_ascending(self):
        assert [d["name"] for d in run_query(DOCS, order_by="name")] == ["a", "b", "c", "d"]

    def test_order_by_desc(self):
        assert [d["name"] for d in run_query(DOCS, order_by=("name", "desc"))] == ["d", "c", "b", "a"]

    def test_missing_values_sort_first(self):
        assert [d["id"] for d in run_query(DOCS, order_by=("age", "asc"))] == [4, 2, 1, 3]

    def test_unknown_direction(self):
        with pytest.raises(ValueError, match="sort direction"):
            run_query(DOCS, order_by=("name", "sideways"))

    def test_offset_and_limit(self):
        result = run_query(DOCS, order_by="id", offset=1, limit=2)

        assert [d["id"] for d in result] == [2, 3]

    def test_negative_offset(self):
        with pytest.raises(ValueError):
            run_query(DOCS, offset=-1)

    def test_negative_limit(self):
        with pytest.raises(ValueError, match="limit must be non-negative"):
            run_query(DOCS, limit=-1)

    def test_limit_zero_returns_empty_list(self):
        assert run_query(DOCS, limit=0) == []

    def test_limit_one_returns_document(self):
        assert run_query(DOCS, order_by="id", limit=1) == DOCS[0]

    def test_limit_one_without_match_returns_none(self):
        assert run_query(DOCS, where=kv_eq("role", "nobody"), limit=1) is None

    def test_limit_two_returns_list(self):
        result = run_query(DOCS, limit=2)

        assert isinstance(result, list)
        assert len(result) == 2

    def test_pipeline_order(self):
        # filter, then sort, then offset, then limit
        result = run_query(
            DOCS,
            where=kv_eq("role", "user"),
            order_by=("name", "desc"),
            offset=1,
            limit=5,
        )

        assert [d["name"] for d in result] == ["b", "a"]


@pytest.mark.unit
class TestPredicates:

    def test_kv_eq_missing_field_never_matches(self):
        assert kv_eq("age", None)({"id": 1}) is False
        assert kv_eq("age", None)({"age": None}) is True

    def test_all_of(self):
        pred = all_of(kv_eq("role", "user"), lambda d: d.get("age", 0) > 25)

        assert [d["id"] for d in DOCS if pred(d)] == [3]


@pytest.mark.unit
class TestFileDBQuery:
    """Tests for FileDB.query and FileDB.get_by_key."""

    @pytest.fixture
    def people(self, db):
        for doc in DOCS:
            db.insert("people", doc)
        return db

    def test_query(self, people):
        result = people.query("people", where=lambda d: d.get("age", 0) >= 30, order_by="age")

        assert [d["id"] for d in result] == [1, 3]

    def test_query_limit_one(self, people):
        assert people.query("people", order_by=("age", "desc"), limit=1)["id"] == 3

    def test_get_by_key_returns_list(self, people):
        result = people.get_by_key("people", "role", "user")

        assert isinstance(result, list)
        assert sorted(d["id"] for d in result) == [2, 3, 4]

    def test_get_by_key_ands_pairs(self, people):
        result = people.get_by_key("people", "role", "user", "name", "b")

        assert [d["id"] for d in result] == [3]

    def test_get_by_key_with_kwargs(self, people):
        assert people.get_by_key("people", "name", "a", limit=1)["id"] == 2

    def test_get_by_key_trailing_options_mapping(self, people):
        result = people.get_by_key("people", "role", "user", {"order_by": ("name", "desc"), "limit": 2})

        assert [d["name"] for d in result] == ["d", "b"]

    def test_get_by_key_extra_where(self, people):
        result = people.get_by_key("people", "role", "user", where=lambda d: "age" in d, order_by="age")

        assert [d["id"] for d in result] == [2, 3]

    def test_get_by_key_dangling_field(self, people):
        with pytest.raises(ValueError, match="field/value pairs"):
            people.get_by_key("people", "role", "user", "name")
