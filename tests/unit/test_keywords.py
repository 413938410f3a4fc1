"""
Unit tests for field qualification strategies.
"""
import pytest

from filedb.keywords import FullKeywords, PartialKeywords, PlainKeywords, make_keywords

NESTED = ["users", "u1", "posts"]


@pytest.mark.unit
class TestKeywordStrategies:
    """Tests for none / partial / full qualification."""

    def test_none_returns_base_names(self):
        kw = make_keywords("none")

        assert kw.id_field(NESTED) == "id"
        assert kw.created_at_field(NESTED) == "created_at"
        assert kw.updated_at_field(NESTED) == "updated_at"

    def test_partial_qualifies_with_last_name(self):
        kw = make_keywords("partial")

        assert kw.id_field(NESTED) == "posts/id"
        assert kw.updated_at_field(NESTED) == "posts/updated_at"

    def test_full_qualifies_with_all_names(self):
        kw = make_keywords("full")

        assert kw.id_field(NESTED) == "users.posts/id"
        assert kw.created_at_field(NESTED) == "users.posts/created_at"

    def test_scalar_collection(self):
        assert make_keywords("partial").id_field("users") == "users/id"
        assert make_keywords("full").id_field("users") == "users/id"

    def test_custom_base_names(self):
        kw = make_keywords("partial", id="_id", created_at="_created", updated_at="_updated")

        assert kw.id_field("t") == "t/_id"
        assert kw.created_at_field("t") == "t/_created"
        assert kw.updated_at_field("t") == "t/_updated"

    def test_factory_picks_implementation(self):
        assert isinstance(make_keywords("none"), PlainKeywords)
        assert isinstance(make_keywords("partial"), PartialKeywords)
        assert isinstance(make_keywords("full"), FullKeywords)

    def test_unknown_mode_fails_fast(self):
        with pytest.raises(ValueError, match="Unknown qualification mode"):
            make_keywords("sideways")
