"""Tests for the ActiveRecord base class."""

from dataclasses import dataclass
from typing import Optional

import pytest

from recordkit import ActiveRecord, Record, UsageError


@dataclass
class Article(ActiveRecord):
    id: Optional[int] = None
    title: str = ""
    viewCount: int = 0


class TestActiveRecord:
    """Entity level shortcuts over Record."""

    def test_save_and_find(self, sqlite_db):
        key = Article(title="hello", viewCount=3).save()

        article = Article.find_by_id(key.as_int())

        assert article == Article(id=1, title="hello", viewCount=3)

    def test_query_returns_fresh_record(self, sqlite_db):
        Article(title="a", viewCount=1).save()
        Article(title="b", viewCount=10).save()

        query = Article.query()

        assert isinstance(query, Record)
        assert [a.title for a in query.where("view_count > ?", 5).all()] == ["b"]
        assert Article.count_all() == 2
        assert [a.title for a in Article.find_all()] == ["a", "b"]

    def test_update_writes_all_fields_by_pk(self, fake_db):
        fake_db.rowcount = 1

        affected = Article(id=4, title="renamed", viewCount=9).update()

        assert affected == 1
        assert fake_db.last_statement == (
            "UPDATE articles SET title = ?, view_count = ? WHERE id = ?",
            ("renamed", 9, 4),
        )

    def test_update_round_trip(self, sqlite_db):
        key = Article(title="draft").save()
        article = Article.find_by_id(key.as_int())
        article.title = "published"

        article.update()

        assert Article.find_by_id(key.as_int()).title == "published"

    def test_delete(self, sqlite_db):
        key = Article(title="gone").save()

        assert Article.find_by_id(key.as_int()).delete() == 1
        assert Article.count_all() == 0

    @pytest.mark.parametrize("operation", ["update", "delete"])
    def test_missing_primary_key(self, fake_db, operation):
        with pytest.raises(UsageError, match="no primary key"):
            getattr(Article(title="new"), operation)()

        assert fake_db.executed == []
