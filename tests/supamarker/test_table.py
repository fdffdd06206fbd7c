"""Tests for the posts table client (mocked HTTP)."""

import pytest

from src.supamarker.errors import (
    MetadataDeleteError,
    MetadataQueryError,
    MetadataUpsertError,
)
from src.supamarker.models import PostRow
from src.supamarker.table import PostsTable


class TestTableUpsert:
    def test_upsert_payload(self, config, session, make_response):
        session.post.return_value = make_response(201, text="")
        table = PostsTable(config, session=session)

        table.upsert(PostRow(slug="hello", title="Hello", summary="", tags=["a"]))

        args, kwargs = session.post.call_args
        assert args[0] == "https://test.supabase.co/rest/v1/posts"
        assert kwargs["json"] == [
            {"slug": "hello", "title": "Hello", "summary": "", "tags": ["a"]}
        ]
        assert kwargs["headers"] == {"Prefer": "resolution=merge-duplicates"}

    def test_upsert_failure(self, config, session, make_response):
        session.post.return_value = make_response(409, text="conflict")
        table = PostsTable(config, session=session)
        with pytest.raises(MetadataUpsertError) as exc_info:
            table.upsert(PostRow(slug="s", title="t"))
        assert exc_info.value.status == 409
        assert exc_info.value.body == "conflict"


class TestTableExists:
    def test_exists_query(self, config, session, make_response):
        session.get.return_value = make_response(200, [{"slug": "hello"}])
        table = PostsTable(config, session=session)

        assert table.exists("hello") is True
        args, kwargs = session.get.call_args
        assert args[0] == "https://test.supabase.co/rest/v1/posts"
        assert kwargs["params"] == {"slug": "eq.hello", "select": "slug"}

    def test_empty_result(self, config, session, make_response):
        session.get.return_value = make_response(200, [])
        table = PostsTable(config, session=session)
        assert table.exists("hello") is False

    def test_query_failure(self, config, session, make_response):
        session.get.return_value = make_response(401, text="bad key")
        table = PostsTable(config, session=session)
        with pytest.raises(MetadataQueryError):
            table.exists("hello")


class TestTableDelete:
    def test_delete_filter(self, config, session, make_response):
        session.delete.return_value = make_response(204)
        table = PostsTable(config, session=session)
        table.delete("hello")
        args, kwargs = session.delete.call_args
        assert args[0] == "https://test.supabase.co/rest/v1/posts"
        assert kwargs["params"] == {"slug": "eq.hello"}

    def test_delete_failure(self, config, session, make_response):
        session.delete.return_value = make_response(500, text="db down")
        table = PostsTable(config, session=session)
        with pytest.raises(MetadataDeleteError):
            table.delete("hello")


class TestTableList:
    def test_list_slugs(self, config, session, make_response):
        session.get.return_value = make_response(200, [{"slug": "b"}, {"slug": "c.md"}])
        table = PostsTable(config, session=session)

        assert table.list_slugs() == ["b", "c"]
        assert session.get.call_args.kwargs["params"] == {"select": "slug"}

    def test_custom_table_name(self, config, session, make_response):
        config.table = "articles"
        session.get.return_value = make_response(200, [])
        table = PostsTable(config, session=session)
        table.list_slugs()
        assert session.get.call_args.args[0].endswith("/rest/v1/articles")

    def test_row_without_slug(self, config, session, make_response):
        session.get.return_value = make_response(200, [{"title": "x"}])
        table = PostsTable(config, session=session)
        with pytest.raises(MetadataQueryError) as exc_info:
            table.list_slugs()
        assert exc_info.value.status == 200

    def test_exists_with_malformed_row(self, config, session, make_response):
        session.get.return_value = make_response(200, [{"title": "x"}])
        table = PostsTable(config, session=session)
        with pytest.raises(MetadataQueryError):
            table.exists("hello")
