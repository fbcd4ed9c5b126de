"""Tests for the WordPress REST client."""

from unittest.mock import MagicMock

import pytest
import requests
from requests.exceptions import HTTPError

from markpress.exceptions import MarkpressAuthenticationError, WordPressApiError
from markpress.wordpress.rest import WordPressRestClient


def _response(json_data=None, headers=None, text="{}"):
    response = MagicMock()
    response.json.return_value = json_data
    response.headers = headers or {}
    response.text = text
    return response


def _http_error(status_code, text="error"):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    error = HTTPError(f"{status_code} Error", response=response)
    failing = MagicMock()
    failing.raise_for_status.side_effect = error
    return failing


@pytest.fixture
def client(wordpress_config):
    client = WordPressRestClient(config=wordpress_config)
    client.session = MagicMock()
    return client


class TestInit:
    def test_session_configuration(self, wordpress_config):
        client = WordPressRestClient(config=wordpress_config)

        assert client.base_url == "https://blog.example.com/wp-json/wp/v2"
        assert client.session.auth == ("editor", "abcd efgh ijkl mnop")
        assert client.session.verify is True
        assert client.session.headers["Accept"] == "application/json"
        client.close()


class TestFindAll:
    def test_single_page(self, client):
        client.session.request.return_value = _response(
            [{"id": 1}], headers={"X-WP-TotalPages": "1"}
        )

        records = client.find_all("posts")

        assert records == [{"id": 1}]
        client.session.request.assert_called_once_with(
            "GET",
            "https://blog.example.com/wp-json/wp/v2/posts",
            params={"status": "any", "context": "edit", "per_page": 100, "page": 1},
        )

    def test_follows_total_pages(self, client):
        client.session.request.side_effect = [
            _response([{"id": 1}, {"id": 2}], headers={"X-WP-TotalPages": "3"}),
            _response([{"id": 3}, {"id": 4}], headers={"X-WP-TotalPages": "3"}),
            _response([{"id": 5}], headers={"X-WP-TotalPages": "3"}),
        ]

        records = client.find_all("tags", per_page=2)

        assert [r["id"] for r in records] == [1, 2, 3, 4, 5]
        pages = [c.kwargs["params"]["page"] for c in client.session.request.call_args_list]
        assert pages == [1, 2, 3]

    def test_post_types_include_every_status(self, client):
        client.session.request.return_value = _response([], headers={"X-WP-TotalPages": "1"})

        client.find_all("pages")

        params = client.session.request.call_args.kwargs["params"]
        assert params["status"] == "any"
        assert params["context"] == "edit"

    def test_tags_are_not_filtered_by_status(self, client):
        client.session.request.return_value = _response([], headers={"X-WP-TotalPages": "1"})

        client.find_all("tags")

        client.session.request.assert_called_once_with(
            "GET",
            "https://blog.example.com/wp-json/wp/v2/tags",
            params={"per_page": 100, "page": 1},
        )

    def test_missing_header_means_one_page(self, client):
        client.session.request.return_value = _response([])

        assert client.find_all("posts") == []
        assert client.session.request.call_count == 1


class TestWrites:
    def test_create(self, client):
        client.session.request.return_value = _response({"id": 9})

        assert client.create("posts", {"slug": "a"}) == {"id": 9}
        client.session.request.assert_called_once_with(
            "POST", "https://blog.example.com/wp-json/wp/v2/posts", json={"slug": "a"}
        )

    def test_update_posts_to_record_url(self, client):
        client.session.request.return_value = _response({"id": 9})

        client.update("posts", 9, {"title": "New"})

        client.session.request.assert_called_once_with(
            "POST", "https://blog.example.com/wp-json/wp/v2/posts/9", json={"title": "New"}
        )

    def test_delete(self, client):
        client.session.request.return_value = _response({"id": 9, "status": "trash"})

        assert client.delete("posts", 9) == {"id": 9, "status": "trash"}
        client.session.request.assert_called_once_with(
            "DELETE", "https://blog.example.com/wp-json/wp/v2/posts/9"
        )

    def test_delete_empty_body(self, client):
        client.session.request.return_value = _response(text="")

        assert client.delete("posts", 9) == {}


class TestErrors:
    @pytest.mark.parametrize("status_code", [401, 403])
    def test_auth_errors(self, client, status_code):
        client.session.request.return_value = _http_error(status_code)

        with pytest.raises(MarkpressAuthenticationError) as exc_info:
            client.create("posts", {})

        assert exc_info.value.status_code == status_code

    def test_http_error(self, client):
        client.session.request.return_value = _http_error(500, "boom")

        with pytest.raises(WordPressApiError) as exc_info:
            client.update("posts", 1, {})

        assert exc_info.value.status_code == 500
        assert not isinstance(exc_info.value, MarkpressAuthenticationError)

    def test_network_error(self, client):
        client.session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(WordPressApiError, match="refused"):
            client.find_all("posts")
