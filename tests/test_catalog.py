import logging
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from literae.catalog import google_books_service
from literae.catalog.google_books_service import (
    UpstreamError,
    build_search_query,
    build_search_url,
    build_volume_url,
    parse_int,
)
from literae.settings import settings

BASE = "https://www.googleapis.com/books/v1/volumes"


@pytest.fixture(autouse=True)
def upstream_settings():
    with patch.object(settings, "GOOGLE_BOOKS_API_URL", BASE), patch.object(
        settings, "GOOGLE_BOOKS_API_KEY", None
    ):
        yield


def test_query_defaults_to_book():
    assert build_search_query(None, None) == "book"
    assert build_search_query("", "all") == "book"


@pytest.mark.parametrize("genre", ["all", "ALL", "All", None, ""])
def test_all_genre_adds_no_subject_filter(genre):
    assert build_search_query("dune", genre) == "dune"


def test_specific_genre_adds_subject_filter():
    assert build_search_query("dune", "fiction") == "dune+subject:fiction"


def test_search_url_encodes_query_and_paging():
    url = build_search_url("dune", "fiction", 20, 5)
    assert url == f"{BASE}?q=dune%2Bsubject%3Afiction&startIndex=20&maxResults=5"


def test_search_url_appends_key_when_configured():
    with patch.object(settings, "GOOGLE_BOOKS_API_KEY", "secret"):
        assert build_search_url("dune").endswith("&key=secret")
        assert build_volume_url("abc") == f"{BASE}/abc?key=secret"


def test_volume_url_without_key():
    assert build_volume_url("zyTCAlFPjgYC") == f"{BASE}/zyTCAlFPjgYC"


def test_parse_int_is_lenient():
    assert parse_int("20", 0) == 20
    assert parse_int("20abc", 0) == 20
    assert parse_int("abc", 10) == 10
    assert parse_int("0", 10) == 10
    assert parse_int(None, 10) == 10


@patch.object(google_books_service, "_http_get_json")
def test_books_forwards_upstream_json(mock_get, client):
    payload = {"kind": "books#volumes", "totalItems": 1, "items": [{"id": "x1"}]}
    mock_get.return_value = payload

    resp = client.get("/books", params={"q": "dune", "genre": "all"})
    assert resp.status_code == 200
    assert resp.json() == payload
    mock_get.assert_called_once_with(f"{BASE}?q=dune&startIndex=0&maxResults=10")


@patch.object(google_books_service, "_http_get_json")
def test_books_with_genre_filters_by_subject(mock_get, client):
    mock_get.return_value = {"items": []}

    client.get("/books", params={"q": "dune", "genre": "fiction", "startIndex": "10", "maxResults": "x"})
    url = mock_get.call_args[0][0]
    assert "q=dune%2Bsubject%3Afiction" in url
    assert "startIndex=10" in url
    assert "maxResults=10" in url


@patch.object(google_books_service, "_http_get_json")
def test_books_forwards_upstream_status(mock_get, client):
    mock_get.side_effect = UpstreamError(429, BASE)

    resp = client.get("/books")
    assert resp.status_code == 429
    assert resp.json() == {"error": "Failed to fetch from Google Books API"}


@patch.object(google_books_service, "_http_get_json")
def test_books_transport_failure_is_500(mock_get, client):
    mock_get.side_effect = urllib.error.URLError("connection refused")

    resp = client.get("/books")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Server error"}


@patch.object(google_books_service, "_http_get_json")
def test_book_detail_forwards_upstream_json(mock_get, client):
    mock_get.return_value = {"id": "x1", "volumeInfo": {"title": "Dune"}}

    resp = client.get("/books/x1")
    assert resp.status_code == 200
    assert resp.json()["volumeInfo"]["title"] == "Dune"
    mock_get.assert_called_once_with(f"{BASE}/x1")


@patch.object(google_books_service, "_http_get_json")
def test_book_detail_not_found_upstream(mock_get, client):
    mock_get.side_effect = UpstreamError(404, f"{BASE}/missing")

    resp = client.get("/books/missing")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Failed to fetch book detail"}


@patch.object(google_books_service, "_http_get_json")
def test_book_detail_bad_json_is_500(mock_get, client):
    mock_get.side_effect = ValueError("Expecting value")

    resp = client.get("/books/x1")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Server error"}


def test_http_get_json_decodes_body():
    response = MagicMock()
    response.read.return_value = b'{"totalItems": 0}'
    with patch("urllib.request.urlopen") as mock_open:
        mock_open.return_value.__enter__.return_value = response
        with patch.object(settings, "UPSTREAM_TIMEOUT", 2.5):
            assert google_books_service._http_get_json(BASE) == {"totalItems": 0}
    assert mock_open.call_args.kwargs["timeout"] == 2.5


def test_logged_urls_never_contain_api_key(caplog):
    caplog.set_level(logging.INFO, logger=google_books_service.__name__)
    error = urllib.error.HTTPError(BASE, 403, "Forbidden", {}, None)
    with patch.object(settings, "GOOGLE_BOOKS_API_KEY", "secret"), patch(
        "urllib.request.urlopen", side_effect=error
    ) as mock_open:
        with pytest.raises(UpstreamError):
            google_books_service.search_volumes("dune", "fiction")
        with pytest.raises(UpstreamError):
            google_books_service.get_volume("x1")

    # the key is still sent upstream
    assert all("key=secret" in call.args[0].full_url for call in mock_open.call_args_list)
    messages = [record.getMessage() for record in caplog.records]
    assert any("Google Books search" in m for m in messages)
    assert any("returned status 403" in m for m in messages)
    assert all("secret" not in m for m in messages)


def test_http_get_json_raises_upstream_error_on_status():
    error = urllib.error.HTTPError(f"{BASE}?key=secret", 403, "Forbidden", {}, None)
    with patch("urllib.request.urlopen", side_effect=error):
        with pytest.raises(UpstreamError) as info:
            google_books_service._http_get_json(f"{BASE}?key=secret")
    assert info.value.status == 403
    assert "secret" not in info.value.url
