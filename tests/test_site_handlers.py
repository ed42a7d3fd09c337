"""Tests for the demo site routes and page content."""

import json

from content import ABOUT, HOME, USERS, create_html_page
from handlers.site_handlers import about, api_users, home, register_site_routes
from request import HTTPRequest
from router import Router, not_found_handler


def _get(path: str) -> HTTPRequest:
    return HTTPRequest(method="GET", path=path)


def test_home_page_lists_links() -> None:
    response = home(_get("/"))
    body = response.body.decode("utf-8")

    assert response.status_code == 200
    assert dict(response.headers) == {"Content-Type": "text/html"}
    assert HOME["title"] in body
    assert '<li><a href="/about">About</a></li>' in body
    assert '<li><a href="/api/users">API Users</a></li>' in body
    assert body.strip().startswith("<!DOCTYPE html>")


def test_about_page_wraps_about_content() -> None:
    response = about(_get("/about"))

    assert response.status_code == 200
    assert dict(response.headers) == {"Content-Type": "text/html"}
    assert response.body == create_html_page(ABOUT["content"]).encode("utf-8")


def test_api_users_returns_compact_json_array() -> None:
    response = api_users(_get("/api/users"))

    assert response.status_code == 200
    assert dict(response.headers) == {"Content-Type": "application/json"}
    assert json.loads(response.body) == USERS
    assert len(USERS) == 5
    assert response.body.startswith(b'[{"id":1,"name":"Alice Johnson"')


def test_create_html_page_embeds_body() -> None:
    page = create_html_page("<p>hello</p>")

    assert "<title>Custom Web Server</title>" in page
    assert "<body>\n    <p>hello</p>\n  </body>" in page


def test_register_site_routes() -> None:
    router = register_site_routes(Router())

    assert router.get_handler("GET", "/") is home
    assert router.get_handler("GET", "/about") is about
    assert router.get_handler("GET", "/api/users") is api_users
    assert router.get_handler("POST", "/") is not_found_handler
