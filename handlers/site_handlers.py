"""Route handlers for the demo site."""

import json

from content import ABOUT, HOME, USERS, create_html_page
from request import HTTPRequest
from response import HTTPResponse, ResponseBuilder
from router import Router


def home(request: HTTPRequest) -> HTTPResponse:
    _ = request
    links_html = "".join(
        f'<li><a href="{link["url"]}">{link["text"]}</a></li>' for link in HOME["links"]
    )
    body = f"""
    <h1>{HOME['title']}</h1>
    <p>{HOME['description']}</p>
    <ul>{links_html}</ul>
  """
    return (
        ResponseBuilder()
        .status(200)
        .headers({"Content-Type": "text/html"})
        .body(create_html_page(body))
        .build()
    )


def about(request: HTTPRequest) -> HTTPResponse:
    _ = request
    return HTTPResponse(
        status_code=200,
        headers={"Content-Type": "text/html"},
        body=create_html_page(ABOUT["content"]),
    )


def api_users(request: HTTPRequest) -> HTTPResponse:
    _ = request
    return HTTPResponse(
        status_code=200,
        headers={"Content-Type": "application/json"},
        body=json.dumps(USERS, separators=(",", ":"), ensure_ascii=False),
    )


def register_site_routes(router: Router) -> Router:
    router.add_route("GET", "/", home)
    router.add_route("GET", "/about", about)
    router.add_route("GET", "/api/users", api_users)
    return router
