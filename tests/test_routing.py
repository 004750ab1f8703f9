"""Tests for HTTP router discovery."""

from fastapi import FastAPI
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from quotes_api.routing import collect_subrouters, http_routes


def test_http_routes_have_full_paths():
    routes = http_routes()

    assert all(isinstance(route, APIRoute) for route in routes)
    pairs = {(route.path, method) for route in routes for method in route.methods}
    assert ("/authors", "POST") in pairs
    assert ("/authors/{id}", "DELETE") in pairs
    assert ("/quotes/random", "GET") in pairs
    assert ("/quotes/search", "GET") in pairs
    assert ("/healthz", "GET") in pairs
    assert ("/readyz", "GET") in pairs


def test_collect_subrouters_serves_every_route():
    app = FastAPI()
    app.include_router(collect_subrouters())

    response = TestClient(app).get("/openapi.json")

    paths = response.json()["paths"]
    for route in http_routes():
        assert route.path in paths
