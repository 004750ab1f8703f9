import os
import pkgutil
from importlib import import_module
from typing import Iterator

from fastapi import APIRouter
from fastapi.routing import APIRoute

from quotes_api.logging import logger

# Track registered modules to prevent duplicate logging
_registered_http_modules: set[str] = set()


def iter_http_routers() -> Iterator[tuple[str, APIRouter]]:
    """
    Yield `(module name, router)` for every module in the `api/http`
    package.
    """
    app_dir = os.path.dirname(__file__)
    app_name = os.path.basename(app_dir)

    for _, module, _ in pkgutil.iter_modules([f"{app_dir}/api/http"]):
        api = import_module(f".{module}", package=f"{app_name}.api.http")
        yield module, api.router


def collect_subrouters() -> APIRouter:
    """
    Collects and registers all HTTP routers for the application.

    Every module in the `api/http` package exposes a `router`; each one is
    included in the main `APIRouter`, which is returned as the entry point
    for the application's API.
    """
    main_router: APIRouter = APIRouter()

    for module, router in iter_http_routers():
        main_router.include_router(router)

        # Only log on first registration
        if module not in _registered_http_modules:
            logger.info(f'Register "{module}" api')
            _registered_http_modules.add(module)

    return main_router


def http_routes() -> list[APIRoute]:
    """
    Endpoints declared by the `api/http` routers, with full paths.
    """
    routes: list[APIRoute] = []
    for _, router in iter_http_routers():
        for route in router.routes:
            if isinstance(route, APIRoute):
                routes.append(route)
    return routes
