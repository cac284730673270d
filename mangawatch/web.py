"""HTTP API for managing the tracked manga."""

from __future__ import annotations

import asyncio
import functools
import json
import logging

from aiohttp import web

from . import usecases
from .api_models import CreateMangaRequest, MangaResponse, UpdateMangaRequest
from .commands import DeleteManga
from .manga import MangaId
from .registry import AppRegistry

logger = logging.getLogger(__name__)

REGISTRY_KEY = web.AppKey("registry", AppRegistry)

_dumps = functools.partial(json.dumps, ensure_ascii=False)


def _into_500(err: BaseException) -> web.Response:
    """Report any failure as a server error carrying only its message."""
    return web.Response(status=500, text=str(err))


def _manga_id(request: web.Request) -> MangaId:
    try:
        return MangaId.parse(request.match_info["manga_id"])
    except ValueError as exc:
        raise web.HTTPBadRequest(text=str(exc)) from exc


async def _read_body(request: web.Request, model):
    if request.content_type != "application/json":
        raise web.HTTPUnsupportedMediaType(
            text="Expected request with `Content-Type: application/json`"
        )
    try:
        data = await request.json()
    except ValueError as exc:
        raise web.HTTPBadRequest(
            text=f"Failed to parse the request body as JSON: {exc}"
        ) from exc
    try:
        return model.from_json(data)
    except ValueError as exc:
        raise web.HTTPUnprocessableEntity(
            text=f"Failed to deserialize the JSON body: {exc}"
        ) from exc


async def register_manga(request: web.Request) -> web.Response:
    """POST /mangas: register a manga."""
    registry = request.app[REGISTRY_KEY]
    body = await _read_body(request, CreateMangaRequest)
    try:
        command = body.to_command()
        await usecases.create_manga(registry.manga_repository, command)
    except Exception as exc:
        return _into_500(exc)
    return web.Response(status=201)


async def update_manga(request: web.Request) -> web.Response:
    """PUT /mangas/{manga_id}: overwrite a manga."""
    manga_id = _manga_id(request)
    registry = request.app[REGISTRY_KEY]
    body = await _read_body(request, UpdateMangaRequest)
    try:
        command = body.to_command(manga_id)
        await usecases.update_manga(registry.manga_repository, command)
    except Exception as exc:
        return _into_500(exc)
    return web.Response(status=200)


async def delete_manga(request: web.Request) -> web.Response:
    """DELETE /mangas/{manga_id}: remove a manga."""
    manga_id = _manga_id(request)
    registry = request.app[REGISTRY_KEY]
    try:
        await usecases.delete_manga(registry.manga_repository, DeleteManga(manga_id))
    except Exception as exc:
        return _into_500(exc)
    return web.Response(status=200)


async def list_mangas(request: web.Request) -> web.Response:
    """GET /mangas: list every manga."""
    registry = request.app[REGISTRY_KEY]
    try:
        mangas = await registry.manga_repository.find_all()
    except Exception as exc:
        return _into_500(exc)
    body = [MangaResponse.from_manga(manga).to_json() for manga in mangas]
    return web.json_response(body, dumps=_dumps)


def create_app(registry: AppRegistry) -> web.Application:
    """Build the web application serving the manga API."""
    app = web.Application()
    app[REGISTRY_KEY] = registry
    app.add_routes(
        [
            web.post("/mangas", register_manga),
            web.post("/mangas/", register_manga),
            web.get("/mangas", list_mangas),
            web.get("/mangas/", list_mangas),
            web.put("/mangas/{manga_id}", update_manga),
            web.delete("/mangas/{manga_id}", delete_manga),
        ]
    )
    return app


async def serve(registry: AppRegistry, host: str = "127.0.0.1", port: int = 8000) -> None:
    """Serve the API until cancelled."""
    runner = web.AppRunner(create_app(registry))
    await runner.setup()
    try:
        site = web.TCPSite(runner, host, port)
        await site.start()
        logger.info("Server listening on %s:%d", host, port)
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()