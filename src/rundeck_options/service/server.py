"""Rundeck option server using aiohttp."""

from __future__ import annotations

import asyncio
import logging
import signal
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from aiohttp import web

from ..constants import Constants
from ..resolution.models import Coordinate
from ..search.elasticsearch import ElasticsearchIndex
from ..search.index import SearchUnavailable
from ..search.query import VersionFilter
from ..search.ranker import VersionRanker
from ..storage.base import Repository
from ..storage.filesystem import FilesystemStorage, StaticCatalog
from .options import ContentResult, RundeckOptionsService

logger = logging.getLogger(__name__)


@dataclass
class ServiceConfig:
    """Configuration for the option server."""

    host: str = Constants.DEFAULT_HOST
    port: int = Constants.DEFAULT_PORT
    search_url: str = Constants.DEFAULT_SEARCH_URL
    search_index: str = Constants.DEFAULT_SEARCH_INDEX
    search_timeout: int = Constants.REQUEST_TIMEOUT
    search_username: Optional[str] = None
    search_password: Optional[str] = None
    snapshots_repository: str = Constants.SNAPSHOTS_REPOSITORY
    repositories: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ServiceConfig":
        """Create config from a loaded YAML mapping."""
        server = data.get("server") or {}
        search = data.get("search") or {}
        storage = data.get("storage") or {}
        return cls(
            host=server.get("host", Constants.DEFAULT_HOST),
            port=int(server.get("port", Constants.DEFAULT_PORT)),
            search_url=search.get("url", Constants.DEFAULT_SEARCH_URL),
            search_index=search.get("index", Constants.DEFAULT_SEARCH_INDEX),
            search_timeout=int(search.get("timeout", Constants.REQUEST_TIMEOUT)),
            search_username=search.get("username"),
            search_password=search.get("password"),
            snapshots_repository=data.get("snapshots_repository", Constants.SNAPSHOTS_REPOSITORY),
            repositories=dict(storage.get("repositories") or {}),
        )

    @classmethod
    def from_args(cls, args: Any, file_config: Optional[Mapping[str, Any]] = None) -> "ServiceConfig":
        """Create config from the config file, then apply CLI overrides.

        Args:
            args: Parsed CLI arguments namespace.
            file_config: Mapping loaded from the YAML config file.

        Returns:
            ServiceConfig instance.
        """
        config = cls.from_mapping(file_config or {})

        if getattr(args, "HOST", None):
            config.host = args.HOST
        if getattr(args, "PORT", None) is not None:
            config.port = args.PORT
        if getattr(args, "SEARCH_URL", None):
            config.search_url = args.SEARCH_URL
        if getattr(args, "SEARCH_INDEX", None):
            config.search_index = args.SEARCH_INDEX
        if getattr(args, "SNAPSHOTS_REPOSITORY", None):
            config.snapshots_repository = args.SNAPSHOTS_REPOSITORY

        return config


def build_service(config: ServiceConfig) -> RundeckOptionsService:
    """Wire the Elasticsearch index and filesystem storage from ``config``."""
    index = ElasticsearchIndex(
        url=config.search_url,
        index=config.search_index,
        timeout=config.search_timeout,
        username=config.search_username,
        password=config.search_password,
    )
    repositories = {
        name: Repository(name=name, format=entry.get("format", Constants.MAVEN_FORMAT))
        for name, entry in config.repositories.items()
    }
    roots = {name: entry["path"] for name, entry in config.repositories.items()}
    return RundeckOptionsService(
        catalog=StaticCatalog(repositories),
        ranker=VersionRanker(index),
        storage=FilesystemStorage(roots),
        snapshots_repository=config.snapshots_repository,
    )


def _param(request: web.Request, name: str, default: Optional[str] = None) -> Optional[str]:
    value = request.query.get(name)
    return default if value is None else value


class OptionsServer:
    """HTTP server answering Rundeck remote option requests.

    Routes live under ``/rundeck/maven/options``:
    ``version`` lists versions as ``[{"name", "value"}]`` and ``content``
    streams an artifact.
    """

    def __init__(self, config: ServiceConfig, service: Optional[RundeckOptionsService] = None):
        """Initialize the server.

        Args:
            config: Server configuration.
            service: Pre-built service; built from ``config`` when omitted.
        """
        self._config = config
        self._service = service or build_service(config)
        self._app: Optional[web.Application] = None
        self._runner: Optional[web.AppRunner] = None

    def _create_app(self) -> web.Application:
        """Create the aiohttp application."""
        app = web.Application()
        prefix = Constants.ROUTE_PREFIX
        app.router.add_get(f"{prefix}/health", self._health_check)
        app.router.add_get(f"{prefix}/version", self._handle_version)
        app.router.add_get(f"{prefix}/content", self._handle_content)
        return app

    async def _health_check(self, request: web.Request) -> web.Response:
        """Health check endpoint."""
        return web.json_response({
            "status": "ok",
            "snapshots_repository": self._config.snapshots_repository,
            "repositories": sorted(self._config.repositories),
        })

    async def _handle_version(self, request: web.Request) -> web.Response:
        """List versions: ``l`` limit, ``r`` ``g`` ``a`` ``c`` ``e`` filters."""
        raw_limit = _param(request, "l", str(Constants.DEFAULT_LIMIT))
        try:
            limit = int(raw_limit)
        except ValueError:
            return web.json_response({"error": f"invalid limit: {raw_limit}"}, status=400)
        if limit < 1:
            return web.json_response({"error": "limit must be at least 1"}, status=400)

        version_filter = VersionFilter(
            repository=_param(request, "r", ""),
            group_id=_param(request, "g"),
            artifact_id=_param(request, "a"),
            classifier=_param(request, "c"),
            extension=_param(request, "e"),
        )
        logger.info("Version request: %s, limit: %s", version_filter, limit)

        loop = asyncio.get_running_loop()
        try:
            records = await loop.run_in_executor(None, self._service.versions, version_filter, limit)
        except SearchUnavailable as e:
            logger.error("Version listing failed: %s", e)
            return web.json_response({"error": "search unavailable"}, status=503)

        return web.json_response([record.to_option() for record in records])

    async def _handle_content(self, request: web.Request) -> web.StreamResponse:
        """Stream an artifact: ``r`` ``g`` ``a`` required, ``v`` ``c`` ``e`` optional."""
        coord = Coordinate(
            repository=_param(request, "r", ""),
            group_id=_param(request, "g", ""),
            artifact_id=_param(request, "a", ""),
            version=_param(request, "v"),
            classifier=_param(request, "c", ""),
            extension=_param(request, "e", Constants.DEFAULT_EXTENSION),
        )
        logger.debug("Content request: %s", coord)

        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(None, self._service.content, coord)
        except SearchUnavailable as e:
            logger.error("Content lookup failed: %s", e)
            return web.Response(status=503)

        if result is None:
            return web.Response(status=404)
        return await self._stream(request, result)

    async def _stream(self, request: web.Request, result: ContentResult) -> web.StreamResponse:
        response = web.StreamResponse(
            status=200,
            headers={
                "Content-Type": result.content_type,
                "Content-Disposition": result.content_disposition,
            },
        )
        if result.size is not None:
            response.content_length = result.size

        loop = asyncio.get_running_loop()
        try:
            await response.prepare(request)
            while True:
                chunk = await loop.run_in_executor(None, result.stream.read, Constants.STREAM_CHUNK_SIZE)
                if not chunk:
                    break
                await response.write(chunk)
            await response.write_eof()
        finally:
            result.stream.close()
        return response

    async def start(self) -> None:
        """Start the server."""
        self._app = self._create_app()
        self._runner = web.AppRunner(self._app)
        await self._runner.setup()

        site = web.TCPSite(self._runner, self._config.host, self._config.port)
        await site.start()

        logger.info("Rundeck option server listening on http://%s:%s", self._config.host, self._config.port)
        logger.info("Search index: %s/%s", self._config.search_url, self._config.search_index)
        logger.info("Repositories: %s", ", ".join(sorted(self._config.repositories)) or "(none)")

    async def stop(self) -> None:
        """Stop the server."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            self._app = None


def run_server_sync(config: ServiceConfig) -> None:
    """Run the server until SIGTERM or SIGINT.

    Args:
        config: Server configuration.
    """
    server = OptionsServer(config)
    loop = asyncio.new_event_loop()

    async def run():
        await server.start()
        stop_event = asyncio.Event()
        running_loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            running_loop.add_signal_handler(sig, stop_event.set)
        await stop_event.wait()
        logger.info("Shutdown signal received, stopping...")
        await server.stop()

    try:
        loop.run_until_complete(run())
    except KeyboardInterrupt:
        # Fallback for platforms where signal handlers don't work (Windows)
        loop.run_until_complete(server.stop())
    finally:
        loop.close()
        logger.info("Server shutdown complete")
