"""FastAPI application entry point."""

import logging
import os
import sys
from collections.abc import Mapping

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI

from mapping_proxy.config import load_verified_mappings
from mapping_proxy.environment import resolve_environment
from mapping_proxy.errors import ProxyConfigError
from mapping_proxy.models.config import ResolvedConfig
from mapping_proxy.models.mapping import MappingTable
from mapping_proxy.transforms import TransformRegistry

logger = logging.getLogger(__name__)


def bootstrap(
    registry: TransformRegistry | None = None,
    environ: Mapping[str, str] | None = None,
) -> tuple[ResolvedConfig, MappingTable]:
    """Resolve settings and load the mapping table once at startup.

    Mappings are read from LLM_PROXY_MAPPINGS if set, otherwise from the
    packaged default. Mappings targeting a provider that needs a credential
    must name its variable; when a registry is given, every transform named
    by the table must also be registered in it.
    """
    env = os.environ if environ is None else environ

    settings = resolve_environment(env)
    mappings = load_verified_mappings(env.get("LLM_PROXY_MAPPINGS") or None, registry)

    return settings, mappings


def create_app(settings: ResolvedConfig, mappings: MappingTable) -> FastAPI:
    """Create the FastAPI application around resolved configuration.

    The settings and mapping table are exposed on ``app.state`` for the
    request dispatcher.
    """
    app = FastAPI(
        title="Mapping Proxy",
        description="Multi-provider LLM API proxy",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.mappings = mappings

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def main(registry: TransformRegistry | None = None) -> None:
    """Validate configuration, then serve with uvicorn.

    Exits with status 1 before serving if configuration is invalid.
    """
    load_dotenv()
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings, mappings = bootstrap(registry)
    except ProxyConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)

    logger.info(
        "Starting proxy %s -> %s with %d mappings",
        settings.source_api.value,
        settings.target_api.value,
        len(mappings),
    )
    host = os.environ.get("LLM_PROXY_HOST", "0.0.0.0")
    uvicorn.run(create_app(settings, mappings), host=host, port=settings.port)


if __name__ == "__main__":
    main()
