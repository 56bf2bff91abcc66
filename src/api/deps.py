import logging
import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Request

from src.components.document import HtmlTemplate, load_template
from src.components.render import RenderService, create_render_service
from src.config.loader import load_site_config
from src.config.models import SiteConfig

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    """Environment settings are invalid."""


def parse_port(raw: str | None) -> int:
    if raw is None or raw == "":
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError as e:
        raise ConfigError(f"PORT must be an integer, got {raw!r}") from e
    if not 0 < port < 65536:
        raise ConfigError(f"PORT out of range: {port}")
    return port


def parse_log_level(raw: str | None) -> str:
    level = (raw or "INFO").upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"SSR_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return level


# --- Settings ---
class Settings:
    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        env: Mapping[str, str] = os.environ if environ is None else environ
        self.base_dir = Path(os.getcwd())
        self.port = parse_port(env.get("PORT"))
        self.host = env.get("HOST", DEFAULT_HOST)
        self.base_url = env.get("SSR_BASE_URL") or None
        self.site_config_path = self.base_dir / env.get("SSR_SITE_CONFIG", "site.yaml")
        self.template_path = self.base_dir / env.get("SSR_TEMPLATE_PATH", "templates/index.html")
        self.static_dir = self.base_dir / env.get("SSR_STATIC_DIR", "static")
        self.log_level = parse_log_level(env.get("SSR_LOG_LEVEL"))


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings from the environment; the default for create_app."""
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Settings the serving app was created with."""
    settings: Settings = request.app.state.settings
    return settings


# --- Site Config ---
@lru_cache
def site_config_for(path: Path) -> SiteConfig:
    if not path.exists():
        logger.warning("Site config %s not found; using built-in defaults", path)
        return SiteConfig()
    return load_site_config(path)


# --- Template ---
@lru_cache
def template_for(path: Path) -> HtmlTemplate:
    return load_template(path)


def clear_loader_caches() -> None:
    site_config_for.cache_clear()
    template_for.cache_clear()


# --- Request Dependencies ---
def get_site_config(settings: Settings = Depends(get_app_settings)) -> SiteConfig:
    return site_config_for(settings.site_config_path)


def get_template(settings: Settings = Depends(get_app_settings)) -> HtmlTemplate:
    return template_for(settings.template_path)


def get_base_url(request: Request, settings: Settings = Depends(get_app_settings)) -> str:
    if settings.base_url:
        return settings.base_url.rstrip("/")
    return str(request.base_url).rstrip("/")


def get_render_service(
    base_url: str = Depends(get_base_url),
    config: SiteConfig = Depends(get_site_config),
) -> RenderService:
    """Create RenderService with request context."""
    return create_render_service(config, base_url)
