"""
Tests for the site config loader and environment settings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from src.api.deps import (
    DEFAULT_PORT,
    ConfigError,
    Settings,
    clear_loader_caches,
    site_config_for,
)
from src.config.loader import load_site_config
from src.config.models import SiteConfig


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "site.yaml"
    path.write_text(content)
    return path


class TestLoadSiteConfig:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_site_config(tmp_path / "missing.yaml")

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        assert load_site_config(_write(tmp_path, "")) == SiteConfig()

    def test_overrides(self, tmp_path: Path) -> None:
        config = load_site_config(
            _write(tmp_path, "site_name: Demo\nhome:\n  title: Hi\n  description: D\n  image: /i.png\n")
        )

        assert config.site_name == "Demo"
        assert config.home.title == "Hi"

    def test_yaml_fence_accepted(self, tmp_path: Path) -> None:
        config = load_site_config(
            _write(tmp_path, "# Site\n\n```yaml\nsite_name: Fenced\n```\n\nnotes after\n")
        )

        assert config.site_name == "Fenced"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_site_config(_write(tmp_path, "site_name: [unclosed\n"))

    def test_empty_title_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="validation failed"):
            load_site_config(
                _write(tmp_path, "home:\n  title: ''\n  description: d\n  image: i\n")
            )

    def test_post_template_needs_placeholder(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="post_id"):
            load_site_config(
                _write(tmp_path, "post:\n  title: Post\n  description: d {post_id}\n  image: i {post_id}\n")
            )

    def test_bad_prefix_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="post_prefix"):
            load_site_config(_write(tmp_path, "post_prefix: post\n"))

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            load_site_config(_write(tmp_path, "colour: blue\n"))


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(environ={})

        assert settings.port == DEFAULT_PORT == 3000
        assert settings.host == "0.0.0.0"
        assert settings.base_url is None
        assert settings.log_level == "INFO"
        assert settings.template_path.name == "index.html"

    def test_port_from_env(self) -> None:
        assert Settings(environ={"PORT": "8080"}).port == 8080

    def test_non_integer_port(self) -> None:
        with pytest.raises(ConfigError, match="integer"):
            Settings(environ={"PORT": "abc"})

    def test_port_out_of_range(self) -> None:
        with pytest.raises(ConfigError, match="range"):
            Settings(environ={"PORT": "70000"})

    def test_absolute_paths_kept(self, tmp_path: Path) -> None:
        settings = Settings(environ={"SSR_SITE_CONFIG": str(tmp_path / "s.yaml")})

        assert settings.site_config_path == tmp_path / "s.yaml"

    def test_log_level_normalised(self) -> None:
        assert Settings(environ={"SSR_LOG_LEVEL": "debug"}).log_level == "DEBUG"

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ConfigError, match="SSR_LOG_LEVEL"):
            Settings(environ={"SSR_LOG_LEVEL": "FOO"})


class TestSiteConfigFor:
    @pytest.fixture(autouse=True)
    def fresh_cache(self) -> Iterator[None]:
        clear_loader_caches()
        yield
        clear_loader_caches()

    def test_missing_file_warns_and_uses_defaults(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        missing = tmp_path / "missing.yaml"

        with caplog.at_level(logging.WARNING, logger="src.api.deps"):
            config = site_config_for(missing)

        assert config == SiteConfig()
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert str(missing) in warnings[0].getMessage()

    def test_present_file_loaded_quietly(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = _write(tmp_path, "site_name: Quiet\n")

        with caplog.at_level(logging.WARNING, logger="src.api.deps"):
            assert site_config_for(path).site_name == "Quiet"

        assert caplog.records == []
