"""Configuration loader for inkwell.toml."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

CONFIG_FILENAME = "inkwell.toml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("console", "json")


@dataclass
class RenderConfig:
    """Block renderer policy."""
    flush_unclosed_fence: bool = False


@dataclass
class TocConfig:
    """Heading extractor policy."""
    unique_ids: bool = False
    fold_unicode: bool = False


@dataclass
class HtmlConfig:
    """HTML presentation options."""
    anchor_ids: bool = True


@dataclass
class PreviewConfig:
    """Post summary options."""
    words_per_minute: int = 200
    excerpt_length: int = 150


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = "console"


@dataclass
class ApiConfig:
    """Local JSON API settings."""
    host: str = "127.0.0.1"
    port: int = 8787
    cors: bool = False
    token: str = ""


@dataclass
class WatchConfig:
    debounce_ms: int = 150


@dataclass
class InkwellConfig:
    """Complete inkwell configuration."""
    render: RenderConfig = field(default_factory=RenderConfig)
    toc: TocConfig = field(default_factory=TocConfig)
    html: HtmlConfig = field(default_factory=HtmlConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)


def _positive_int(data: dict[str, Any], key: str, default: int, source: str | None) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{key} must be a positive integer, got {value!r}", source)
    return value


def load_config(config_path: Path | None = None) -> InkwellConfig:
    """
    Load configuration from inkwell.toml.

    Search order:
    1. config_path (if provided, must exist)
    2. cwd/inkwell.toml

    Missing keys fall back to defaults.

    Raises:
        ConfigError: unreadable file or invalid value
    """
    toml_data: dict[str, Any] = {}
    source: str | None = None

    if config_path is not None and not config_path.exists():
        raise ConfigError("config file not found", str(config_path))

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_FILENAME)

    for path in search_paths:
        if path.exists():
            source = str(path)
            try:
                with open(path, "rb") as f:
                    toml_data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigError(f"invalid TOML: {e}", source) from e
            break

    render_data = toml_data.get("render", {})
    render_config = RenderConfig(
        flush_unclosed_fence=bool(render_data.get("flush_unclosed_fence", False))
    )

    toc_data = toml_data.get("toc", {})
    toc_config = TocConfig(
        unique_ids=bool(toc_data.get("unique_ids", False)),
        fold_unicode=bool(toc_data.get("fold_unicode", False)),
    )

    html_data = toml_data.get("html", {})
    html_config = HtmlConfig(anchor_ids=bool(html_data.get("anchor_ids", True)))

    preview_data = toml_data.get("preview", {})
    preview_config = PreviewConfig(
        words_per_minute=_positive_int(preview_data, "words_per_minute", 200, source),
        excerpt_length=_positive_int(preview_data, "excerpt_length", 150, source),
    )

    logging_data = toml_data.get("logging", {})
    level = str(logging_data.get("level", "INFO")).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"unknown log level {level!r}", source)
    fmt = logging_data.get("format", "console")
    if fmt not in LOG_FORMATS:
        raise ConfigError(f"log format must be one of {', '.join(LOG_FORMATS)}", source)
    logging_config = LoggingConfig(level=level, format=fmt)

    api_data = toml_data.get("api", {})
    api_config = ApiConfig(
        host=api_data.get("host", "127.0.0.1"),
        port=_positive_int(api_data, "port", 8787, source),
        cors=bool(api_data.get("cors", False)),
        token=api_data.get("token", ""),
    )

    watch_data = toml_data.get("watch", {})
    watch_config = WatchConfig(
        debounce_ms=_positive_int(watch_data, "debounce_ms", 150, source)
    )

    return InkwellConfig(
        render=render_config,
        toc=toc_config,
        html=html_config,
        preview=preview_config,
        logging=logging_config,
        api=api_config,
        watch=watch_config,
    )
