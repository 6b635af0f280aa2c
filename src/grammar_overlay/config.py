from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from .overlay import DEFAULT_TOLERANCE


@dataclass(slots=True)
class ServiceSettings:
    """Connection settings for the remote grammar service."""

    base_url: str = "http://localhost:5001/api"
    login_path: str = "/login"
    check_path: str = "/check-grammar"
    request_timeout: float = 30.0
    token_path: str = "~/.grammar_overlay/token"
    token_env: str = "GRAMMAR_OVERLAY_TOKEN"


@dataclass(slots=True)
class GrammarOverlayConfig:
    """Configuration options for checking and previewing text."""

    tolerance: int = DEFAULT_TOLERANCE
    output_format: str = "ansi"
    highlight_class: str = "bg-red-200 decoration-red-500"
    placeholder: str = "Your corrected text will appear here"
    service: ServiceSettings = field(default_factory=ServiceSettings)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(GrammarOverlayConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "service" in data:
        service_value = data["service"]
        if isinstance(service_value, ServiceSettings):
            kwargs["service"] = service_value
        elif isinstance(service_value, Mapping):
            kwargs["service"] = _build_service_settings(service_value)
        else:
            kwargs.pop("service")
    return kwargs


def _build_service_settings(data: Mapping[str, Any]) -> ServiceSettings:
    service_allowed = {field.name for field in fields(ServiceSettings)}
    filtered = {key: data[key] for key in data if key in service_allowed}
    return ServiceSettings(**filtered)


def config_from_dict(data: Mapping[str, Any] | None) -> GrammarOverlayConfig:
    """Build a GrammarOverlayConfig from a dictionary-like input."""
    if data is None:
        return GrammarOverlayConfig()
    kwargs = _build_kwargs(data)
    if "tolerance" in kwargs:
        _validate_tolerance(kwargs["tolerance"])
    return GrammarOverlayConfig(**kwargs)


def _validate_tolerance(value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"tolerance must be a non-negative integer, got {value!r}.")


def config_from_yaml(path: str | Path) -> GrammarOverlayConfig:
    """Load configuration from a YAML file."""
    try:
        contents = Path(path).read_text(encoding="utf-8")
        parsed = yaml.safe_load(contents) or {}
    except (UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ValueError(f"Unable to parse configuration {path}: {exc}") from exc
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> GrammarOverlayConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return GrammarOverlayConfig()
    return config_from_yaml(path)
