import os
from typing import Any, Mapping, Optional

from dynaconf import Dynaconf
from pydantic import BaseModel, ConfigDict, PositiveFloat, PositiveInt, ValidationError

from gmaps_geocoder.errors import ConfigurationError

settings = Dynaconf(
    envvar_prefix="GMAPS_GEOCODER",
    settings_files=[
        os.path.join(os.path.dirname(__file__), "settings.json"),
    ],
    load_dotenv=True,
    merge_enabled=True,
)


class GeocoderConfig(BaseModel):
    """Options for a single geocode lookup"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    api_key: Optional[str] = None
    # Ints are kept as ints, so 5 is reported as "5 second(s)"
    timeout_seconds: PositiveInt | PositiveFloat = 5
    append_query: Optional[str] = None


def _build(values: Mapping[str, Any]) -> GeocoderConfig:
    try:
        return GeocoderConfig.model_validate(dict(values))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid geocoder configuration: {e}") from e


def _as_text(value: Any) -> Optional[str]:
    # Dynaconf parses env values, so a numeric key arrives as an int
    return None if value is None else str(value)


def defaults() -> GeocoderConfig:
    """Read the global defaults (settings.json, environment, .env)"""
    values = {
        "api_key": _as_text(settings.get("api_key")),
        "append_query": _as_text(settings.get("append_query")),
    }
    # Leave the model default in place when nothing configures a timeout
    timeout = settings.get("timeout_seconds")
    if timeout is not None:
        values["timeout_seconds"] = timeout

    return _build(values)


def merge(
    options: Mapping[str, Any] | GeocoderConfig | None = None,
    base: Optional[GeocoderConfig] = None,
) -> GeocoderConfig:
    """
    Overlay options onto a base configuration.

    Keys present in options win, even when their value is None. Neither the base
    nor the options are modified; a new GeocoderConfig is returned.

    Args:
        options: Per-call overrides, as a mapping or a GeocoderConfig
        base: Configuration to overlay onto; the global defaults when omitted

    Returns:
        The merged configuration
    """
    if base is None:
        base = defaults()

    if options is None:
        return base

    if isinstance(options, GeocoderConfig):
        overrides = options.model_dump(exclude_unset=True)
    else:
        overrides = dict(options)

    return _build({**base.model_dump(), **overrides})
