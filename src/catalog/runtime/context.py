"""Application context holding the active configuration.

The configuration is loaded once from ``config.yaml`` (or the file named by
``CATALOG_CONFIG_FILE``) and stored in a context variable so tests and
request handlers can override it locally with :func:`with_context`.
"""

import os
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from pydantic import BaseModel

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.config.config_template import load_config


@dataclass
class AppContext:
    """Process-wide state visible to the catalog: currently just its config."""

    config: ConfigData


_default_context = AppContext(
    config=load_config(Path(os.getenv("CATALOG_CONFIG_FILE", "config.yaml")))
)

_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Install ``context`` for the current task or thread."""
    return _app_context.set(context)


def _explicit_fields(model: BaseModel) -> dict:
    """Fields the caller actually set on ``model``, at every nesting level.

    ``ConfigData(catalog=CatalogConfig(storage="database"))`` yields
    ``{"catalog": {"storage": "database"}}`` so an override leaves the
    notifier and checker settings of the base config alone.
    """
    explicit = {}
    for name in model.__class__.model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_fields(value)
            if nested:
                explicit[name] = nested
            elif name in model.model_fields_set:
                explicit[name] = value.model_dump()
        elif name in model.model_fields_set:
            explicit[name] = value
    return explicit


def _deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Overlay the explicitly set fields of ``override_config`` on ``base_config``."""
    merged = _deep_merge(base_config.model_dump(), _explicit_fields(override_config))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily run with ``config_override`` merged into the current config.

    Only fields explicitly set on the override replace current values, so
    overrides nest:

        with with_context(ConfigData(catalog=CatalogConfig(storage="database"))):
            assert get_config().catalog.storage == "database"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the whole configuration of the current context."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    return get_context().config
