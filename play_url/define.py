"""Helpers for declaring configuration in Python files."""

import inspect
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from play_url.models.config import RunConfig, UrlSpec


async def resolve[T](obj: T | Callable[[], T | Awaitable[T]]) -> T:
    """Resolve a value that may be given directly or through a (async) factory."""
    value = obj() if callable(obj) else obj
    if inspect.isawaitable(value):
        value = await value
    return value


async def define_config(
    obj: RunConfig | Mapping[str, Any] | Callable[[], Any],
) -> RunConfig:
    """Resolve and validate a run configuration.

    Raises:
        pydantic.ValidationError: If the resolved value is not a valid config

    """
    value = await resolve(obj)
    if isinstance(value, RunConfig):
        return value
    return RunConfig.model_validate(value)


async def define_url(obj: UrlSpec | Mapping[str, Any] | Callable[[], Any]) -> UrlSpec:
    """Resolve and validate a single URL definition.

    Raises:
        pydantic.ValidationError: If the resolved value is not a valid URL spec

    """
    value = await resolve(obj)
    if isinstance(value, UrlSpec):
        return value
    return UrlSpec.model_validate(value)
