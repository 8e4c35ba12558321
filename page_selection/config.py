from __future__ import annotations

import os
import pathlib
import warnings
from functools import reduce
from typing import Any, Dict, Iterable, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "PAGE_SELECTION__"


class SelectionOptions(BaseModel):
    """Options controlling how selections become merge inputs."""

    model_config = ConfigDict(frozen=True)

    normalize: bool = True
    split_ranges: bool = True
    skip_marker: str = Field(default="0", min_length=1)

    @field_validator("skip_marker", mode="before")
    @classmethod
    def _marker_as_text(cls, value: Any) -> Any:
        """YAML-coerced numbers such as ``0`` are markers too."""
        if isinstance(value, bool):
            return value
        return str(value) if isinstance(value, (int, float)) else value


def _read_yaml(path: str | os.PathLike | None) -> Dict[str, Any]:
    """Return a dict from YAML or {} if path is None/missing/empty."""
    if not path:
        return {}
    p = pathlib.Path(path)
    if not p.exists():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise TypeError(f"{p.name} must contain a top-level mapping")
    return data


def _coerce(value: str) -> Any:
    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def _env_overrides() -> Dict[str, Any]:
    """
    Map PAGE_SELECTION__KEY=value → options[key]=value (key lower-cased).
    Values are YAML-coerced (so 'false', '0' etc. become bool/int).
    """
    return {
        k[len(ENV_PREFIX) :].lower(): _coerce(v)
        for k, v in os.environ.items()
        if k.startswith(ENV_PREFIX) and len(k) > len(ENV_PREFIX)
    }


def _warn_unknown_options(opts: Mapping[str, Any]) -> None:
    """Emit a warning when options contain keys the model does not define."""
    unknown = [key for key in opts if key not in SelectionOptions.model_fields]
    if unknown:
        warnings.warn(
            f"Unknown selection options: {', '.join(sorted(unknown))}",
            stacklevel=3,
        )


def load_options(
    path: str | os.PathLike | None = "page_selection.yaml",
    overrides: Mapping[str, Any] | None = None,
) -> SelectionOptions:
    """Load YAML + env/CLI overrides into validated :class:`SelectionOptions`."""
    sources: Iterable[Mapping[str, Any]] = (
        d for d in (_read_yaml(path), _env_overrides(), overrides) if d
    )
    merged: Dict[str, Any] = reduce(lambda acc, d: {**acc, **d}, sources, {})
    _warn_unknown_options(merged)
    known = {k: v for k, v in merged.items() if k in SelectionOptions.model_fields}
    return SelectionOptions.model_validate(known)


__all__ = ["ENV_PREFIX", "SelectionOptions", "load_options"]
