"""Utilities for layered YAML launch configuration loading."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Iterable, List, MutableMapping, Tuple

import yaml

from . import resolve_config_path


def _ensure_yaml_suffix(path: Path) -> Path:
    if path.suffix:
        return path
    return path.with_suffix(".yaml")


def _resolve_reference(reference: str | Path, anchor: Path | None = None) -> Path:
    candidate = Path(reference)
    candidate = _ensure_yaml_suffix(candidate)
    if candidate.is_absolute():
        return candidate
    if anchor is not None:
        anchored = (anchor.parent / candidate).resolve()
        if anchored.exists():
            return anchored
    # Missing presets surface as FileNotFoundError when they are opened.
    return resolve_config_path(candidate)


def _deep_merge(base: MutableMapping[str, Any], updates: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    result: MutableMapping[str, Any] = deepcopy(base)
    for key, value in updates.items():
        if key in result and isinstance(result[key], MutableMapping) and isinstance(value, MutableMapping):
            result[key] = _deep_merge(result[key], value)  # type: ignore[assignment]
        else:
            result[key] = deepcopy(value)
    return result


def _load_recursive(path: Path, stack: Tuple[Path, ...]) -> Tuple[Dict[str, Any], List[Path]]:
    if path in stack:
        chain = " -> ".join(str(p) for p in stack + (path,))
        raise ValueError(f"Cyclic defaults detected while loading configs: {chain}")

    with open(path, "r") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Launch config {path} must contain a mapping at the top level")

    defaults = raw.pop("defaults", [])
    if isinstance(defaults, (str, Path)):
        defaults = [defaults]

    merged: Dict[str, Any] = {}
    sources: List[Path] = []
    for default in defaults:
        default_path = _resolve_reference(default, anchor=path)
        default_cfg, default_sources = _load_recursive(default_path, stack + (path,))
        merged = _deep_merge(merged, default_cfg)
        sources.extend(default_sources)

    merged = _deep_merge(merged, raw)
    sources.append(path)
    return merged, sources


def load_layered_config(reference: str | Path) -> Dict[str, Any]:
    """Load ``reference`` resolving ``defaults`` recursively."""

    path = _resolve_reference(reference)
    config, sources = _load_recursive(path, tuple())
    config.setdefault("__sources__", [str(p) for p in sources])
    return config


def flatten_override_args(raw_overrides: Iterable[Any] | None) -> list[str]:
    """Return a flat list of override entries from argparse output."""

    overrides: list[str] = []
    if not raw_overrides:
        return overrides

    for group in raw_overrides:
        if group is None:
            continue
        if isinstance(group, str):
            entry = group.strip()
            if entry:
                overrides.append(entry)
            continue
        for item in group:
            if item is None:
                continue
            entry = str(item).strip()
            if entry:
                overrides.append(entry)
    return overrides


def parse_override_entry(entry: str) -> tuple[list[str], Any]:
    """Return (path, value) for a raw ``key=value`` override specification."""

    if "=" not in entry:
        raise ValueError(f"Invalid override '{entry}'. Expected format key=value")
    raw_path, raw_value = entry.split("=", 1)
    path = [segment.strip() for segment in raw_path.split(".") if segment.strip()]
    if not path:
        raise ValueError(f"Invalid override '{entry}'. Expected non-empty dot-separated path")
    value = yaml.safe_load(raw_value)
    return path, value


def apply_overrides(config: Dict[str, Any], overrides: Iterable[str]) -> Dict[str, Any]:
    """Return a copy of ``config`` with CLI overrides applied."""

    updated = deepcopy(config)
    for entry in overrides:
        keys, value = parse_override_entry(entry)
        current = updated
        for key in keys[:-1]:
            existing = current.get(key)
            if existing is None:
                existing = {}
                current[key] = existing
            elif not isinstance(existing, dict):
                raise TypeError(
                    f"Cannot apply override for {'.'.join(keys)}: segment '{key}' is not a mapping"
                )
            current = existing
        current[keys[-1]] = value
    return updated


__all__ = [
    "apply_overrides",
    "flatten_override_args",
    "load_layered_config",
    "parse_override_entry",
]
