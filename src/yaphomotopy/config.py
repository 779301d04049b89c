"""Engine configuration and level-of-detail presets for yapHomotopy.

Configuration is a plain value: an immutable ``EngineConfig`` for the
sampling engine and an immutable ``LodTable`` mapping level-of-detail
names to per-arity sampling resolutions.  Nothing here is global
mutable state; ``load_config`` returns fresh values every call.

A configuration file is a YAML document with two optional sections::

    engine:
      workers: 4
      chunk_size: 2048
      domain_policy: warn
    lod:
      preview:
        curve: [8]
        patch: [8, 8]
        volume: [4, 4, 4]

Missing sections or keys fall back to the module defaults.

Copyright (c) 2026 yapHomotopy contributors
MIT License
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

__all__ = [
    "YAPHOMOTOPY_CONFIG",
    "DEFAULT_WORKERS",
    "DEFAULT_CHUNK_SIZE",
    "DOMAIN_POLICIES",
    "EngineConfig",
    "LodTable",
    "DEFAULT_LOD",
    "load_config",
    "default_config",
]

# Environment variable naming a YAML configuration file
YAPHOMOTOPY_CONFIG = "YAPHOMOTOPY_CONFIG"

DEFAULT_WORKERS = 1
DEFAULT_CHUNK_SIZE = 4096

DOMAIN_POLICIES = ("ignore", "warn", "raise")

_ARITY_KEYS = {1: "curve", 2: "patch", 3: "volume"}


@dataclass(frozen=True)
class EngineConfig:
    """Settings for ``sampling.sample`` and ``maps.evaluate``.

    Attributes:
        workers: number of threads used to evaluate grid points; 1 means
            evaluate serially on the calling thread.
        chunk_size: number of grid points handed to a worker at a time.
        domain_policy: what to do with parameters outside [0,1] when a
            map is evaluated through ``maps.evaluate(..., config=cfg)``
            without an explicit policy: ``'ignore'``, ``'warn'`` (log a
            warning) or ``'raise'``.
    """

    workers: int = DEFAULT_WORKERS
    chunk_size: int = DEFAULT_CHUNK_SIZE
    domain_policy: str = "ignore"

    def __post_init__(self) -> None:
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ValueError(f"workers must be a positive integer, got {self.workers!r}")
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int) or self.chunk_size < 1:
            raise ValueError(f"chunk_size must be a positive integer, got {self.chunk_size!r}")
        if self.domain_policy not in DOMAIN_POLICIES:
            raise ValueError(
                f"domain_policy must be one of {DOMAIN_POLICIES}, got {self.domain_policy!r}"
            )


def _freeze_resolution(level: str, key: str, value: Any) -> Tuple[int, ...]:
    if isinstance(value, int) and not isinstance(value, bool):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"lod level {level!r}: {key} resolution must be a list, got {value!r}")
    expected = {v: k for k, v in _ARITY_KEYS.items()}[key]
    if len(value) != expected:
        raise ValueError(
            f"lod level {level!r}: {key} resolution needs {expected} entries, got {list(value)}"
        )
    out = []
    for n in value:
        if isinstance(n, bool) or not isinstance(n, int) or n < 2:
            raise ValueError(f"lod level {level!r}: bad sample count {n!r} in {key}")
        out.append(n)
    return tuple(out)


@dataclass(frozen=True)
class LodTable:
    """Named level-of-detail presets.

    ``levels`` maps a level name to a mapping of ``'curve'``, ``'patch'``
    and/or ``'volume'`` to a resolution tuple.  A level that omits an
    arity derives it from the first resolution it does define, repeating
    that axis count.
    """

    levels: Mapping[str, Mapping[str, Tuple[int, ...]]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen: Dict[str, Mapping[str, Tuple[int, ...]]] = {}
        for name, entry in dict(self.levels).items():
            if not isinstance(entry, Mapping) or not entry:
                raise ValueError(f"lod level {name!r} must be a non-empty mapping")
            entries = {}
            for key, value in entry.items():
                if key not in _ARITY_KEYS.values():
                    raise ValueError(f"lod level {name!r}: unknown key {key!r}")
                entries[key] = _freeze_resolution(name, key, value)
            frozen[str(name)] = MappingProxyType(entries)
        object.__setattr__(self, "levels", MappingProxyType(frozen))

    def names(self) -> Tuple[str, ...]:
        return tuple(self.levels)

    def resolution_for(self, level: str, arity: int) -> Tuple[int, ...]:
        """Return the resolution of ``level`` for a map of ``arity``.

        Raises ``KeyError`` for an unknown level and ``ValueError`` for an
        arity outside 1..3.
        """
        if arity not in _ARITY_KEYS:
            raise ValueError(f"bad arity passed to resolution_for: {arity}")
        try:
            entry = self.levels[level]
        except KeyError:
            raise KeyError(f"unknown level of detail {level!r}; known: {list(self.levels)}") from None
        key = _ARITY_KEYS[arity]
        if key in entry:
            return entry[key]
        fallback = next(iter(entry.values()))
        return (fallback[0],) * arity

    def merged(self, other: "LodTable") -> "LodTable":
        """Return a table with the levels of ``other`` overriding ours."""
        levels = dict(self.levels)
        levels.update(other.levels)
        return LodTable({k: dict(v) for k, v in levels.items()})


DEFAULT_LOD = LodTable({
    "low": {"curve": [8], "patch": [8, 8], "volume": [4, 4, 4]},
    "medium": {"curve": [32], "patch": [24, 24], "volume": [12, 12, 12]},
    "high": {"curve": [128], "patch": [96, 96], "volume": [32, 32, 32]},
})


def load_config(path: Path | str) -> Tuple[EngineConfig, LodTable]:
    """Read a YAML configuration file.

    Returns ``(engine_config, lod_table)``.  Levels in the file are
    merged over ``DEFAULT_LOD``.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(f"configuration not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"configuration root must be a mapping: {cfg_path}")

    engine_data = data.get("engine") or {}
    if not isinstance(engine_data, dict):
        raise ValueError("'engine' section must be a mapping")
    unknown = set(engine_data) - {"workers", "chunk_size", "domain_policy"}
    if unknown:
        raise ValueError(f"unknown engine settings: {sorted(unknown)}")
    engine = EngineConfig(**engine_data)

    lod_data = data.get("lod") or {}
    if not isinstance(lod_data, dict):
        raise ValueError("'lod' section must be a mapping")
    lod = DEFAULT_LOD.merged(LodTable(lod_data))

    logger.info("Loaded configuration from %s (%d lod levels)", cfg_path, len(lod.levels))
    return engine, lod


def default_config() -> Tuple[EngineConfig, LodTable]:
    """Return the configuration named by ``$YAPHOMOTOPY_CONFIG``, or defaults."""
    env_path: Optional[str] = os.environ.get(YAPHOMOTOPY_CONFIG)
    if env_path:
        return load_config(env_path)
    return EngineConfig(), DEFAULT_LOD
