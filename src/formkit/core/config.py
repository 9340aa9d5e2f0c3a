# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Engine configuration: bundled defaults, YAML/TOML files, env overrides, dataclass binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

ENV_PREFIX = "FORMKIT_"
DEFAULTS_RESOURCE = "formkit-defaults.yaml"

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10
_PREFIX_ATTR = "__formkit_config_prefix__"
_TRUTHY = frozenset({"true", "1", "yes", "on"})


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="formkit.validation")
        @dataclass
        class ValidationProperties:
            debounce_ms: int = 300
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def env_key(key: str) -> str:
    """Environment variable that overrides ``key``.

    ``formkit.validation.debounce_ms`` -> ``FORMKIT_VALIDATION_DEBOUNCE_MS``;
    keys outside the ``formkit.`` namespace get the same prefix.
    """
    base = key.removeprefix("formkit.")
    return ENV_PREFIX + re.sub(r"[.\-]", "_", base).upper()


def _coerce(value: Any, expected: Any) -> Any:
    """Convert env-var strings to the annotated scalar type of a dataclass field."""
    if not isinstance(value, str):
        return value
    if expected is bool:
        return value.strip().lower() in _TRUTHY
    if expected is int:
        return int(value)
    if expected is float:
        return float(value)
    return value


def _merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Recursive dict merge; ``overlay`` wins and nested sections merge key by key."""
    result = dict(base)
    for key, value in overlay.items():
        current = result.get(key)
        result[key] = _merge(current, value) if isinstance(current, dict) and isinstance(value, dict) else value
    return result


def _read_document(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with path.open("rb") as fh:
            return tomllib.load(fh)
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _read_defaults() -> dict[str, Any]:
    resource = importlib.resources.files("formkit.resources").joinpath(DEFAULTS_RESOURCE)
    return yaml.safe_load(resource.read_text(encoding="utf-8")) or {}


class Config:
    """Layered configuration addressed with dotted keys.

    Lookup order for :meth:`get` (first hit wins):
    1. Environment variable named by :func:`env_key`
    2. The merged document: bundled defaults < config file < profile overlays
    3. The caller's default

    String values may reference ``${ENV_VAR}``, ``${other.key}`` or
    ``${key:fallback}``; references are expanded on read.
    """

    def __init__(self, data: dict[str, Any] | None = None, sources: Iterable[str] = ()) -> None:
        self._data: dict[str, Any] = data if data is not None else {}
        self._sources = list(sources)

    # ── construction ───────────────────────────────────────────

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load ``path`` (YAML or TOML) on top of the bundled defaults.

        For each active profile, ``{stem}-{profile}{suffix}`` next to the file
        is merged on top when it exists. A missing base file is not an error.
        """
        path = Path(path)
        layers: list[tuple[str, dict[str, Any]]] = []
        if load_defaults:
            layers.append((f"{DEFAULTS_RESOURCE} (bundled defaults)", _read_defaults()))
        if path.exists():
            layers.append((str(path), _read_document(path)))
            for profile in active_profiles or []:
                overlay = path.with_name(f"{path.stem}-{profile}{path.suffix}")
                if overlay.exists():
                    layers.append((f"{overlay} (profile: {profile})", _read_document(overlay)))

        data: dict[str, Any] = {}
        for _, layer in layers:
            data = _merge(data, layer)
        return cls(data, [source for source, _ in layers])

    @classmethod
    def defaults(cls) -> Config:
        """Configuration holding only the bundled defaults."""
        return cls(_read_defaults(), [f"{DEFAULTS_RESOURCE} (bundled defaults)"])

    @property
    def loaded_sources(self) -> list[str]:
        """Where the merged document came from, lowest precedence first."""
        return list(self._sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    # ── lookup ─────────────────────────────────────────────────

    def get(self, key: str, default: Any = None) -> Any:
        override = os.environ.get(env_key(key))
        if override is not None:
            return override
        value = self._find(key)
        if value is None:
            return default
        if isinstance(value, str):
            return self._expand(value, 0)
        return value

    def get_section(self, prefix: str) -> dict[str, Any]:
        section = self._find(prefix)
        return section if isinstance(section, dict) else {}

    def _find(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def _expand(self, value: str, depth: int) -> str:
        if "${" not in value:
            return value
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholder expansion of '{value}' is too deep; check for circular references")

        def substitute(match: re.Match[str]) -> str:
            ref, _, fallback = match.group(1).partition(":")
            from_env = os.environ.get(ref)
            if from_env is not None:
                return from_env
            found = self._find(ref)
            if found is not None:
                return self._expand(str(found), depth + 1)
            if ":" in match.group(1):
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(substitute, value)

    # ── binding ────────────────────────────────────────────────

    def bind(self, config_cls: type[T]) -> T:
        """Instantiate a ``@config_properties`` dataclass from its prefix.

        Fields read through :meth:`get`, so env overrides and placeholders
        apply; absent keys keep the dataclass default.
        """
        prefix = getattr(config_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        hints = get_type_hints(config_cls)
        values: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            raw = self.get(f"{prefix}.{field.name}")
            if raw is not None:
                values[field.name] = _coerce(raw, hints.get(field.name))
        return config_cls(**values)
