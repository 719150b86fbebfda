"""
Holder variants.

`REGISTRY` maps the canonical snake-case name of each variant to its
config; `ALIASES` maps every accepted spelling (kebab, snake, human
names) to that canonical name.
"""
from __future__ import annotations

from typing import Dict

from .config import VARIANTS, HolderConfig, JackTray, Variant, config_for

REGISTRY: Dict[str, HolderConfig] = {}
ALIASES: Dict[str, str] = {}


def _register(name_snake: str, cfg: HolderConfig) -> None:
    key = name_snake.lower()
    REGISTRY[key] = cfg
    ALIASES.setdefault(key, key)
    ALIASES.setdefault(key.replace("_", "-"), key)


def _add_alias(raw_slug: str, target_snake: str) -> None:
    raw = raw_slug.strip().lower()
    ALIASES.setdefault(raw, target_snake)
    ALIASES.setdefault(raw.replace("-", "_"), target_snake)
    ALIASES.setdefault(raw.replace("_", "-"), target_snake)


for _variant, _cfg in VARIANTS.items():
    _register(_variant.value, _cfg)

_extra = {
    "4-port": "full",
    "four_port": "full",
    "elite_c": "full",
    "2-port": "compact",
    "two_port": "compact",
    "nice_nano": "compact",
}
for k, v in _extra.items():
    if v in REGISTRY:
        _add_alias(k, v)


def resolve(slug: str) -> HolderConfig:
    """Config for `slug`; raises KeyError for unknown variants."""
    raw = (slug or "").strip().lower()
    key = ALIASES.get(raw, ALIASES.get(raw.replace("-", "_")))
    if key is None:
        raise KeyError(slug)
    return REGISTRY[key]


__all__ = [
    "REGISTRY",
    "ALIASES",
    "resolve",
    "HolderConfig",
    "JackTray",
    "Variant",
    "VARIANTS",
    "config_for",
]
