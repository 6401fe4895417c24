"""Builtin skill and agent metadata."""

from yoom.catalog.catalog import (
    AgentInfo,
    BuiltinCatalog,
    CatalogError,
    Skill,
    default_catalog,
    load_catalog,
)

__all__ = [
    "AgentInfo",
    "BuiltinCatalog",
    "CatalogError",
    "Skill",
    "default_catalog",
    "load_catalog",
]
