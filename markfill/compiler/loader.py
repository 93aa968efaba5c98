"""Read markfill.yaml, data files and template files from disk."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from markfill.markup.html import HtmlMarkup
from markfill.markup.registry import TemplateRegistry
from markfill.types import Element, Fragment, RenderConfig

CONFIG_FILE = "markfill.yaml"

# Accepted spellings -> internal key
KEYWORD_MAP = {
    "partials": "templates",
    "template_dirs": "templates",
    "context": "data",
    "tables": "table_tags",
    "table-tags": "table_tags",
}

_CONFIG_KEYS = frozenset({"templates", "data", "table_tags"})


def _normalize_key(key: str) -> str:
    return KEYWORD_MAP.get(key, key)


def parse_config_yaml(content: str) -> RenderConfig:
    raw = yaml.safe_load(content)
    if raw is None:
        return RenderConfig()
    if not isinstance(raw, dict):
        raise ValueError("Invalid config: expected a mapping")

    normalized = {_normalize_key(k): v for k, v in raw.items()}

    templates = normalized.get("templates") or []
    if isinstance(templates, str):
        templates = [templates]
    if not isinstance(templates, list):
        raise ValueError('Invalid config: "templates" must be a path or a list of paths')

    data = normalized.get("data")
    if data is not None and not isinstance(data, str):
        raise ValueError('Invalid config: "data" must be a path')

    return RenderConfig(
        templates=[str(t) for t in templates],
        data=data,
        table_tags=bool(normalized.get("table_tags", False)),
        extra={k: v for k, v in normalized.items() if k not in _CONFIG_KEYS},
    )


def load_config(cwd: str | Path) -> RenderConfig:
    """Config from ``<cwd>/markfill.yaml``; defaults when the file is absent.

    Relative paths in the file are resolved against ``cwd``.
    """
    base = Path(cwd)
    path = base / CONFIG_FILE
    if not path.exists():
        return RenderConfig()

    config = parse_config_yaml(path.read_text(encoding="utf-8"))
    config.templates = [str(base / t) for t in config.templates]
    if config.data:
        config.data = str(base / config.data)
    return config


def load_data(path: str | Path) -> dict[str, Any]:
    """Data context from a .json, .yaml or .yml file."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid data file {path}: expected a mapping at the top level")
    return data


def load_template(path: str | Path, markup: HtmlMarkup | None = None) -> Fragment:
    return (markup or HtmlMarkup()).parse(Path(path).read_text(encoding="utf-8"))


def build_registry(sources: list[str], document: Fragment | None = None,
                   markup: HtmlMarkup | None = None) -> TemplateRegistry:
    """Registry from template files/directories plus the ``<template id>`` elements of ``document``."""
    markup = markup or HtmlMarkup()
    registry = TemplateRegistry(markup=markup)
    for source in sources:
        path = Path(source)
        if path.is_dir():
            registry.update(TemplateRegistry.from_directory(path, markup=markup))
        elif path.is_file():
            tree = load_template(path, markup)
            registry.register(path.stem, tree)
            registry.update(TemplateRegistry.from_document(tree, markup=markup))
        else:
            raise ValueError(f"Template source not found: {path}")
    if document is not None:
        registry.update(TemplateRegistry.from_document(document, markup=markup))
    return registry


def strip_template_definitions(document: Fragment) -> Fragment:
    """Copy of ``document`` without its ``<template id>`` definitions."""
    result = document.clone()

    def prune(node: Element | Fragment) -> None:
        node.children = [
            child for child in node.children
            if not (isinstance(child, Element) and child.tag == "template" and child.get("id"))
        ]
        for child in node.children:
            if isinstance(child, Element):
                prune(child)

    prune(result)
    return result
