# -*- coding: utf-8 -*-
"""
JSON catalog storage.

Catalog files may nest keys for readability; in memory every catalog is a
flat ``{key: text}`` dict. Loaded catalogs live in a ``CatalogCache`` shared
by all requests for the lifetime of the process.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from typing import Any, Hashable

from autocatalog.config import I18nOptions


logger = logging.getLogger(__name__)

Catalog = dict[str, str]


def flatten_catalog(data: dict[str, Any], sep: str = '.') -> Catalog:
    """``{'a': {'b': 'x'}}`` -> ``{'a.b': 'x'}``."""
    flat: Catalog = {}

    def _walk(prefix: str, node: Any) -> None:
        if isinstance(node, dict):
            items = node.items()
        elif isinstance(node, list):
            items = ((str(i), v) for i, v in enumerate(node))
        else:
            flat[prefix] = '' if node is None else str(node)
            return
        for k, v in items:
            _walk(f'{prefix}{sep}{k}' if prefix else str(k), v)

    for key, value in data.items():
        _walk(str(key), value)
    return flat


def unflatten_catalog(catalog: Catalog, sep: str = '.') -> dict[str, Any]:
    """Inverse of ``flatten_catalog``.

    Keys with an empty path segment (``'Save changes.'``) and keys whose parent
    path already holds a string stay flat, so reloading yields the same keys.
    """
    nested: dict[str, Any] = {}
    for key, value in catalog.items():
        parts = key.split(sep)
        if len(parts) == 1 or '' in parts:
            _put_literal(nested, key, value)
            continue

        node = nested
        for part in parts[:-1]:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                node = None
                break
            node = child
        if node is None or isinstance(node.get(parts[-1]), dict):
            _put_literal(nested, key, value)
        else:
            node[parts[-1]] = value
    return nested


def _put_literal(nested: dict[str, Any], key: str, value: str) -> bool:
    if isinstance(nested.get(key), dict):
        logger.warning(f"Catalog key '{key}' collides with a nested group, not written")
        return False
    nested[key] = value
    return True


def insert_key(document: dict[str, Any], key: str, value: str, sep: str = '.') -> bool:
    """Add flat ``key`` to a parsed catalog document in place.

    Existing entries keep their original JSON values. Uses the same nesting
    rules as ``unflatten_catalog``. Returns False if nothing was added.
    """
    if key in flatten_catalog(document, sep):
        return False
    parts = key.split(sep)
    if len(parts) == 1 or '' in parts:
        return _put_literal(document, key, value)

    node = document
    for part in parts[:-1]:
        if part not in node:
            node[part] = {}
        child = node[part]
        if not isinstance(child, dict):
            return _put_literal(document, key, value)
        node = child
    if parts[-1] in node:
        return _put_literal(document, key, value)
    node[parts[-1]] = value
    return True


class CatalogCache:
    """Process-wide catalog cache. Entries are never evicted."""

    def __init__(self):
        self._entries: dict[Hashable, Catalog] = {}
        self._lock = threading.RLock()

    def __contains__(self, cache_key: Hashable) -> bool:
        with self._lock:
            return cache_key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, cache_key: Hashable) -> Catalog | None:
        with self._lock:
            return self._entries.get(cache_key)

    def setdefault(self, cache_key: Hashable, catalog: Catalog) -> Catalog:
        """Store ``catalog`` unless another request cached one first."""
        with self._lock:
            return self._entries.setdefault(cache_key, catalog)

    def put(self, cache_key: Hashable, catalog: Catalog) -> None:
        with self._lock:
            self._entries[cache_key] = catalog

    def set_entry(self, cache_key: Hashable, key: str, value: str, overwrite: bool = True) -> bool:
        """Set one key of a cached catalog. Returns False if not cached."""
        with self._lock:
            catalog = self._entries.get(cache_key)
            if catalog is None:
                return False
            if overwrite or key not in catalog:
                catalog[key] = value
            return True


class CatalogStore:
    """Unit catalogs, one per ``<base_dir>/<directory>/<locale>.<ext>`` file."""

    def __init__(self, cache: CatalogCache, options: I18nOptions):
        self.cache = cache
        self.options = options

    def resolve_path(self, base_dir: str, directory: str, locale: str) -> str:
        return os.path.join(base_dir, directory, f'{locale}.{self.options.file_extension}')

    def read_document(self, path: str) -> dict[str, Any] | None:
        """Parsed JSON object at ``path``.

        A missing file reads as ``{}``; an unreadable or malformed one as None.
        """
        try:
            with open(path, 'r', encoding='utf-8') as fp:
                data = json.load(fp)
        except FileNotFoundError:
            logger.debug(f"Catalog file not found, using empty catalog: {path}")
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read catalog {path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Catalog {path} is not a JSON object, ignoring")
            return None
        return data

    def load(self, path: str) -> Catalog:
        """Read and flatten a catalog file; any failure reads as empty."""
        data = self.read_document(path)
        if data is None:
            return {}
        return flatten_catalog(data, self.options.key_separator)

    def get(self, base_dir: str, directory: str, locale: str) -> Catalog:
        path = self.resolve_path(base_dir, directory, locale)
        catalog = self.cache.get(path)
        if catalog is None:
            catalog = self.cache.setdefault(path, self.load(path))
        return catalog

    def persist(self, path: str, catalog: Catalog) -> None:
        """Overwrite ``path`` with the nested form of ``catalog``.

        Raises OSError; callers decide whether the write matters.
        """
        self.write_document(path, unflatten_catalog(catalog, self.options.key_separator))

    def write_document(self, path: str, data: dict[str, Any]) -> None:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        indent = self.options.json_indent or None
        with open(path, 'w', encoding='utf-8') as fp:
            json.dump(data, fp, ensure_ascii=False, indent=indent)
            fp.write('\n')


class JointCatalogStore:
    """Shared catalogs under the joint directory, loaded once and read-only."""

    def __init__(self, cache: CatalogCache, store: CatalogStore):
        self.cache = cache
        self.store = store

    @staticmethod
    def cache_key(locale: str) -> tuple[str, str]:
        return ('joint', locale)

    def preload(self, joint_dir: str, locales: tuple[str, ...]) -> None:
        for locale in locales:
            path = os.path.join(joint_dir, f'{locale}.{self.store.options.file_extension}')
            catalog = self.store.load(path)
            self.cache.put(self.cache_key(locale), catalog)
            logger.debug(f"Loaded {len(catalog)} joint strings for '{locale}' from {path}")

    def get(self, locale: str) -> Catalog:
        return self.cache.get(self.cache_key(locale)) or {}

    def dump_all(self, locale: str) -> Catalog:
        return dict(self.get(locale))
