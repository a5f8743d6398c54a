# -*- coding: utf-8 -*-
"""
Placeholder registration for keys missing from every catalog.
"""

from __future__ import annotations

import logging

from autocatalog.catalog import CatalogStore, flatten_catalog, insert_key


logger = logging.getLogger(__name__)


class CatalogWriter:
    """Adds unknown keys to every locale's unit catalog file.

    Disk gets an empty placeholder. In memory the active locale's catalog
    gets the key itself so the page keeps rendering readable text; other
    locales that are already cached get the same empty value the disk has.
    """

    def __init__(self, store: CatalogStore, locales: tuple[str, ...]):
        self.store = store
        self.locales = tuple(locales)

    def register_missing_key(self, key: str, base_dir: str, directory: str, active_locale: str) -> None:
        sep = self.store.options.key_separator
        for locale in self.locales:
            path = self.store.resolve_path(base_dir, directory, locale)
            document = self.store.read_document(path)

            if document is None:
                # keep a broken hand-edited file for a human to fix
                logger.warning(f"Not registering {key!r} in unparsable catalog {path}")
                document = {}
            elif insert_key(document, key, '', sep):
                try:
                    self.store.write_document(path, document)
                    logger.info(f"Registered new key in {path}: {key!r}")
                except OSError as e:
                    logger.warning(f"Failed to write catalog {path}: {e}")

            value = key if locale == active_locale else ''
            cached = self.store.cache.set_entry(path, key, value, overwrite=False)
            if not cached and locale == active_locale:
                on_disk = flatten_catalog(document, sep)
                on_disk[key] = value
                self.store.cache.setdefault(path, on_disk)


class NullCatalogWriter:
    """Writer used when auto-registration is switched off."""

    def register_missing_key(self, key: str, base_dir: str, directory: str, active_locale: str) -> None:
        logger.debug(f"Auto-registration disabled, not recording {key!r}")
