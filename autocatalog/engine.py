# -*- coding: utf-8 -*-
"""
Per-application engine and the per-request i18n handle built from it.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Sequence

from autocatalog.catalog import Catalog, CatalogCache, CatalogStore, JointCatalogStore
from autocatalog.config import I18nOptions
from autocatalog.resolver import LocaleResolver, LocaleValidator, RequestContext
from autocatalog.translator import Translator, format_message
from autocatalog.writer import CatalogWriter, NullCatalogWriter


logger = logging.getLogger(__name__)


class I18nEngine:
    """Shared state for one application: options, caches and collaborators.

    Built once at startup. Joint catalogs are read here and never again.
    """

    def __init__(self, options: I18nOptions, cache: CatalogCache | None = None, writer=None, root_path: str | None = None):
        self.options = options
        self.root_path = root_path
        self.cache = cache if cache is not None else CatalogCache()
        self.store = CatalogStore(self.cache, options)
        self.joint = JointCatalogStore(self.cache, self.store)
        if writer is None:
            writer = CatalogWriter(self.store, options.locales) if options.auto_register else NullCatalogWriter()
        self.writer = writer
        self.translator = Translator(self.store, self.joint, self.writer)
        self.resolver = LocaleResolver(options)

        self.joint.preload(options.joint_dir, options.locales)
        logger.info(
            f"i18n engine ready: locales={list(options.locales)}, "
            f"default={options.default_locale}, order={list(options.order)}"
        )

    def resolve_dir(self, path: str) -> str:
        if self.root_path and not os.path.isabs(path):
            return os.path.join(self.root_path, path)
        return path

    def begin(self, ctx: RequestContext | None = None) -> 'RequestI18n':
        """Create the request handle and resolve its locale."""
        handle = RequestI18n(self)
        self.resolver.resolve(ctx if ctx is not None else RequestContext(), handle.validator)
        return handle


class RequestI18n:
    """i18n API for a single request. Never shared between requests."""

    def __init__(self, engine: I18nEngine):
        self.engine = engine
        self.validator = LocaleValidator(engine.options.locales, engine.options.lowercase_locale)
        self.validator.locale = engine.options.default_locale
        self.base_dir = engine.options.base_dir
        self.directory = engine.options.directory

    def get_locale(self) -> str:
        return self.validator.locale

    def get_locales(self) -> list[str]:
        return list(self.engine.options.locales)

    def get_default_locale(self) -> str:
        return self.engine.options.default_locale

    def set_locale(self, locale: Any) -> bool:
        """Switch the active locale; unsupported values are rejected."""
        return self.validator.set_active(locale)

    def set_base_dir(self, path: str) -> None:
        self.base_dir = self.engine.resolve_dir(path)

    def set_directory(self, path: str) -> None:
        self.directory = path

    def translate(self, key: str, args: Sequence[Any] | None = None) -> str:
        text = self.engine.translator.translate(key, self.get_locale(), self.base_dir, self.directory)
        return format_message(text, args)

    __ = translate

    def dump_all_strings(self, locale: str | None = None) -> Catalog:
        if locale:
            locale = self.validator.normalize(locale)
        return self.engine.joint.dump_all(locale or self.get_locale())
