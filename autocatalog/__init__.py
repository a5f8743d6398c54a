# -*- coding: utf-8 -*-
"""
Request-scoped locale detection and self-populating JSON catalogs for Flask.
"""

from autocatalog.catalog import CatalogCache, CatalogStore, JointCatalogStore
from autocatalog.config import I18nOptions
from autocatalog.engine import I18nEngine, RequestI18n
from autocatalog.errors import I18nConfigError, I18nError
from autocatalog.extension import I18n, current_i18n, get_i18n, translate
from autocatalog.resolver import LocaleResolver, LocaleValidator, RequestContext
from autocatalog.translator import Translator, format_message
from autocatalog.writer import CatalogWriter, NullCatalogWriter

__version__ = '0.2.0'

__all__ = [
    'CatalogCache',
    'CatalogStore',
    'CatalogWriter',
    'I18n',
    'I18nConfigError',
    'I18nEngine',
    'I18nError',
    'I18nOptions',
    'JointCatalogStore',
    'LocaleResolver',
    'LocaleValidator',
    'NullCatalogWriter',
    'RequestContext',
    'RequestI18n',
    'Translator',
    'current_i18n',
    'format_message',
    'get_i18n',
    'translate',
]
