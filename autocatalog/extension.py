# -*- coding: utf-8 -*-
"""
Flask integration.

    i18n = I18n(app)            # or I18n() + i18n.init_app(app)

    @app.route('/')
    def index():
        return current_i18n.translate('Hello')

Templates get ``__``, ``get_locale``, ``get_locales`` and ``get_default_locale``.
"""

from __future__ import annotations

from typing import Any, Sequence

from flask import Flask, current_app, g, has_request_context, request, session
from werkzeug.local import LocalProxy

from autocatalog.config import I18nOptions
from autocatalog.engine import I18nEngine, RequestI18n
from autocatalog.resolver import RequestContext


EXTENSION_NAME = 'autocatalog'


class I18n:
    def __init__(self, app: Flask | None = None, **overrides: Any):
        self.overrides = overrides
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> I18nEngine:
        options = I18nOptions.from_mapping(app.config, root_path=app.root_path, **self.overrides)
        engine = I18nEngine(options, root_path=app.root_path)
        app.extensions[EXTENSION_NAME] = engine
        app.before_request(_define_locale)
        app.context_processor(_template_context)
        return engine

    @staticmethod
    def get_engine(app: Flask | None = None) -> I18nEngine:
        app = app or current_app
        try:
            return app.extensions[EXTENSION_NAME]
        except KeyError:
            raise RuntimeError('I18n extension is not registered on this application') from None


def _define_locale() -> None:
    engine = I18n.get_engine()
    ctx = RequestContext.from_request(request, session, engine.options.subdomain_offset)
    g.i18n = engine.begin(ctx)


def _template_context() -> dict[str, Any]:
    if not has_request_context():
        return {}
    i18n = get_i18n()
    return {
        '__': i18n.translate,
        'get_locale': i18n.get_locale,
        'get_locales': i18n.get_locales,
        'get_default_locale': i18n.get_default_locale,
    }


def get_i18n() -> RequestI18n:
    """Request handle, created on first use if ``before_request`` did not run."""
    if not has_request_context():
        raise RuntimeError('i18n is only available inside a request')
    i18n = g.get('i18n')
    if i18n is None:
        _define_locale()
        i18n = g.i18n
    return i18n


current_i18n: RequestI18n = LocalProxy(get_i18n)  # type: ignore[assignment]


def translate(key: str, args: Sequence[Any] | None = None) -> str:
    return get_i18n().translate(key, args)
