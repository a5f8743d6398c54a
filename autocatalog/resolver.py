# -*- coding: utf-8 -*-
"""
Locale detection for the request being served.

Each detection strategy is a plain function reading one source out of a
``RequestContext``; ``LocaleResolver`` walks them in the configured order and
hands every candidate to ``LocaleValidator.set_active``.
"""

from __future__ import annotations

import ipaddress
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from werkzeug.datastructures import LanguageAccept
from werkzeug.http import parse_accept_header

from autocatalog.config import I18nOptions


logger = logging.getLogger(__name__)


class LocaleValidator:
    """Normalizes candidates and records the request's active locale."""

    def __init__(self, locales: tuple[str, ...], lowercase: bool = True):
        self.locales = tuple(locales)
        self.lowercase = lowercase
        self.locale: str | None = None

    def normalize(self, locale: str) -> str:
        value = locale.strip()
        return value.lower() if self.lowercase else value

    def validate(self, locale: Any) -> bool:
        if not isinstance(locale, str) or not locale.strip():
            return False
        return self.normalize(locale) in self.locales

    def set_active(self, locale: Any) -> bool:
        if not self.validate(locale):
            return False
        self.locale = self.normalize(locale)
        return True


def split_subdomains(host: str | None, offset: int = 2) -> list[str]:
    """Subdomains of ``host``, highest-level label last.

    ``tobi.ferrets.example.com`` -> ``['ferrets', 'tobi']``.
    """
    value = (host or '').strip().lower()
    if not value:
        return []
    if value.startswith('['):
        return []
    value = value.rsplit(':', 1)[0] if value.count(':') == 1 else value
    try:
        ipaddress.ip_address(value)
        return []
    except ValueError:
        pass
    labels = [label for label in value.split('.') if label]
    if len(labels) <= offset:
        return []
    return list(reversed(labels[:len(labels) - offset]))


@dataclass
class RequestContext:
    """Read-only snapshot of the request sources used for detection."""

    query: Mapping[str, Any] = field(default_factory=dict)
    session: Mapping[str, Any] = field(default_factory=dict)
    cookies: Mapping[str, Any] = field(default_factory=dict)
    subdomains: list[str] = field(default_factory=list)
    accept_language: str | None = None
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)

    @classmethod
    def from_request(cls, req, sess=None, subdomain_offset: int = 2) -> 'RequestContext':
        return cls(
            query=req.args,
            session=sess if sess is not None else {},
            cookies=req.cookies,
            subdomains=split_subdomains(req.host, subdomain_offset),
            accept_language=req.headers.get('Accept-Language'),
            environ=os.environ,
        )


def _non_empty(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def from_query(ctx: RequestContext, options: I18nOptions) -> str | None:
    return _non_empty(ctx.query.get(options.query_param_name))


def from_session(ctx: RequestContext, options: I18nOptions) -> str | None:
    return _non_empty(ctx.session.get(options.session_var_name))


def from_cookie(ctx: RequestContext, options: I18nOptions) -> str | None:
    return _non_empty(ctx.cookies.get(options.cookie_name))


def from_subdomain(ctx: RequestContext, options: I18nOptions) -> str | None:
    if not ctx.subdomains:
        return None
    return _non_empty(ctx.subdomains[-1])


def from_headers(ctx: RequestContext, options: I18nOptions) -> str | None:
    header = _non_empty(ctx.accept_language)
    if header is None:
        return None
    accepted = parse_accept_header(header, LanguageAccept)
    for tag, quality in accepted:
        if quality <= 0 or tag == '*':
            continue
        # primary language subtag only: en-US -> en
        return _non_empty(tag.replace('_', '-').split('-', 1)[0])
    return None


def from_environment(ctx: RequestContext, options: I18nOptions) -> str | None:
    value = _non_empty(ctx.environ.get(options.env_var_name))
    if value is None:
        return None
    return _non_empty(value.split('_', 1)[0])


Strategy = Callable[[RequestContext, I18nOptions], 'str | None']

STRATEGIES: dict[str, Strategy] = {
    'query': from_query,
    'session': from_session,
    'cookie': from_cookie,
    'subdomain': from_subdomain,
    'headers': from_headers,
    'environment': from_environment,
}


class LocaleResolver:
    def __init__(self, options: I18nOptions):
        self.options = options
        self.strategies = [(name, STRATEGIES[name]) for name in options.order]

    def resolve(self, ctx: RequestContext, validator: LocaleValidator) -> str:
        """Set ``validator.locale`` from the first strategy that succeeds.

        Falls back to the default locale, written to the same field.
        """
        for name, strategy in self.strategies:
            try:
                candidate = strategy(ctx, self.options)
            except Exception as e:
                logger.warning(f"Locale strategy '{name}' failed: {e}")
                continue
            if candidate is not None and validator.set_active(candidate):
                logger.debug(f"Locale '{validator.locale}' resolved from {name}")
                return validator.locale

        validator.locale = self.options.default_locale
        return validator.locale
