# -*- coding: utf-8 -*-
"""
Exception types raised while configuring the i18n extension.

Request-time paths never raise: lookups degrade to the key itself,
missing catalogs read as empty and write failures are only logged.
"""

from __future__ import annotations


class I18nError(Exception):
    """Base class for autocatalog errors."""


class I18nConfigError(I18nError, ValueError):
    """Invalid extension configuration, raised from ``init_app``."""

    def __init__(self, option: str, message: str):
        self.option = option
        super().__init__(f'{option}: {message}')
