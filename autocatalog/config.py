# -*- coding: utf-8 -*-
"""
Extension options.

Options come from ``app.config`` (``I18N_*`` keys) with keyword overrides
passed to ``I18n(app, **overrides)`` taking precedence.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from autocatalog.errors import I18nConfigError


STRATEGY_NAMES = ('query', 'session', 'cookie', 'subdomain', 'headers', 'environment')

DEFAULT_OPTIONS: dict[str, Any] = {
    'locales': ('en',),
    'default_locale': 'en',
    'lowercase_locale': True,
    'base_dir': '.',
    'directory': 'locales',
    'joint_dir': 'locales',
    'query_param_name': 'lang',
    'cookie_name': 'lang',
    'session_var_name': 'lang',
    'env_var_name': 'LANG',
    'order': STRATEGY_NAMES,
    'json_indent': 4,
    'file_extension': 'json',
    'key_separator': '.',
    'subdomain_offset': 2,
    'auto_register': True,
}

# app.config key -> option name
CONFIG_KEYS: dict[str, str] = {
    'I18N_LOCALES': 'locales',
    'I18N_DEFAULT_LOCALE': 'default_locale',
    'I18N_LOWERCASE_LOCALE': 'lowercase_locale',
    'I18N_BASE_DIR': 'base_dir',
    'I18N_DIRECTORY': 'directory',
    'I18N_JOINT_DIR': 'joint_dir',
    'I18N_QUERY_PARAM': 'query_param_name',
    'I18N_COOKIE_NAME': 'cookie_name',
    'I18N_SESSION_VAR': 'session_var_name',
    'I18N_ENV_VAR': 'env_var_name',
    'I18N_ORDER': 'order',
    'I18N_JSON_INDENT': 'json_indent',
    'I18N_FILE_EXTENSION': 'file_extension',
    'I18N_KEY_SEPARATOR': 'key_separator',
    'I18N_SUBDOMAIN_OFFSET': 'subdomain_offset',
    'I18N_AUTO_REGISTER': 'auto_register',
}


@dataclass(frozen=True)
class I18nOptions:
    locales: tuple[str, ...]
    default_locale: str
    lowercase_locale: bool
    base_dir: str
    directory: str
    joint_dir: str
    query_param_name: str
    cookie_name: str
    session_var_name: str
    env_var_name: str
    order: tuple[str, ...]
    json_indent: int
    file_extension: str
    key_separator: str
    subdomain_offset: int
    auto_register: bool

    @classmethod
    def from_mapping(
        cls,
        config: Mapping[str, Any] | None = None,
        root_path: str | None = None,
        **overrides: Any,
    ) -> 'I18nOptions':
        """Build validated options from a Flask-style config mapping."""
        values = dict(DEFAULT_OPTIONS)
        for config_key, option in CONFIG_KEYS.items():
            if config and config_key in config:
                values[option] = config[config_key]
        for option, value in overrides.items():
            if option not in DEFAULT_OPTIONS:
                raise I18nConfigError(option, 'unknown option')
            values[option] = value

        values['locales'] = tuple(values['locales'] or ())
        values['order'] = tuple(values['order'] or ())

        if root_path:
            for option in ('base_dir', 'joint_dir'):
                values[option] = os.path.join(root_path, values[option])

        options = cls(**values)
        options.validate()
        return options

    def validate(self) -> None:
        if not self.locales:
            raise I18nConfigError('locales', 'at least one locale is required')
        for locale in self.locales:
            if not isinstance(locale, str) or not locale:
                raise I18nConfigError('locales', f'invalid locale {locale!r}')
        if self.default_locale not in self.locales:
            raise I18nConfigError(
                'default_locale',
                f'{self.default_locale!r} is not one of {list(self.locales)}',
            )
        for name in self.order:
            if name not in STRATEGY_NAMES:
                raise I18nConfigError('order', f'unknown strategy {name!r}')
        if not isinstance(self.json_indent, int) or self.json_indent < 0:
            raise I18nConfigError('json_indent', 'must be a non-negative integer')
        if not self.file_extension:
            raise I18nConfigError('file_extension', 'must not be empty')
        if not self.key_separator:
            raise I18nConfigError('key_separator', 'must not be empty')
        if not isinstance(self.subdomain_offset, int) or self.subdomain_offset < 0:
            raise I18nConfigError('subdomain_offset', 'must be a non-negative integer')
