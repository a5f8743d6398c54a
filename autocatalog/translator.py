# -*- coding: utf-8 -*-
"""
Key lookup across unit and joint catalogs.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from autocatalog.catalog import CatalogStore, JointCatalogStore


logger = logging.getLogger(__name__)


def format_message(text: str, args: Sequence[Any] | None = None) -> str:
    """printf-style substitution: ``format_message('Hi %s', ['Bob'])``."""
    if args is None:
        return text
    if isinstance(args, (str, bytes)) or not isinstance(args, Sequence):
        args = (args,)
    try:
        return text % tuple(args)
    except (TypeError, ValueError, KeyError) as e:
        logger.warning(f"Failed to format {text!r} with {args!r}: {e}")
        return text


class Translator:
    def __init__(self, store: CatalogStore, joint: JointCatalogStore, writer):
        self.store = store
        self.joint = joint
        self.writer = writer

    def translate(self, key: str, locale: str, base_dir: str, directory: str) -> str:
        """Unit catalog first, then joint; unknown keys are registered and echoed."""
        catalog = self.store.get(base_dir, directory, locale)
        if key in catalog:
            return catalog[key]

        joint = self.joint.get(locale)
        if key in joint:
            return joint[key]

        try:
            self.writer.register_missing_key(key, base_dir, directory, locale)
        except Exception as e:
            logger.error(f"Failed to register key {key!r}: {e}")
        return key
