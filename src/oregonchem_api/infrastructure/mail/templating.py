# Copyright (c) Oregonchem.
# SPDX-License-Identifier: MIT
"""Jinja2 environment for notification mail templates.

The environment is built by the caller (one per dispatcher instance) so tests
can construct dispatchers with their own loaders; nothing here is a
module-level singleton.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup, escape

TEMPLATES_DIR: Path = Path(__file__).resolve().parent / "templates"


def nl2br(value: str | None) -> Markup:
    """Escape ``value`` and turn each line break into ``<br>``."""
    if not value:
        return Markup("")
    return Markup("<br>\n").join(escape(line) for line in value.splitlines())


def build_template_environment(loader: BaseLoader | None = None) -> Environment:
    """Return an autoescaping environment with the project filters installed.

    Args:
        loader: Template loader; defaults to the bundled ``templates`` directory.
    """
    env = Environment(
        loader=loader or FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["nl2br"] = nl2br
    return env
