"""Readers for GitHub Actions inputs.

The runner exposes each `with:` input as an ``INPUT_<NAME>`` environment
variable: spaces become underscores, the name is upper-cased and hyphens
are kept.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from .errors import MissingInput


def input_variable(name: str) -> str:
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return (env.get(input_variable(name)) or "").strip()


def required_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    value = get_input(name, environ)
    if not value:
        raise MissingInput(name)
    return value


def required_multiline_input(
    name: str, environ: Optional[Mapping[str, str]] = None
) -> tuple[str, ...]:
    """One entry per non-blank line; blank lines are dropped, not rejected."""
    lines = tuple(
        line.strip() for line in get_input(name, environ).splitlines() if line.strip()
    )
    if not lines:
        raise MissingInput(name)
    return lines


def optional_input(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    return get_input(name, environ) or None
