"""Literal ``{{KEY}}`` placeholder substitution.

Every token is matched exactly in a single regular-expression pass, so a key
that is a prefix of another (``SITE`` and ``SITE_NAME``) can never corrupt the
output, and text inserted by a replacement is never scanned again.
"""

from __future__ import annotations

import re
import typing as typ

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")
COMPONENT_PLACEHOLDER_PATTERN = re.compile(r"\{\{COMPONENT:([^{}]+)\}\}")


def substitute(template: str, variables: typ.Mapping[str, typ.Any]) -> str:
    """Replace every ``{{KEY}}`` token whose key is present in ``variables``.

    Tokens with unknown keys are left verbatim, as are tokens whose value is an
    array or mapping; those are expanded by component hooks instead.

    Examples
    --------
    >>> substitute("{{X}} and {{Y}}", {"X": "1", "Y": "2"})
    '1 and 2'
    >>> substitute("{{X}} {{MISSING}}", {"X": 1})
    '1 {{MISSING}}'
    >>> substitute("{{ITEMS}}", {"ITEMS": ["a", "b"]})
    '{{ITEMS}}'
    """

    def _repl(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in variables:
            return match.group(0)
        value = variables[key]
        if isinstance(value, list | tuple | dict):
            return match.group(0)
        return stringify(value)

    return PLACEHOLDER_PATTERN.sub(_repl, template)


def stringify(value: object) -> str:
    """Return the text inserted for a scalar variable value."""
    match value:
        case None:
            return ""
        case bool():
            return "true" if value else "false"
        case str():
            return value
        case _:
            return str(value)


class SubstituteFn(typ.Protocol):
    """Callable signature of :func:`substitute` handed to component hooks."""

    def __call__(self, template: str, variables: typ.Mapping[str, typ.Any]) -> str: ...


__all__ = [
    "COMPONENT_PLACEHOLDER_PATTERN",
    "PLACEHOLDER_PATTERN",
    "SubstituteFn",
    "stringify",
    "substitute",
]
