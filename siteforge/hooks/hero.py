"""Hero banner with default copy, background, height, and overlay."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from siteforge.templating.hooks import ResolveFn
    from siteforge.templating.substitute import SubstituteFn

HERO_DEFAULTS: dict[str, str] = {
    "HERO_TITLE": "Welcome",
    "HERO_SUBTITLE": "Your subtitle here",
    "HERO_BG_IMAGE": "assets/images/hero.png",
    "HERO_HEIGHT": "100vh",
}
DEFAULT_OVERLAY = "0.45"


def build(
    vars: dict[str, typ.Any],  # noqa: A002 - hook contract
    resolve: ResolveFn,
    substitute: SubstituteFn,
) -> str:
    hero_vars = dict(vars)
    for key, default in HERO_DEFAULTS.items():
        hero_vars[key] = vars.get(key) or default
    # An explicit overlay of 0 disables the tint.
    overlay = vars.get("HERO_OVERLAY")
    hero_vars["HERO_OVERLAY"] = DEFAULT_OVERLAY if overlay is None else overlay
    return substitute(resolve("hero"), hero_vars)
