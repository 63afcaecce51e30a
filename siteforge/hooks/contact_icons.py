"""Social and contact icon links built from the ``social`` config section.

The configuration's ``social`` (or ``social_links``) mapping is flattened into
``SOCIAL_<PLATFORM>`` / ``SOCIAL_LINKS_<PLATFORM>`` variables; every known
platform with a non-empty URL becomes one icon link.
"""

from __future__ import annotations

import typing as typ

from siteforge.templating.markup import render_markup

if typ.TYPE_CHECKING:
    from siteforge.templating.hooks import ResolveFn
    from siteforge.templating.substitute import SubstituteFn

ICONS: dict[str, tuple[str, str]] = {
    "telegram": ("bi-telegram", "Telegram"),
    "whatsapp": ("bi-whatsapp", "WhatsApp"),
    "instagram": ("bi-instagram", "Instagram"),
    "signal": ("bi-signal", "Signal"),
    "viber": ("viber-custom", "Viber"),
    "facebook": ("bi-facebook", "Facebook"),
    "twitter": ("bi-twitter", "Twitter"),
    "linkedin": ("bi-linkedin", "LinkedIn"),
    "youtube": ("bi-youtube", "YouTube"),
    "github": ("bi-github", "GitHub"),
    "email": ("bi-envelope", "Email"),
    "phone": ("bi-telephone", "Phone"),
}
IMAGE_ICONS: dict[str, str] = {
    "viber": "assets/images/viber-brands-solid-full.svg",
}
PREFIXES = ("SOCIAL_LINKS_", "SOCIAL_")
EMPTY_MARKUP = "<!-- No social links configured -->"


def social_links(variables: typ.Mapping[str, typ.Any]) -> list[dict[str, str]]:
    """Return icon link records for the configured platforms in config order."""
    links: list[dict[str, str]] = []
    seen: set[str] = set()
    for key, url in variables.items():
        prefix = next((p for p in PREFIXES if key.startswith(p)), None)
        if prefix is None or not url or not isinstance(url, str):
            continue
        platform = key.removeprefix(prefix).lower()
        if platform not in ICONS or platform in seen:
            continue
        seen.add(platform)
        icon, label = ICONS[platform]
        links.append(
            {
                "url": url,
                "icon": icon,
                "label": label,
                "image": IMAGE_ICONS.get(platform, ""),
            }
        )
    return links


def build(
    vars: dict[str, typ.Any],  # noqa: A002 - hook contract
    resolve: ResolveFn,
    substitute: SubstituteFn,
) -> str:
    links = social_links(vars)
    icons = render_markup("social_icons.jinja", links=links) if links else ""
    vars["SOCIAL_ICONS"] = icons or EMPTY_MARKUP
    return substitute(resolve("contactIcons"), vars)
