"""Expand ``FAQ_ITEMS`` into repeated ``faqItem`` blocks."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from siteforge.templating.hooks import ResolveFn
    from siteforge.templating.substitute import SubstituteFn


def build(
    vars: dict[str, typ.Any],  # noqa: A002 - hook contract
    resolve: ResolveFn,
    substitute: SubstituteFn,
) -> str:
    """Render the ``faq`` component with one ``faqItem`` per question."""
    item_template = resolve("faqItem")
    blocks: list[str] = []
    items = vars.get("FAQ_ITEMS")
    if isinstance(items, list):
        for index, item in enumerate(items, start=1):
            if not isinstance(item, dict):
                continue
            item_vars = {
                "ITEM_INDEX": index,
                "QUESTION": item.get("question", ""),
                "ANSWER": item.get("answer", ""),
            }
            blocks.append(substitute(item_template, item_vars) + "\n")
    vars["FAQ_ITEMS"] = "".join(blocks)
    return substitute(resolve("faq"), vars)
