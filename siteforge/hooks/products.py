"""Product grid with one card per catalog item.

Reads the catalog directory named by ``PRODUCTS_DIR`` (relative to
``SITE_ROOT``; defaults to ``products``), renders a ``productCard`` per valid
item with its image carousel, and substitutes the joined cards into the
``products`` component as ``PRODUCTS_HTML``.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from siteforge._constants import CATALOG_DIR, CATALOG_PAGE_PREFIX
from siteforge.catalog import discover_catalog_items, render_carousel

if typ.TYPE_CHECKING:
    from siteforge.templating.hooks import ResolveFn
    from siteforge.templating.substitute import SubstituteFn

logger = logging.getLogger(__name__)

EMPTY_MARKUP = (
    '<div class="col-12"><p class="text-center text-muted">'
    "No products available</p></div>"
)


def build(
    vars: dict[str, typ.Any],  # noqa: A002 - hook contract
    resolve: ResolveFn,
    substitute: SubstituteFn,
) -> str:
    products_dir = str(vars.get("PRODUCTS_DIR") or CATALOG_DIR)
    source = Path(str(vars.get("SITE_ROOT") or ".")) / products_dir
    page_prefix = str(vars.get("PRODUCT_PAGE_PREFIX") or CATALOG_PAGE_PREFIX)
    button_text = vars.get("BUTTON_TEXT") or "View Details"

    card_template = resolve("productCard")
    cards: list[str] = []
    items = discover_catalog_items(source)
    logger.debug("found %d product(s) in %s", len(items), source)
    for item in items:
        name = item.text("name", "Untitled Product")
        carousel = render_carousel(
            item.image_urls(products_dir),
            carousel_id=f"carousel-{item.key}",
            alt=item.name or "Product",
            image_class="d-block w-100 product-image",
        )
        card_vars = {
            "PRODUCT_ID": item.key,
            "CAROUSEL_IMAGES": carousel.slides,
            "CAROUSEL_CONTROLS": carousel.controls,
            "PRODUCT_NAME": name,
            "PRODUCT_DESCRIPTION": item.text("description"),
            "PRODUCT_PRICE": item.text("price", "Price not available"),
            "PRODUCT_LINK": f"{page_prefix}{item.key}.html",
            "BUTTON_TEXT": button_text,
        }
        cards.append(substitute(card_template, card_vars) + "\n")

    vars["PRODUCTS_HTML"] = "".join(cards) if cards else EMPTY_MARKUP
    return substitute(resolve("products"), vars)
