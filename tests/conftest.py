"""Shared fixtures that lay out a small but complete site on disk.

The ``site_root`` fixture writes a configuration file, a layout, the stock
components (header, footer, hero, faq, products, contactIcons) plus a plain
``banner`` component, three page descriptors, static assets, and a two-item
product catalog into ``tmp_path``. Tests mutate the tree as needed before
loading it with :func:`siteforge.config.load_site_config`.
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest

from siteforge.config import SiteConfig, load_site_config

LAYOUT = """<!DOCTYPE html>
<html>
<head>
<title>{{PAGE_TITLE}}</title>
<meta name="description" content="{{PAGE_DESCRIPTION}}">
{{HEAD_EXTRA}}
</head>
<body class="theme-{{HEADER_MODE}}">
{{HEADER}}
<main>
{{CONTENT}}
</main>
{{FOOTER}}
{{BODY_EXTRA}}
</body>
</html>
"""

COMPONENT_FILES: dict[str, str] = {
    "_layout.html": LAYOUT,
    "header/header.html": '<header class="header-{{HEADER_THEME}}">{{SITE_NAME}}</header>',
    "header/style.css": "header { color: black; }\n",
    "footer/footer.html": "<footer>&copy; {{YEAR}} {{COMPANY_NAME}}</footer>",
    "footer/style.css": "footer { color: grey; }\n",
    "hero/hero.html": (
        '<section class="hero" style="height: {{HERO_HEIGHT}}; '
        "background-image: url('{{HERO_BG_IMAGE}}');\" "
        'data-overlay="{{HERO_OVERLAY}}"><h1>{{HERO_TITLE}}</h1>'
        "<p>{{HERO_SUBTITLE}}</p></section>"
    ),
    "hero/style.css": ".hero { min-height: 50vh; }\n",
    "hero/script.js": "console.log('hero');\n",
    "faq/faq.html": '<section class="faq">{{FAQ_ITEMS}}</section>',
    "faq/faqItem.html": (
        '<div class="faq-item" id="faq-{{ITEM_INDEX}}">'
        "<h3>{{QUESTION}}</h3><p>{{ANSWER}}</p></div>"
    ),
    "products/products.html": '<div class="products">{{PRODUCTS_HTML}}</div>',
    "products/productCard.html": (
        '<article class="product-card" id="{{PRODUCT_ID}}">'
        '<div id="carousel-{{PRODUCT_ID}}" class="carousel slide">'
        '<div class="carousel-inner">{{CAROUSEL_IMAGES}}</div>{{CAROUSEL_CONTROLS}}</div>'
        "<h2>{{PRODUCT_NAME}}</h2><p>{{PRODUCT_DESCRIPTION}}</p>"
        '<span class="price">{{PRODUCT_PRICE}}</span>'
        '<a href="{{PRODUCT_LINK}}">{{BUTTON_TEXT}}</a></article>'
    ),
    "contactIcons/contactIcons.html": '<div class="contact-icons">{{SOCIAL_ICONS}}</div>',
    "banner/banner.html": '<div class="banner">{{BANNER_TEXT}}</div>',
}

DETAIL_TEMPLATE = """<section class="product-detail">
<div id="productCarousel" class="carousel slide">
<div class="carousel-inner">{{CAROUSEL_SLIDES}}</div>
{{CAROUSEL_CONTROLS}}
</div>
<div class="thumbnails">{{THUMBNAIL_IMAGES}}</div>
<h1>{{PRODUCT_NAME}}</h1>
<p class="price">{{PRODUCT_PRICE}}</p>
<p class="description">{{PRODUCT_DESCRIPTION}}</p>
<div class="details">{{PRODUCT_DETAILS}}</div>
</section>
"""

CONFIG: dict[str, typ.Any] = {
    "site": {
        "name": "Acme Furniture",
        "description": "Handmade furniture",
        "url": "https://acme.example",
        "contact": {"email": "hello@acme.example", "phone": "+1 555 0100"},
    },
    "social": {
        "telegram": "https://t.me/acme",
        "viber": "viber://chat?number=15550100",
        "myspace": "https://myspace.example/acme",
        "github": "",
    },
    "faq": {
        "items": [
            {"question": "Do you ship?", "answer": "Worldwide."},
            {"question": "Can I return?", "answer": "Within 30 days."},
        ]
    },
}


def write_json(path: Path, payload: typ.Any) -> Path:
    """Write ``payload`` as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def write_text(path: Path, text: str) -> Path:
    """Write ``text`` to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def add_catalog_item(root: Path, key: str, metadata: typ.Any, images: int) -> Path:
    """Create ``products/<key>`` with metadata and ``images`` image files."""
    folder = root / "products" / key
    folder.mkdir(parents=True, exist_ok=True)
    if metadata is not None:
        write_json(folder / "product.json", metadata)
    for index in range(1, images + 1):
        (folder / f"{index:02d}.jpg").write_bytes(f"image-{key}-{index}".encode())
    return folder


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Return the root of a freshly written sample site."""
    root = tmp_path / "site"
    write_json(root / "config.json", CONFIG)
    for relative, text in COMPONENT_FILES.items():
        write_text(root / "components" / relative, text)

    write_json(
        root / "pages" / "index.json",
        {
            "page": "index",
            "title": "Home",
            "description": "Welcome to Acme",
            "header_theme": "light",
            "content": "<p>Intro</p>{{COMPONENT:faq}}",
            "components": [
                {"name": "hero", "vars": {"HERO_TITLE": "Built to last"}},
                {"name": "faq", "vars": {}},
                {"name": "products", "vars": {"BUTTON_TEXT": "See more"}},
            ],
        },
    )
    write_json(
        root / "pages" / "about" / "about.json",
        {"page": "about", "title": "About", "header_theme": "dark"},
    )
    write_text(root / "pages" / "about" / "about.html", "<p>Our story</p>")
    write_text(root / "pages" / "about" / "style.css", ".story { margin: 0; }\n")
    write_text(
        root / "pages" / "_product-detail" / "_detail-template.html", DETAIL_TEMPLATE
    )
    write_text(root / "pages" / "_product-detail" / "style.css", ".detail {}\n")
    write_text(root / "pages" / "_product-detail" / "script.js", "// detail\n")

    write_text(root / "assets" / "css" / "global.css", "body { margin: 0; }\n")
    write_text(root / "assets" / "js" / "main.js", "console.log('main');\n")
    (root / "assets" / "images").mkdir(parents=True)
    (root / "assets" / "images" / "logo.png").write_bytes(b"\x89PNG-logo")

    add_catalog_item(
        root,
        "chair",
        {"name": "Oak Chair", "description": "A sturdy chair", "price": "$120"},
        images=3,
    )
    add_catalog_item(root, "lamp", {"name": "Desk Lamp", "price": "$40"}, images=1)
    return root


@pytest.fixture
def site(site_root: Path) -> SiteConfig:
    """Return the loaded configuration for ``site_root``."""
    return load_site_config(site_root / "config.json")
