"""Load and validate siteforge configuration documents and page descriptors.

This subpackage parses the site's ``config.json`` file, flattens it into the
upper-case variable mapping every template substitution draws from, resolves
the build directory layout and declared collections, and turns per-page JSON
descriptors into frozen dataclasses (:class:`SiteConfig`,
:class:`PageDescriptor`, etc.) that the page builder consumes. The primary
entry points are :func:`load_site_config` and :func:`load_page_descriptor`.

Examples
--------
>>> from pathlib import Path
>>> from siteforge.config import load_site_config
>>> site = load_site_config(Path("config.json"))  # doctest: +SKIP
>>> site.variables["SITE_NAME"]  # doctest: +SKIP
'Acme Furniture'
>>> flatten_config({"site": {"contact": {"email": "hi@example.com"}}})
{'SITE_CONTACT_EMAIL': 'hi@example.com'}
"""

from .helpers import flatten_config
from .loader import load_page_descriptor, load_site_config, page_descriptor_from_mapping
from .models import (
    BuildPaths,
    CatalogConfig,
    CollectionConfig,
    ComponentRef,
    PageDescriptor,
    SiteConfig,
)

__all__ = [
    "BuildPaths",
    "CatalogConfig",
    "CollectionConfig",
    "ComponentRef",
    "PageDescriptor",
    "SiteConfig",
    "flatten_config",
    "load_page_descriptor",
    "load_site_config",
    "page_descriptor_from_mapping",
]
