"""Exception types raised by the siteforge build pipeline.

The hierarchy separates fatal startup failures, which abort the whole build,
from failures scoped to a single page, which the orchestrator logs and skips.
"""

from __future__ import annotations


class SiteforgeError(Exception):
    """Base class for every error raised by siteforge."""


class SiteConfigError(SiteforgeError, ValueError):
    """Raised when the site configuration is invalid or cannot be decoded."""


class NoPagesError(SiteforgeError):
    """Raised when page discovery finds no descriptors to build."""


class PageBuildError(SiteforgeError):
    """Base class for failures that only affect the page being built."""


class PageDescriptorError(PageBuildError, ValueError):
    """Raised when a page descriptor is malformed or incomplete."""


class ComponentNotFoundError(PageBuildError, LookupError):
    """Raised when no template file exists for a component name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Component not found: {name}")
        self.name = name


class ContentNotFoundError(PageBuildError, FileNotFoundError):
    """Raised when a page references a content file that does not exist."""


class HookError(PageBuildError):
    """Raised when a component build hook cannot be loaded or is invalid."""


__all__ = [
    "ComponentNotFoundError",
    "ContentNotFoundError",
    "HookError",
    "NoPagesError",
    "PageBuildError",
    "PageDescriptorError",
    "SiteConfigError",
    "SiteforgeError",
]
