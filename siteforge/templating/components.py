"""Build component HTML through hooks or plain substitution."""

from __future__ import annotations

import logging
import typing as typ

from siteforge.errors import HookError, PageBuildError

from .hooks import HookRegistry
from .resolver import ComponentResolver
from .substitute import substitute

if typ.TYPE_CHECKING:
    from siteforge.config import SiteConfig

logger = logging.getLogger(__name__)


class ComponentBuilder:
    """Render one component's HTML for a page.

    The builder merges the site's flattened variables with the component's
    local overrides, then either hands the merged mapping to the component's
    build hook or substitutes it straight into the resolved template.
    """

    def __init__(
        self,
        site: SiteConfig,
        *,
        resolver: ComponentResolver | None = None,
        hooks: HookRegistry | None = None,
    ) -> None:
        self.site = site
        self.resolver = resolver or ComponentResolver(site.paths.components)
        self.hooks = hooks or HookRegistry(site.paths.components)

    def merged_vars(
        self, local: typ.Mapping[str, typ.Any] | None = None
    ) -> dict[str, typ.Any]:
        """Return site variables overridden by ``local``, plus ``SITE_ROOT``."""
        merged = dict(self.site.variables)
        merged["SITE_ROOT"] = str(self.site.paths.root)
        if local:
            merged.update(local)
        return merged

    def build(self, name: str, local: typ.Mapping[str, typ.Any] | None = None) -> str:
        """Return the HTML for component ``name``.

        Parameters
        ----------
        name : str
            Component name, resolved by :class:`ComponentResolver`.
        local : Mapping[str, Any], optional
            Page-supplied variables overriding the site variables.

        Raises
        ------
        ComponentNotFoundError
            If the component (or a template its hook needs) does not exist.
        HookError
            If the component's build script is invalid or raises.
        """
        variables = self.merged_vars(local)
        hook = self.hooks.resolve(name)
        if hook is not None:
            logger.debug("building component %s with hook", name)
            try:
                return hook.build(variables, self.resolver.resolve, substitute)
            except PageBuildError:
                raise
            except Exception as exc:  # noqa: BLE001 - hook code is site-supplied
                msg = f"Build hook for component '{name}' failed: {exc!r}"
                raise HookError(msg) from exc
        return substitute(self.resolver.resolve(name), variables)


__all__ = ["ComponentBuilder"]
