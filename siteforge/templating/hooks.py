"""Registry of component build hooks.

A hook is any object exposing ``build(vars, resolve, substitute) -> str``.
Sites provide hooks as ``components/<name>/<name>.build.py`` scripts; the
package ships built-in hooks for the stock components. Script hooks are
re-executed from source on every lookup so edits take effect without
restarting the process.
"""

from __future__ import annotations

import importlib
import importlib.machinery
import importlib.util
import logging
import re
import types
import typing as typ
from pathlib import Path

from siteforge._constants import BUILD_SCRIPT_TEMPLATE
from siteforge.errors import HookError

if typ.TYPE_CHECKING:
    from .substitute import SubstituteFn

logger = logging.getLogger(__name__)

ResolveFn = typ.Callable[[str], str]

BUILTIN_HOOKS: dict[str, str] = {
    "contactIcons": "siteforge.hooks.contact_icons",
    "faq": "siteforge.hooks.faq",
    "hero": "siteforge.hooks.hero",
    "products": "siteforge.hooks.products",
}


class ComponentHook(typ.Protocol):
    """Interface implemented by component build hooks."""

    def build(
        self,
        vars: dict[str, typ.Any],  # noqa: A002 - mirrors the hook contract
        resolve: ResolveFn,
        substitute: SubstituteFn,
    ) -> str: ...


class _FreshSourceLoader(importlib.machinery.SourceFileLoader):
    """Source loader that neither reads nor writes cached bytecode."""

    def path_stats(self, path: str) -> typ.Mapping[str, typ.Any]:
        msg = f"bytecode caching is disabled for '{path}'"
        raise OSError(msg)


def load_script(path: Path) -> types.ModuleType:
    """Execute the Python source at ``path`` into a fresh module object.

    The module is never registered in ``sys.modules`` and no bytecode cache is
    consulted, so every call observes the current file contents.

    Raises
    ------
    HookError
        If the script cannot be read or raises while executing.
    """
    module_name = "_siteforge_script_" + re.sub(r"\W", "_", path.name)
    loader = _FreshSourceLoader(module_name, str(path))
    spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
    if spec is None:
        msg = f"Could not load script '{path}'."
        raise HookError(msg)
    module = importlib.util.module_from_spec(spec)
    try:
        loader.exec_module(module)
    except Exception as exc:  # noqa: BLE001 - any script failure is a page error
        msg = f"Could not load script '{path}': {exc!r}"
        raise HookError(msg) from exc
    return module


class HookRegistry:
    """Map component names to build hooks, re-resolved before each use."""

    def __init__(
        self,
        components_dir: Path,
        *,
        builtins: typ.Mapping[str, str] | None = None,
    ) -> None:
        self.components_dir = components_dir
        self._builtins = dict(BUILTIN_HOOKS if builtins is None else builtins)
        self._registered: dict[str, ComponentHook] = {}

    def register(self, name: str, hook: ComponentHook) -> None:
        """Register an in-process hook for ``name``, overriding built-ins."""
        self._registered[name] = hook

    def script_path(self, name: str) -> Path:
        """Return the conventional build-script location for ``name``."""
        return self.components_dir / name / BUILD_SCRIPT_TEMPLATE.format(name=name)

    def resolve(self, name: str) -> ComponentHook | None:
        """Return the hook for ``name`` or ``None`` for plain substitution.

        Raises
        ------
        HookError
            If a build script exists but does not export a callable ``build``.
        """
        script = self.script_path(name)
        if script.is_file():
            logger.debug("loading build script %s", script)
            hook: typ.Any = load_script(script)
        elif name in self._registered:
            hook = self._registered[name]
        elif name in self._builtins:
            hook = importlib.import_module(self._builtins[name])
        else:
            return None
        if not callable(getattr(hook, "build", None)):
            msg = f"Build hook for component '{name}' does not define build()."
            raise HookError(msg)
        return typ.cast("ComponentHook", hook)


__all__ = [
    "BUILTIN_HOOKS",
    "ComponentHook",
    "HookRegistry",
    "ResolveFn",
    "load_script",
]
