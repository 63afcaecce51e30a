"""Template substitution, component lookup, and component build hooks."""

from .components import ComponentBuilder
from .hooks import BUILTIN_HOOKS, ComponentHook, HookRegistry, load_script
from .renderer import MarkdownRenderer
from .resolver import ComponentResolver
from .substitute import (
    COMPONENT_PLACEHOLDER_PATTERN,
    PLACEHOLDER_PATTERN,
    stringify,
    substitute,
)

__all__ = [
    "BUILTIN_HOOKS",
    "COMPONENT_PLACEHOLDER_PATTERN",
    "PLACEHOLDER_PATTERN",
    "ComponentBuilder",
    "ComponentHook",
    "ComponentResolver",
    "HookRegistry",
    "MarkdownRenderer",
    "load_script",
    "stringify",
    "substitute",
]
