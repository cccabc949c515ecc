"""
Pieces shared by the header and body generators.
"""

from __future__ import annotations

import re

from bin2cpp.core.models.registry import GenerationContext

BANNER = """\
// This file was generated by bin2cpp
// WARNING: any change you make will be lost!
"""

_NON_MACRO = re.compile(r"[^A-Za-z0-9]")


def include_guard(context: GenerationContext) -> str:
    """Macro name unique to the (namespace, base name) pair."""
    parts = ["GENERATED_BIN2CPP"]
    if context.namespace:
        parts.append(_NON_MACRO.sub("_", context.namespace))
    parts.append(_NON_MACRO.sub("_", context.base_name))
    parts.append("H")
    return "_".join(parts).upper()


def open_namespace(context: GenerationContext) -> list[str]:
    """Lines opening the configured namespace (none when it's empty)."""
    if not context.namespaces:
        return []
    lines = [f"namespace {name} {{" for name in context.namespaces]
    lines.append("")
    return lines


def close_namespace(context: GenerationContext) -> list[str]:
    """Lines closing what :func:`open_namespace` opened, innermost first."""
    if not context.namespaces:
        return []
    lines = [""]
    lines.extend(f"}} // namespace {name}" for name in reversed(context.namespaces))
    return lines
