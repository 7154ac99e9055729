"""Naming utilities for berryargs.

Arguments are declared with snake_case Python identifiers and exposed to
queries under lowerCamelCase names. There is no reverse mapping: the internal
key is stored on the definition instead of derived from the external name.
"""
from __future__ import annotations

__all__ = ["snake_to_camel"]


def snake_to_camel(name: str) -> str:
    """Convert a snake_case identifier to lowerCamelCase.

    The first segment is lower-cased, every following segment gets its first
    letter upper-cased and keeps the rest as written. Leading underscores are
    preserved (``_private_arg`` -> ``_privateArg``).
    """
    if not name:
        return ''
    stripped = name.lstrip('_')
    prefix = name[:len(name) - len(stripped)]
    parts = [p for p in stripped.split('_') if p]
    if not parts:
        return name
    first = parts[0].lower()
    rest = ''.join(p[:1].upper() + p[1:] for p in parts[1:])
    return prefix + first + rest
