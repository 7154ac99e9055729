"""Prepare hook strategies.

A prepare hook transforms a coerced argument value before it reaches the
field resolver. Three shapes are accepted when declaring an argument, and each
maps to one strategy class with the common entry point
``invoke(value, context, owner)``:

- ``str``: name of a method on the field owner instance (:class:`MethodHook`)
- a function or lambda (:class:`FunctionHook`)
- a stateful callable object (:class:`CallableObjectHook`)

No hook at all resolves to :class:`IdentityHook`.
"""
from __future__ import annotations

import functools
import inspect
from typing import Any, Callable

from ..errors import DefinitionError

__all__ = [
    'PrepareHook',
    'IdentityHook',
    'MethodHook',
    'FunctionHook',
    'CallableObjectHook',
    'resolve_prepare_hook',
]


class PrepareHook:
    """Base class for the closed set of hook strategies."""

    def invoke(self, value: Any, context: Any, owner: Any = None) -> Any:
        raise NotImplementedError

    def check_owner_class(self, owner_cls: type) -> None:
        """Validate the hook against the type that owns the field."""
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class IdentityHook(PrepareHook):
    def invoke(self, value: Any, context: Any, owner: Any = None) -> Any:
        return value


class MethodHook(PrepareHook):
    """Call a method looked up by name on the field owner instance."""

    def __init__(self, method_name: str):
        self.method_name = method_name

    def check_owner_class(self, owner_cls: type) -> None:
        target = inspect.getattr_static(owner_cls, self.method_name, None)
        if isinstance(target, (staticmethod, classmethod)):
            target = target.__func__
        # Field descriptors are callable as decorators, not as hooks
        plain = inspect.isfunction(target) or (callable(target) and not hasattr(type(target), '__get__'))
        if not plain:
            raise DefinitionError(
                f"Prepare method '{self.method_name}' is not defined on {owner_cls.__name__}"
            )

    def invoke(self, value: Any, context: Any, owner: Any = None) -> Any:
        method = getattr(owner, self.method_name, None)
        if not callable(method):
            raise DefinitionError(
                f"Prepare method '{self.method_name}' is not defined on {type(owner).__name__}"
            )
        return method(value, context)

    def __repr__(self) -> str:
        return f"<MethodHook {self.method_name!r}>"


class FunctionHook(PrepareHook):
    """Call a function (lambda, closure, bound method) with ``(value, context)``."""

    def __init__(self, fn: Callable[[Any, Any], Any]):
        self.fn = fn

    def invoke(self, value: Any, context: Any, owner: Any = None) -> Any:
        return self.fn(value, context)

    def __repr__(self) -> str:
        return f"<FunctionHook {getattr(self.fn, '__qualname__', self.fn)!r}>"


class CallableObjectHook(PrepareHook):
    """Call a stateful object through its ``__call__`` or ``call`` entry point."""

    def __init__(self, obj: Any):
        self.obj = obj
        entry = getattr(obj, 'call', None)
        self._entry: Callable[[Any, Any], Any] = entry if callable(entry) else obj

    def invoke(self, value: Any, context: Any, owner: Any = None) -> Any:
        return self._entry(value, context)

    def __repr__(self) -> str:
        return f"<CallableObjectHook {type(self.obj).__name__}>"


_IDENTITY = IdentityHook()


def _is_function(obj: Any) -> bool:
    return (
        inspect.isfunction(obj)
        or inspect.ismethod(obj)
        or inspect.isbuiltin(obj)
        or isinstance(obj, functools.partial)
    )


def resolve_prepare_hook(hook: Any) -> PrepareHook:
    """Pick the strategy for a declared ``prepare=`` value.

    Raises:
        DefinitionError: the value is none of the supported shapes.
    """
    if hook is None:
        return _IDENTITY
    if isinstance(hook, PrepareHook):
        return hook
    if isinstance(hook, str):
        if not hook:
            raise DefinitionError("Prepare method name must not be empty")
        return MethodHook(hook)
    if _is_function(hook):
        return FunctionHook(hook)
    if isinstance(hook, type):
        raise DefinitionError(
            f"Prepare hook must be an instance, got the class {hook.__name__}"
        )
    if callable(hook) or callable(getattr(hook, 'call', None)):
        return CallableObjectHook(hook)
    raise DefinitionError(f"Unsupported prepare hook: {hook!r}")
