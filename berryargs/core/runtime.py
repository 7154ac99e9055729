"""Execution-time argument preparation for a single field call."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from ..config import BerrySettings
from ..errors import CoercionError
from .argument_set import ArgumentSet
from .arguments import ArgumentDefinition

__all__ = ['ArgumentRuntime']

_logger = logging.getLogger("berryargs.runtime")


class ArgumentRuntime:
    """Turn a raw argument map into the resolver's keyword arguments.

    One instance serves one field invocation. For every declared argument
    present in the raw map the value is coerced, passed through the prepare
    hook with ``(value, context)``, and stored under the argument's internal
    key. The first error raised by coercion or by a hook aborts the whole
    call; hook errors propagate unchanged.

    Args:
        arguments: The field's :class:`ArgumentSet`.
        owner: Field owner instance; target of method-name prepare hooks.
        context: Execution context handed to every hook.
        settings: Coercion/logging settings; defaults to ``BerrySettings()``.
    """

    def __init__(
        self,
        arguments: ArgumentSet,
        owner: Any,
        context: Any,
        settings: Optional[BerrySettings] = None,
    ):
        self.arguments = arguments
        self.owner = owner
        self.context = context
        self.settings = settings or BerrySettings()

    def _coerce(self, definition: ArgumentDefinition, raw: Any) -> Any:
        try:
            return definition.coerce(raw)
        except CoercionError as exc:
            if self.settings.strict_coercion:
                raise
            _logger.warning("berryargs: keeping uncoerced value for %s: %s", definition.name, exc)
            return raw

    def _prepare(self, definition: ArgumentDefinition, value: Any) -> Any:
        hook = definition.prepare_hook
        if self.settings.log_prepare_hooks:
            _logger.debug("berryargs: prepare %s via %r", definition.name, hook)
        return hook.invoke(value, self.context, owner=self.owner)

    def resolve(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        """Build the keyword map keyed by internal key.

        Raises:
            CoercionError: an unknown argument or a value that does not fit.
            Exception: whatever a prepare hook raised, unchanged.
        """
        for name in raw:
            if name not in self.arguments:
                raise CoercionError(f"Unknown argument '{name}'")
        kwargs: Dict[str, Any] = {}
        for definition in self.arguments.values():
            if definition.name not in raw:
                continue
            value = self._coerce(definition, raw[definition.name])
            kwargs[definition.internal_key] = self._prepare(definition, value)
        return kwargs
