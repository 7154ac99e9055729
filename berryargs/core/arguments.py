from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import strawberry

from ..errors import CoercionError, DefinitionError
from ..naming import snake_to_camel
from .hooks import PrepareHook, resolve_prepare_hook
from .types import InputType, resolve_input_type

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .fields import FieldDef

UNSET = getattr(strawberry, 'UNSET')

__all__ = ['ArgumentDefinition', 'argument', 'UNSET']


class ArgumentDefinition:
    """Declared input parameter of one field.

    Everything except ``description`` and ``owner`` is fixed at construction.
    ``owner`` is the :class:`~berryargs.core.fields.FieldDef` the argument was
    attached to; it is assigned by :class:`ArgumentSet.add` and drives
    :attr:`path`.

    Attributes:
        declared_name: Identifier as written in the schema source
            (e.g. ``"prepared_arg"``).
        name: External (GraphQL) name matched against incoming arguments,
            camelCase of ``declared_name`` unless overridden.
        type: The type exactly as declared.
        input_type: Resolved :class:`InputType` (annotation + coercer).
        required: Whether the argument is non-null in the schema.
        alias: Optional internal key (``as_=``) used in the resolver kwargs.
        prepare: The prepare hook as declared.
        prepare_hook: Resolved :class:`PrepareHook` strategy.
        default: Default value, ``UNSET`` when none.
        deprecation_reason: Optional deprecation message.
    """

    def __init__(
        self,
        name: str,
        type: Any,
        *,
        required: bool = True,
        description: Optional[str] = None,
        as_: Optional[str] = None,
        prepare: Any = None,
        default: Any = UNSET,
        deprecation_reason: Optional[str] = None,
        camelize: bool = True,
        graphql_name: Optional[str] = None,
    ):
        if not isinstance(name, str) or not name:
            raise DefinitionError(f"Argument name must be a non-empty string, got {name!r}")
        if as_ is not None and (not isinstance(as_, str) or not as_):
            raise DefinitionError(f"Alias for argument '{name}' must be a non-empty string, got {as_!r}")
        if graphql_name is not None and (not isinstance(graphql_name, str) or not graphql_name):
            raise DefinitionError(f"GraphQL name for argument '{name}' must be a non-empty string")
        try:
            input_type = resolve_input_type(type)
            hook = resolve_prepare_hook(prepare)
        except DefinitionError as exc:
            raise DefinitionError(f"Argument '{name}': {exc}") from exc
        self.declared_name = name
        self.type = type
        self.input_type: InputType = input_type
        self.required = bool(required)
        self.alias = as_
        self.prepare = prepare
        self.prepare_hook: PrepareHook = hook
        self.default = default
        self.deprecation_reason = deprecation_reason
        self._name = graphql_name or (snake_to_camel(name) if camelize else name)
        # Shared with the copies made for other types, see FieldDescriptor._attach
        self._texts = {'description': description}
        self.owner: Optional['FieldDef'] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def internal_key(self) -> str:
        """Key of the prepared value in the resolver keyword arguments."""
        return self.alias or self.declared_name

    @property
    def has_default(self) -> bool:
        return self.default is not UNSET

    # Description: ``description`` (read/assign) and ``describe`` (fluent) are
    # synonyms writing the same field.
    @property
    def description(self) -> Optional[str]:
        return self._texts['description']

    @description.setter
    def description(self, value: Optional[str]) -> None:
        self._texts['description'] = value

    def describe(self, text: Optional[str]) -> 'ArgumentDefinition':
        self._texts['description'] = text
        return self

    @property
    def path(self) -> str:
        """``Type.field.argument`` using GraphQL names, resolved on each access."""
        if self.owner is None:
            raise DefinitionError(f"Argument '{self.name}' is not attached to a field")
        return f"{self.owner.path}.{self.name}"

    def _location(self) -> str:
        if self.owner is None or self.owner.owner is None:
            return self.name
        return self.path

    def coerce(self, raw: Any) -> Any:
        """Convert a raw query value to the declared type.

        Raises:
            CoercionError: the value does not fit the type.
        """
        if raw is None:
            if self.required:
                raise CoercionError(
                    f"Argument '{self._location()}' is required and cannot be null",
                    argument=self,
                )
            return None
        try:
            return self.input_type.coerce(raw)
        except CoercionError as exc:
            raise CoercionError(
                f"Argument '{self._location()}' has an invalid value: {exc}",
                argument=self,
            ) from exc

    def __repr__(self) -> str:
        return (
            f"<ArgumentDefinition {self.declared_name!r} name={self.name!r} "
            f"type={self.input_type.name} required={self.required}>"
        )


def argument(
    name: str,
    type: Any,
    *,
    required: bool = True,
    description: Optional[str] = None,
    as_: Optional[str] = None,
    prepare: Any = None,
    default: Any = UNSET,
    deprecation_reason: Optional[str] = None,
    camelize: bool = True,
    graphql_name: Optional[str] = None,
    configure: Optional[Callable[[ArgumentDefinition], Any]] = None,
) -> ArgumentDefinition:
    """Declare an argument for a field.

    Args:
        name: snake_case identifier; exposed as camelCase unless ``camelize``
            is False or ``graphql_name`` is given.
        type: Python type, typing annotation, list literal (``[str]``),
            scalar name (``"Int"``), enum, Strawberry input, or SQLAlchemy
            column type.
        required: Non-null argument. Defaults to True.
        description: GraphQL description.
        as_: Internal key used when calling the resolver.
        prepare: Method name on the owner type, a function, or a callable
            object. Invoked as ``(value, context)``.
        default: Default value exposed in the schema.
        deprecation_reason: Marks the argument deprecated.
        configure: Called with the new definition before it is returned.

    Example:
        class Query(BerryType):
            @field(str, arguments=[
                argument('limit', int, required=False, prepare='clamp'),
                argument('term', str, configure=lambda a: a.describe('Search text')),
            ])
            def search(self, **kwargs): ...

    Returns:
        ArgumentDefinition: attached to a field by the field descriptor.
    """
    definition = ArgumentDefinition(
        name,
        type,
        required=required,
        description=description,
        as_=as_,
        prepare=prepare,
        default=default,
        deprecation_reason=deprecation_reason,
        camelize=camelize,
        graphql_name=graphql_name,
    )
    if configure is not None:
        configure(definition)
    return definition
