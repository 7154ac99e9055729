from __future__ import annotations

import copy
import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field as dc_field
from typing import Any, Callable, Iterable, List, Optional, get_type_hints

from ..errors import DefinitionError
from ..naming import snake_to_camel
from .argument_set import ArgumentSet
from .arguments import ArgumentDefinition, argument as _argument

__all__ = ['FieldDef', 'FieldDescriptor', 'field', 'type_name']


def type_name(owner: type) -> str:
    """GraphQL name of a Berry type (``@schema.type(name=...)`` or class name)."""
    return vars(owner).get('__berry_name__') or owner.__name__


@dataclass(eq=False)
class FieldDef:
    """Internal, normalized field description collected by the type metaclass.

    Attributes:
        name: Attribute name on the declaring type (e.g. ``"search_posts"``).
        graphql_name: Name exposed in the schema (e.g. ``"searchPosts"``).
        returns: Declared return type (Python annotation, Berry type or name).
        arguments: The field's :class:`ArgumentSet`.
        resolver: Function called as ``resolver(owner_instance, **kwargs)``.
            When None the value is read from the wrapped object.
        owner: The Berry type the field belongs to.
    """

    name: str
    graphql_name: str
    returns: Any = None
    arguments: ArgumentSet = dc_field(default_factory=ArgumentSet)
    resolver: Optional[Callable[..., Any]] = None
    description: Optional[str] = None
    null: bool = True
    deprecation_reason: Optional[str] = None
    owner: Optional[type] = None

    def __post_init__(self) -> None:
        self.arguments.owner = self

    @property
    def path(self) -> str:
        if self.owner is None:
            raise DefinitionError(f"Field '{self.graphql_name}' is not attached to a type")
        return f"{type_name(self.owner)}.{self.graphql_name}"

    def resolve(self, instance: Any, kwargs: dict) -> Any:
        """Call the resolver with prepared kwargs, or read the wrapped value."""
        if self.resolver is not None:
            return self.resolver(instance, **kwargs)
        obj = getattr(instance, 'object', None)
        if obj is None:
            return None
        if isinstance(obj, Mapping):
            return obj.get(self.name)
        return getattr(obj, self.name, None)


class FieldDescriptor:
    """Descriptor placed on Berry types to declare fields.

    Created by :func:`field`. Can be assigned as a class attribute or used as
    a decorator on the resolver method. On an instance, a decorated field
    gives back the bound resolver so the owner can call it directly.
    """

    def __init__(
        self,
        returns: Any = None,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        arguments: Iterable[ArgumentDefinition] = (),
        resolver: Optional[Callable[..., Any]] = None,
        null: bool = True,
        camelize: bool = True,
        deprecation_reason: Optional[str] = None,
    ):
        self.returns = returns
        self.graphql_name = name
        self.description = description
        self.arguments: List[ArgumentDefinition] = list(arguments)
        self.resolver = resolver
        self.null = null
        self.camelize = camelize
        self.deprecation_reason = deprecation_reason
        self.name: str | None = None
        self._built: List[FieldDef] = []

    def __call__(self, fn: Callable[..., Any]) -> 'FieldDescriptor':
        if self.resolver is not None:
            raise DefinitionError("Field already has a resolver")
        self.resolver = fn
        if self.description is None and fn.__doc__:
            self.description = inspect.cleandoc(fn.__doc__)
        return self

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None or self.resolver is None:
            return self
        return self.resolver.__get__(instance, owner)

    def argument(self, name: str, type: Any, **options: Any) -> ArgumentDefinition:
        """Declare another argument on this field and return it.

        Types already created with this field receive a copy of the argument
        that shares its description with the returned definition.
        """
        definition = _argument(name, type, **options)
        for fdef in self._built:
            self._attach(fdef, definition)
        self.arguments.append(definition)
        return definition

    @staticmethod
    def _attach(fdef: FieldDef, definition: ArgumentDefinition) -> None:
        definition.prepare_hook.check_owner_class(fdef.owner)
        if definition.owner is not None:
            definition = copy.copy(definition)
            definition.owner = None
        fdef.arguments.add(definition)

    def _return_type(self) -> Any:
        if self.returns is not None or self.resolver is None:
            return self.returns
        try:
            return get_type_hints(self.resolver).get('return')
        except NameError:
            # Forward reference to a Berry type; keep the name for the registry
            return getattr(self.resolver, '__annotations__', {}).get('return')

    def build(self, owner: type) -> FieldDef:
        """Build the :class:`FieldDef` bound to ``owner``.

        Arguments already bound to another field (inherited declarations) are
        copied so each type gets its own paths.
        """
        if not self.name:
            raise DefinitionError("Field descriptor has no attribute name")
        graphql_name = self.graphql_name or (snake_to_camel(self.name) if self.camelize else self.name)
        fdef = FieldDef(
            name=self.name,
            graphql_name=graphql_name,
            returns=self._return_type(),
            resolver=self.resolver,
            description=self.description,
            null=self.null,
            deprecation_reason=self.deprecation_reason,
            owner=owner,
        )
        for definition in self.arguments:
            self._attach(fdef, definition)
        self._built.append(fdef)
        return fdef


def field(
    returns: Any = None,
    /,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    arguments: Iterable[ArgumentDefinition] = (),
    resolver: Optional[Callable[..., Any]] = None,
    null: bool = True,
    camelize: bool = True,
    deprecation_reason: Optional[str] = None,
) -> FieldDescriptor:
    """Declare a field on a Berry type.

    Args:
        returns: Return type. A Python/typing annotation, a list literal
            (``[str]``), a Berry type or its name. May be omitted when the
            resolver carries a return annotation.
        name: Explicit GraphQL name; defaults to the camelCase attribute name.
        arguments: :func:`~berryargs.core.arguments.argument` definitions in
            declaration order.
        resolver: Function called as ``resolver(owner, **kwargs)``. Usually
            supplied by using the descriptor as a decorator.
        null: Whether the field is nullable. A field that fails during
            argument preparation resolves to null, so this defaults to True.

    Examples:
        class Query(BerryType):
            @field(str, arguments=[argument('term', str, prepare='normalize')])
            def search(self, term):
                return term

            def normalize(self, value, context):
                return value.strip().lower()

            title = field(str)

    Returns:
        FieldDescriptor: A descriptor captured by the type metaclass.
    """
    return FieldDescriptor(
        returns,
        name=name,
        description=description,
        arguments=arguments,
        resolver=resolver,
        null=null,
        camelize=camelize,
        deprecation_reason=deprecation_reason,
    )
