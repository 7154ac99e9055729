"""Declarative GraphQL arguments with prepare hooks, built on Strawberry.

Public API:
- BerrySchema, BerryType
- field, argument
- ArgumentDefinition, ArgumentSet, ArgumentRuntime
- BerrySettings
- errors: DefinitionError, DuplicateArgumentError, ExecutionError, CoercionError, PreparationError
"""
from .config import BerrySettings
from .core.arguments import UNSET, ArgumentDefinition, argument
from .core.argument_set import ArgumentSet
from .core.fields import FieldDef, field
from .core.runtime import ArgumentRuntime
from .errors import (
    BerryArgsError,
    CoercionError,
    DefinitionError,
    DuplicateArgumentError,
    ExecutionError,
    PreparationError,
)
from .naming import snake_to_camel
from .registry import BerrySchema, BerryType

__all__ = [
    'BerrySchema', 'BerryType', 'field', 'argument', 'FieldDef',
    'ArgumentDefinition', 'ArgumentSet', 'ArgumentRuntime', 'BerrySettings', 'UNSET',
    'BerryArgsError', 'DefinitionError', 'DuplicateArgumentError', 'ExecutionError',
    'CoercionError', 'PreparationError', 'snake_to_camel',
]
