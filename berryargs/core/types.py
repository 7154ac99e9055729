"""Input type resolution and scalar coercion for declared arguments.

An argument's declared type is resolved once, at declaration time, into an
:class:`InputType` carrying the annotation handed to Strawberry and the
coercer used by the argument runtime.
"""
from __future__ import annotations

import types as _py_types
import uuid as _py_uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any, Callable, List, Optional, Union, get_args, get_origin

import strawberry
from strawberry.scalars import JSON as ST_JSON
from sqlalchemy import Enum as SAEnumType
from sqlalchemy.sql.sqltypes import (
    JSON as SA_JSON,
    Boolean,
    Date,
    DateTime,
    Integer,
    Numeric,
    String,
    Uuid as SA_Uuid,
)
from sqlalchemy.types import TypeDecorator, TypeEngine

from ..errors import CoercionError, DefinitionError

__all__ = ['InputType', 'resolve_input_type', 'optional_annotation']

_NoneType = type(None)

_TRUE_WORDS = ('true', 't', '1', 'yes', 'y')
_FALSE_WORDS = ('false', 'f', '0', 'no', 'n')


@dataclass(frozen=True)
class InputType:
    """Resolved argument type.

    Attributes:
        name: GraphQL-style display name used in error messages (``Int``,
            ``[String]``...).
        annotation: Python annotation Strawberry understands.
        coerce: ``raw -> typed`` converter; raises ``CoercionError``.
    """

    name: str
    annotation: Any
    coerce: Callable[[Any], Any]


def _mismatch(expected: str, value: Any) -> CoercionError:
    return CoercionError(f"Expected a value of type {expected}, got {value!r}")


def _coerce_int(value: Any) -> int:
    if isinstance(value, bool):
        raise _mismatch('Int', value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise _mismatch('Int', value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise _mismatch('Int', value) from None
    raise _mismatch('Int', value)


def _coerce_float(value: Any) -> float:
    if isinstance(value, bool):
        raise _mismatch('Float', value)
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise _mismatch('Float', value) from None
    raise _mismatch('Float', value)


def _coerce_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    raise _mismatch('String', value)


def _coerce_id(value: Any) -> str:
    if isinstance(value, bool):
        raise _mismatch('ID', value)
    if isinstance(value, (str, int)):
        return strawberry.ID(str(value))
    raise _mismatch('ID', value)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lv = value.strip().lower()
        if lv in _TRUE_WORDS:
            return True
        if lv in _FALSE_WORDS:
            return False
    raise _mismatch('Boolean', value)


def _coerce_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        s = value.replace('Z', '+00:00') if 'Z' in value else value
        try:
            return datetime.fromisoformat(s)
        except ValueError:
            raise _mismatch('DateTime', value) from None
    raise _mismatch('DateTime', value)


def _coerce_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise _mismatch('Date', value) from None
    raise _mismatch('Date', value)


def _coerce_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise _mismatch('Decimal', value)
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float, str)):
        try:
            return Decimal(str(value))
        except InvalidOperation:
            raise _mismatch('Decimal', value) from None
    raise _mismatch('Decimal', value)


def _coerce_uuid(value: Any) -> _py_uuid.UUID:
    if isinstance(value, _py_uuid.UUID):
        return value
    if isinstance(value, str):
        try:
            return _py_uuid.UUID(value)
        except ValueError:
            raise _mismatch('UUID', value) from None
    raise _mismatch('UUID', value)


def _passthrough(value: Any) -> Any:
    return value


_SCALARS = {
    int: InputType('Int', int, _coerce_int),
    float: InputType('Float', float, _coerce_float),
    str: InputType('String', str, _coerce_str),
    bool: InputType('Boolean', bool, _coerce_bool),
    strawberry.ID: InputType('ID', strawberry.ID, _coerce_id),
    datetime: InputType('DateTime', datetime, _coerce_datetime),
    date: InputType('Date', date, _coerce_date),
    Decimal: InputType('Decimal', Decimal, _coerce_decimal),
    _py_uuid.UUID: InputType('UUID', _py_uuid.UUID, _coerce_uuid),
}

_SCALAR_NAMES = {
    'Int': int,
    'Float': float,
    'String': str,
    'Boolean': bool,
    'ID': strawberry.ID,
}


def _enum_input(enum_cls: type) -> InputType:
    # Plain Python enums are registered with Strawberry on first use
    if not (hasattr(enum_cls, '_enum_definition') or hasattr(enum_cls, '__strawberry_definition__')):
        enum_cls = strawberry.enum(enum_cls)  # type: ignore[assignment]

    def _coerce(value: Any) -> Any:
        if isinstance(value, enum_cls):
            return value
        if isinstance(value, str) and value in enum_cls.__members__:
            return enum_cls[value]
        try:
            return enum_cls(value)
        except (ValueError, TypeError):
            raise _mismatch(enum_cls.__name__, value) from None

    return InputType(enum_cls.__name__, enum_cls, _coerce)


def _list_input(item: InputType) -> InputType:
    def _coerce(value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return [None if v is None else item.coerce(v) for v in value]
        # A single value is accepted where a list is expected
        return [item.coerce(value)]

    return InputType(f'[{item.name}]', List[item.annotation], _coerce)  # type: ignore[name-defined]


def _sa_input(sqlatype: Any) -> InputType:
    """Map a SQLAlchemy column type (class or instance) to an input type."""
    if isinstance(sqlatype, type):
        if issubclass(sqlatype, SAEnumType):
            raise DefinitionError("SQLAlchemy Enum must be given as an instance bound to a Python enum")
        sqlatype = sqlatype()
    if isinstance(sqlatype, TypeDecorator):
        return _sa_input(sqlatype.impl)
    # Enum is a subclass of String, check it first
    if isinstance(sqlatype, SAEnumType):
        enum_cls = getattr(sqlatype, 'enum_class', None)
        if enum_cls is None:
            return _SCALARS[str]
        return _enum_input(enum_cls)
    if isinstance(sqlatype, Boolean):
        return _SCALARS[bool]
    if isinstance(sqlatype, Integer):
        return _SCALARS[int]
    if isinstance(sqlatype, DateTime):
        return _SCALARS[datetime]
    if isinstance(sqlatype, Date):
        return _SCALARS[date]
    if isinstance(sqlatype, Numeric):
        return _SCALARS[float]
    if isinstance(sqlatype, String):
        return _SCALARS[str]
    if isinstance(sqlatype, SA_Uuid):
        return _SCALARS[_py_uuid.UUID]
    if isinstance(sqlatype, SA_JSON):
        return InputType('JSON', ST_JSON, _passthrough)
    raise DefinitionError(f"Unsupported SQLAlchemy type for an argument: {sqlatype!r}")


def _is_strawberry_input(tp: Any) -> bool:
    definition = getattr(tp, '__strawberry_definition__', None)
    return bool(getattr(definition, 'is_input', False))


def resolve_input_type(declared: Any) -> InputType:
    """Resolve a declared argument type into an :class:`InputType`.

    Raises:
        DefinitionError: the type cannot be used for an argument.
    """
    if declared is None:
        raise DefinitionError("Argument type is required")
    if isinstance(declared, InputType):
        return declared
    if isinstance(declared, str):
        scalar = _SCALAR_NAMES.get(declared)
        if scalar is None:
            raise DefinitionError(f"Unknown argument type name {declared!r}")
        return _SCALARS[scalar]
    # List literal, e.g. [str]
    if isinstance(declared, list):
        if len(declared) != 1:
            raise DefinitionError(f"List type must name exactly one item type, got {declared!r}")
        return _list_input(resolve_input_type(declared[0]))
    origin = get_origin(declared)
    if origin is Annotated:
        return resolve_input_type(get_args(declared)[0])
    if origin is list or origin is List:
        args = get_args(declared)
        if len(args) != 1:
            raise DefinitionError(f"List type must name its item type, got {declared!r}")
        return _list_input(resolve_input_type(args[0]))
    if origin is Union or origin is _py_types.UnionType:
        members = [a for a in get_args(declared) if a is not _NoneType]
        if len(members) != 1:
            raise DefinitionError(f"Union types cannot be used as argument types: {declared!r}")
        return resolve_input_type(members[0])
    if declared is ST_JSON:
        return InputType('JSON', ST_JSON, _passthrough)
    try:
        known = _SCALARS.get(declared)
    except TypeError:
        known = None
    if known is not None:
        return known
    if isinstance(declared, type) and issubclass(declared, Enum):
        return _enum_input(declared)
    if _is_strawberry_input(declared):
        return InputType(declared.__name__, declared, _passthrough)
    if hasattr(declared, '_scalar_definition'):
        return InputType(getattr(declared._scalar_definition, 'name', repr(declared)), declared, _passthrough)
    if isinstance(declared, TypeEngine) or (isinstance(declared, type) and issubclass(declared, TypeEngine)):
        return _sa_input(declared)
    raise DefinitionError(f"Cannot resolve argument type {declared!r}")


def optional_annotation(input_type: InputType) -> Any:
    """Annotation for an argument that may be omitted or null."""
    return Optional[input_type.annotation]
