import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union

import pytest
import strawberry
from sqlalchemy import Boolean, Date, DateTime, Enum as SAEnum, Integer, JSON, Numeric, String, Text, Uuid

from berryargs import CoercionError, DefinitionError, argument
from berryargs.core.types import resolve_input_type


class Color(Enum):
    RED = 'red'
    GREEN = 'green'


@strawberry.input
class RangeInput:
    low: int
    high: int


@pytest.mark.parametrize('declared, name', [
    (int, 'Int'),
    ('Int', 'Int'),
    (str, 'String'),
    ('Boolean', 'Boolean'),
    (strawberry.ID, 'ID'),
    (Optional[int], 'Int'),
    (int | None, 'Int'),
    ([str], '[String]'),
    (List[int], '[Int]'),
    (list[float], '[Float]'),
    ([[int]], '[[Int]]'),
    (RangeInput, 'RangeInput'),
    (Color, 'Color'),
])
def test_resolves_declared_types(declared, name):
    assert resolve_input_type(declared).name == name


@pytest.mark.parametrize('declared, raw, expected', [
    (int, 5, 5),
    (int, '7', 7),
    (int, 3.0, 3),
    (float, 2, 2.0),
    (float, '1.5', 1.5),
    (str, 'x', 'x'),
    (strawberry.ID, 12, '12'),
    (bool, 'yes', True),
    (bool, False, False),
    (datetime, '2024-01-02T03:04:05Z', datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)),
    (date, '2024-01-02', date(2024, 1, 2)),
    (Decimal, '1.10', Decimal('1.10')),
    (uuid.UUID, '12345678-1234-5678-1234-567812345678', uuid.UUID('12345678-1234-5678-1234-567812345678')),
    (Color, 'RED', Color.RED),
    (Color, 'green', Color.GREEN),
    ([int], ['1', 2], [1, 2]),
    ([int], 4, [4]),
])
def test_coerces_raw_values(declared, raw, expected):
    assert resolve_input_type(declared).coerce(raw) == expected


@pytest.mark.parametrize('declared, raw', [
    (int, True),
    (int, 'five'),
    (int, 2.5),
    (float, 'abc'),
    (str, 5),
    (bool, 'maybe'),
    (datetime, 'not a date'),
    (Color, 'BLUE'),
    ([int], ['x']),
])
def test_mismatches_raise_coercion_error(declared, raw):
    with pytest.raises(CoercionError):
        resolve_input_type(declared).coerce(raw)


@pytest.mark.parametrize('declared, name', [
    (Integer, 'Int'),
    (Integer(), 'Int'),
    (String(50), 'String'),
    (Text(), 'String'),
    (Boolean(), 'Boolean'),
    (DateTime(timezone=True), 'DateTime'),
    (Date(), 'Date'),
    (Numeric(10, 2), 'Float'),
    (Uuid(), 'UUID'),
    (SAEnum(Color), 'Color'),
    (JSON(), 'JSON'),
])
def test_sqlalchemy_column_types(declared, name):
    assert resolve_input_type(declared).name == name


def test_sqlalchemy_typed_argument_coerces():
    arg = argument('min_id', Integer, required=False)
    assert arg.coerce('10') == 10


@pytest.mark.parametrize('declared', [
    'Widget',
    object,
    [int, str],
    Union[int, str],
    SAEnum,
])
def test_unresolvable_types(declared):
    with pytest.raises(DefinitionError):
        resolve_input_type(declared)
