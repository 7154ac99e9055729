import pytest

from berryargs import BerrySchema, BerryType, DefinitionError, argument, field
from tests.schema import MULTIPLY, schema


@pytest.mark.asyncio
async def test_aliased_argument_reaches_resolver_under_alias(context):
    res = await schema.execute('{ field(aliasedArg: "x") }', context_value=context)
    assert res.errors is None, res.errors
    assert res.data == {'field': "{'renamed': 'x'}"}


@pytest.mark.asyncio
@pytest.mark.parametrize('external, internal', [
    ('preparedArg', 'prepared_arg'),
    ('preparedByProcArg', 'prepared_by_proc_arg'),
    ('preparedByCallableArg', 'prepared_by_callable_arg'),
])
async def test_prepared_arguments(context, external, internal):
    res = await schema.execute(f'{{ field({external}: 5) }}', context_value=context)
    assert res.errors is None, res.errors
    assert res.data == {'field': repr({internal: 15})}


@pytest.mark.asyncio
async def test_callable_object_hook_is_called_per_execution(context):
    before = MULTIPLY.calls
    await schema.execute('{ field(preparedByCallableArg: 1) }', context_value=context)
    await schema.execute('{ field(preparedByCallableArg: 2) }', context_value=context)
    assert MULTIPLY.calls == before + 2


@pytest.mark.asyncio
async def test_hook_error_nulls_only_the_failing_field(context):
    q = '{ f1: field(arg: "echo"), f2: field(explodingPreparedArg: 5) }'
    res = await schema.execute(q, context_value=context)
    assert res.data == {'f1': "{'arg': 'echo'}", 'f2': None}
    assert len(res.errors) == 1
    assert res.errors[0].message == 'boom!'
    assert res.errors[0].path == ['f2']


@pytest.mark.asyncio
async def test_list_argument(context):
    res = await schema.execute('{ field(keys: ["a", "b"]) }', context_value=context)
    assert res.errors is None, res.errors
    assert res.data == {'field': "{'keys': ['a', 'b']}"}


@pytest.mark.asyncio
async def test_absent_arguments_are_not_passed(context):
    res = await schema.execute('{ field }', context_value=context)
    assert res.errors is None, res.errors
    assert res.data == {'field': '{}'}


@pytest.mark.asyncio
async def test_declared_default_and_renamed_argument(context):
    res = await schema.execute('{ a: echo, b: echo(raw_text: "ab", repeat: 2) }', context_value=context)
    assert res.errors is None, res.errors
    assert res.data == {'a': 'berry', 'b': 'abab'}


@pytest.mark.asyncio
async def test_required_argument_with_alias(context):
    res = await schema.execute('{ post(postId: 2) { id title } }', context_value=context)
    assert res.errors is None, res.errors
    assert res.data == {'post': {'id': 2, 'title': 'GraphQL Tips'}}


@pytest.mark.asyncio
async def test_missing_required_argument_fails_validation(context):
    res = await schema.execute('{ post { id } }', context_value=context)
    assert res.errors
    assert 'postId' in res.errors[0].message


@pytest.mark.asyncio
async def test_method_hook_runs_on_nested_owner(context):
    res = await schema.execute('{ post(postId: 1) { title(truncate: 5) } }', context_value=context)
    assert res.errors is None, res.errors
    assert res.data == {'post': {'title': 'First'}}


@pytest.mark.asyncio
async def test_nested_preparation_errors_carry_list_paths(context):
    res = await schema.execute('{ posts { id title(truncate: 0) } }', context_value=context)
    assert res.data == {'posts': [{'id': 1, 'title': None}, {'id': 2, 'title': None}]}
    assert {tuple(e.path) for e in res.errors} == {('posts', 0, 'title'), ('posts', 1, 'title')}
    assert all(e.message == 'truncate must be positive' for e in res.errors)


@pytest.mark.asyncio
async def test_introspection_exposes_argument_metadata(context):
    q = """
    {
      __type(name: "Query") {
        fields {
          name
          args(includeDeprecated: true) { name description defaultValue isDeprecated deprecationReason }
        }
      }
    }
    """
    res = await schema.execute(q, context_value=context)
    assert res.errors is None, res.errors
    fields = {f['name']: {a['name']: a for a in f['args']} for f in res.data['__type']['fields']}
    assert fields['field']['arg']['description'] == 'test'
    assert fields['field']['argWithBlock']['description'] == 'test'
    assert fields['field']['aliasedArg']['description'] is None
    assert fields['echo']['raw_text']['defaultValue'] == '"berry"'
    assert fields['echo']['repeat']['isDeprecated'] is True
    assert fields['echo']['repeat']['deprecationReason'] == 'Use copies'
    assert list(fields['field']) == [
        'arg', 'argWithBlock', 'aliasedArg', 'preparedArg', 'preparedByProcArg',
        'explodingPreparedArg', 'keys', 'preparedByCallableArg',
    ]


@pytest.mark.asyncio
async def test_type_description_is_exposed(context):
    res = await schema.execute('{ __type(name: "PostQL") { description } }', context_value=context)
    assert res.data == {'__type': {'description': 'Blog post'}}


def test_schema_without_query_type():
    s = BerrySchema()

    @s.type()
    class Thing(BerryType):
        name = field(str)

    with pytest.raises(DefinitionError, match='No query type'):
        s.to_strawberry()


def test_type_without_fields_is_rejected():
    s = BerrySchema()

    @s.type()
    class Empty(BerryType):
        pass

    @s.query()
    class Query(BerryType):
        ping = field(str)

    with pytest.raises(DefinitionError, match="'Empty' declares no fields"):
        s.to_strawberry()


def test_unregistered_return_type_is_rejected():
    s = BerrySchema()

    class Stray(BerryType):
        name = field(str)

    @s.query()
    class Query(BerryType):
        stray = field(Stray)

    with pytest.raises(DefinitionError, match='unregistered type'):
        s.to_strawberry()


def test_duplicate_type_names_are_rejected():
    s = BerrySchema()

    @s.type(name='Thing')
    class A(BerryType):
        name = field(str)

    class B(BerryType):
        name = field(str)

    with pytest.raises(DefinitionError, match="'Thing' is already registered"):
        s.type(name='Thing')(B)


@pytest.mark.asyncio
async def test_schema_lookup_by_graphql_name():
    s = BerrySchema()

    @s.query()
    class Query(BerryType):
        @field(int, arguments=[argument('page_size', int, default=10)])
        def page_count(self, page_size):
            return 100 // page_size

    fdef = s.get_field('Query', 'pageCount')
    assert fdef.arguments['pageSize'].path == 'Query.pageCount.pageSize'
    res = await s.to_strawberry().execute('{ pageCount(pageSize: 25) }')
    assert res.errors is None, res.errors
    assert res.data == {'pageCount': 4}
