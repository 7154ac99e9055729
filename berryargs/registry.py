from __future__ import annotations

import logging
import types as _py_types
from typing import Annotated, Any, Callable, Dict, List, Optional, Sequence, Type, Union, get_args, get_origin

import strawberry
from strawberry.types import Info as StrawberryInfo

from .config import BerrySettings
from .core.arguments import UNSET
from .core.fields import FieldDef, FieldDescriptor, type_name
from .core.runtime import ArgumentRuntime
from .core.types import optional_annotation
from .errors import DefinitionError

# Project logger
_logger = logging.getLogger("berryargs")

__all__ = ['BerryType', 'BerryTypeMeta', 'BerrySchema']

_NoneType = type(None)

_SCALAR_OUTPUTS = {
    'String': str,
    'Int': int,
    'Float': float,
    'Boolean': bool,
    'ID': strawberry.ID,
}


class BerryTypeMeta(type):
    """Collect field descriptors (own and inherited) into ``__berry_fields__``.

    Every collected field is built into a :class:`FieldDef` bound to the new
    class, which also validates method-name prepare hooks against it.
    """

    def __new__(mcls, name, bases, namespace):
        cls = super().__new__(mcls, name, bases, namespace)
        descriptors: Dict[str, FieldDescriptor] = {}
        for klass in reversed(cls.__mro__):
            for k, v in vars(klass).items():
                if isinstance(v, FieldDescriptor):
                    descriptors[k] = v
        fdefs: Dict[str, FieldDef] = {}
        for k, descriptor in descriptors.items():
            if descriptor.name is None:
                descriptor.__set_name__(cls, k)
            fdefs[k] = descriptor.build(cls)
        cls.__berry_fields__ = fdefs
        return cls


class BerryType(metaclass=BerryTypeMeta):
    """Base class for object types.

    A fresh instance is created for every field call and acts as the field
    owner: it receives the parent value, the execution context and the
    Strawberry ``Info``, and it is the lookup target of method-name prepare
    hooks.
    """

    __berry_fields__: Dict[str, FieldDef] = {}

    def __init__(self, object: Any = None, context: Any = None, info: Optional[StrawberryInfo] = None):
        self.object = object
        self.context = context
        self.info = info

    @classmethod
    def get_field(cls, name: str) -> Optional[FieldDef]:
        """Look a field up by attribute name or GraphQL name."""
        fdef = cls.__berry_fields__.get(name)
        if fdef is not None:
            return fdef
        for candidate in cls.__berry_fields__.values():
            if candidate.graphql_name == name:
                return candidate
        return None


class BerrySchema:
    """Registry of Berry types + dynamic Strawberry schema builder."""

    def __init__(self, *, settings: Optional[BerrySettings] = None):
        self.types: Dict[str, Type[BerryType]] = {}
        self._st_types: Dict[str, Any] = {}
        self._query_name: Optional[str] = None
        self.settings = settings or BerrySettings()

    def register(self, cls: Type[BerryType]) -> Type[BerryType]:
        if not (isinstance(cls, type) and issubclass(cls, BerryType)):
            raise DefinitionError(f"{cls!r} is not a BerryType subclass")
        name = type_name(cls)
        existing = self.types.get(name)
        if existing is not None and existing is not cls:
            raise DefinitionError(f"Type name '{name}' is already registered by {existing.__qualname__}")
        self.types[name] = cls
        return cls

    def type(self, *, name: Optional[str] = None, description: Optional[str] = None):
        """Decorator registering an object type.

        Example:
            @berry_schema.type(description="A blog post")
            class PostQL(BerryType):
                title = field(str)
        """
        def deco(cls: Type[BerryType]):
            if name:
                cls.__berry_name__ = name
            if description is not None:
                cls.__berry_description__ = description
            return self.register(cls)
        return deco

    def query(self, *, name: Optional[str] = None, description: Optional[str] = None):
        """Decorator registering the root Query type.

        Example:
            @berry_schema.query()
            class Query(BerryType):
                @field(str, arguments=[argument('term', str)])
                def search(self, term): ...
        """
        def deco(cls: Type[BerryType]):
            self.type(name=name, description=description)(cls)
            self._query_name = type_name(cls)
            return cls
        return deco

    def get_field(self, type_ref: str, field_name: str) -> FieldDef:
        """Return the FieldDef for ``Type.field`` (attribute or GraphQL name)."""
        btype = self.types.get(type_ref)
        if btype is None:
            raise KeyError(f"Unknown type '{type_ref}'")
        fdef = btype.get_field(field_name)
        if fdef is None:
            raise KeyError(f"Unknown field '{type_ref}.{field_name}'")
        return fdef

    # ---------- Strawberry builder ----------
    def _output_annotation(self, returns: Any, where: str) -> Any:
        """Map a declared return type onto Strawberry annotations."""
        if returns is None:
            raise DefinitionError(f"Field '{where}' has no return type")
        if isinstance(returns, str):
            if returns in self._st_types:
                return self._st_types[returns]
            if returns in _SCALAR_OUTPUTS:
                return _SCALAR_OUTPUTS[returns]
            raise DefinitionError(f"Field '{where}' returns unknown type '{returns}'")
        if isinstance(returns, list):
            if len(returns) != 1:
                raise DefinitionError(f"Field '{where}' list return type must name one item type")
            return List[self._output_annotation(returns[0], where)]  # type: ignore[misc]
        if isinstance(returns, type) and issubclass(returns, BerryType):
            name = type_name(returns)
            if self.types.get(name) is not returns:
                raise DefinitionError(f"Field '{where}' returns unregistered type {returns.__qualname__}")
            return self._st_types[name]
        origin = get_origin(returns)
        if origin is Annotated:
            return self._output_annotation(get_args(returns)[0], where)
        if origin is list or origin is List:
            return List[self._output_annotation(get_args(returns)[0], where)]  # type: ignore[misc]
        if origin is Union or origin is _py_types.UnionType:
            members = [a for a in get_args(returns) if a is not _NoneType]
            if len(members) == 1:
                return Optional[self._output_annotation(members[0], where)]
        return returns

    def _make_field_resolver(self, btype: Type[BerryType], fdef: FieldDef) -> Callable[..., Any]:
        definitions = fdef.arguments.values()
        names = [d.name for d in definitions]
        settings = self.settings

        def _invoke(root: Any, info: StrawberryInfo, values: Sequence[Any]) -> Any:
            raw = {n: v for n, v in zip(names, values) if v is not UNSET}
            owner = btype(root, info.context, info)
            kwargs = ArgumentRuntime(fdef.arguments, owner, info.context, settings=settings).resolve(raw)
            return fdef.resolve(owner, kwargs)

        ret = self._output_annotation(fdef.returns, fdef.path)
        anns: Dict[str, Any] = {
            'info': StrawberryInfo,
            'return': Optional[ret] if fdef.null else ret,
        }
        ns: Dict[str, Any] = {'__name__': __name__, '_invoke': _invoke, '_UNSET': UNSET}
        params: List[str] = []
        for i, d in enumerate(definitions):
            pname = f"arg{i}"
            if d.has_default:
                ns[f"_default{i}"] = d.default
                params.append(f"{pname}=_default{i}")
            elif d.required:
                params.append(pname)
            else:
                params.append(f"{pname}=_UNSET")
            ann = d.input_type.annotation if d.required else optional_annotation(d.input_type)
            anns[pname] = Annotated[
                ann,
                strawberry.argument(
                    name=d.name,
                    description=d.description,
                    deprecation_reason=d.deprecation_reason,
                ),
            ]
        func_name = f"_resolve_{fdef.name}"
        sig = 'root, info'
        if params:
            sig += ', *, ' + ', '.join(params)
        values = ''.join(f"arg{i}, " for i in range(len(params)))
        src = f"def {func_name}({sig}):\n"
        src += f"    return _invoke(root, info, ({values}))\n"
        exec(src, ns)
        fn = ns[func_name]
        fn.__annotations__ = anns
        return fn

    def to_strawberry(self, *, strawberry_config: Any = None) -> strawberry.Schema:
        """Build a ``strawberry.Schema`` from the registered types.

        Names, descriptions and defaults are copied at build time; call it
        again to publish later ``describe()`` changes.

        Raises:
            DefinitionError: no query type, a type without fields, or an
                unresolvable return type.
        """
        if self._query_name is None:
            raise DefinitionError("No query type registered; use @schema.query()")
        # Always rebuild Strawberry runtime classes fresh per call
        self._st_types = {}
        # Two-pass: create plain classes first so fields can reference each other
        for name, btype in self.types.items():
            if not btype.__berry_fields__:
                raise DefinitionError(f"Type '{name}' declares no fields")
            cls = type(name, (), {'__doc__': f'Berry runtime type {name}'})
            cls.__module__ = __name__
            self._st_types[name] = cls
        for name, btype in self.types.items():
            st_cls = self._st_types[name]
            for fname, fdef in btype.__berry_fields__.items():
                resolver = self._make_field_resolver(btype, fdef)
                setattr(st_cls, fname, strawberry.field(
                    resolver=resolver,
                    name=fdef.graphql_name,
                    description=fdef.description,
                    deprecation_reason=fdef.deprecation_reason,
                ))
        for name, btype in self.types.items():
            desc = vars(btype).get('__berry_description__') or btype.__doc__
            self._st_types[name] = strawberry.type(self._st_types[name], name=name, description=desc)
        _logger.debug("berryargs: built %d strawberry types (query=%s)", len(self._st_types), self._query_name)
        query = self._st_types[self._query_name]
        others = [t for n, t in self._st_types.items() if n != self._query_name]
        if strawberry_config is not None:
            return strawberry.Schema(query=query, types=others, config=strawberry_config)
        return strawberry.Schema(query=query, types=others)
