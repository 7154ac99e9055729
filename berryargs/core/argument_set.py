from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Tuple

from ..errors import DefinitionError, DuplicateArgumentError
from .arguments import ArgumentDefinition

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .fields import FieldDef

__all__ = ['ArgumentSet']


class ArgumentSet:
    """Ordered, name-unique arguments of one field.

    Entries are keyed by external name and kept in declaration order.
    ``keys()`` is an accessor returning the sorted names; since entries are
    never exposed as attributes an argument literally named ``keys`` does not
    interfere with it.
    """

    def __init__(self, definitions: Iterable[ArgumentDefinition] = (), *, owner: Optional['FieldDef'] = None):
        self.owner = owner
        self._by_name: Dict[str, ArgumentDefinition] = {}
        self._internal_keys: Dict[str, str] = {}
        for definition in definitions:
            self.add(definition)

    def _field_path(self) -> Optional[str]:
        if self.owner is None or self.owner.owner is None:
            return None
        return self.owner.path

    def add(self, definition: ArgumentDefinition) -> ArgumentDefinition:
        """Attach a definition.

        Raises:
            DuplicateArgumentError: the external name is taken.
            DefinitionError: the internal key collides with another argument's.
        """
        if definition.name in self._by_name:
            raise DuplicateArgumentError(definition.name, self._field_path())
        clash = self._internal_keys.get(definition.internal_key)
        if clash is not None:
            raise DefinitionError(
                f"Argument '{definition.name}' uses internal key '{definition.internal_key}' "
                f"already taken by argument '{clash}'"
            )
        if definition.owner is not None and definition.owner is not self.owner:
            raise DefinitionError(f"Argument '{definition.name}' is already attached to another field")
        self._by_name[definition.name] = definition
        self._internal_keys[definition.internal_key] = definition.name
        definition.owner = self.owner
        return definition

    def lookup(self, name: str) -> Optional[ArgumentDefinition]:
        return self._by_name.get(name)

    def ordered_keys(self) -> List[str]:
        """External names sorted alphabetically."""
        return sorted(self._by_name)

    def keys(self) -> List[str]:
        return self.ordered_keys()

    def values(self) -> List[ArgumentDefinition]:
        return list(self._by_name.values())

    def items(self) -> List[Tuple[str, ArgumentDefinition]]:
        return list(self._by_name.items())

    def __getitem__(self, name: str) -> ArgumentDefinition:
        return self._by_name[name]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"<ArgumentSet {list(self._by_name)}>"
