"""Find and instantiate the definition classes in a type catalog."""

import inspect
from typing import List, Type

from ..definitions import DefinitionBase
from ..errors import DefinitionInstantiationError
from ..helpers.logger import get_logger
from .loader import TypeCatalog

logger = get_logger("publishing.discovery")


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def is_definition_type(cls: type, contract: Type = DefinitionBase) -> bool:
    """
    Whether ``cls`` is a concrete class deriving from ``contract``.

    Ancestors are compared by qualified name rather than identity: the
    contract may have been imported more than once (for example from an
    installed copy and from a source checkout on the search path), and the
    copies are different class objects.
    """
    if not inspect.isclass(cls) or inspect.isabstract(cls):
        return False

    contract_name = qualified_name(contract)
    if qualified_name(cls) == contract_name:
        return False

    return any(qualified_name(base) == contract_name for base in cls.__mro__[1:])


def discover_definitions(
    catalog: TypeCatalog, contract: Type = DefinitionBase
) -> List[DefinitionBase]:
    """
    Instantiate every definition class in the catalog, in catalog order.

    Raises:
        DefinitionInstantiationError: If a definition cannot be constructed
            without arguments.
    """
    definitions = []
    for cls in catalog.types:
        if not is_definition_type(cls, contract):
            continue

        try:
            definition = cls()
        except Exception as e:
            raise DefinitionInstantiationError(
                f"Failed to instantiate {qualified_name(cls)}: {e}. "
                "Definitions must be constructible without arguments."
            ) from e

        logger.debug(f"Discovered definition {qualified_name(cls)}")
        definitions.append(definition)

    return definitions
