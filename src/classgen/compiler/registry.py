# Copyright 2026 classgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type registry and validation of the merged type graph.

Validation runs two passes and stops at the first error:

1. Uniqueness: data types are indexed by name in input order; the first
   name collision is reported.
2. References: every class property type and every enum backing type must
   name an indexed data type or a predefined type.

Reference cycles are allowed. A class may refer to itself or to a class that
refers back to it, since templates render one data type at a time.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from classgen.errors import DuplicateTypeError, UndefinedTypeError
from classgen.logging_config import get_logger
from classgen.model.entities import DataType

logger = get_logger(__name__)

# ###############
# Public Interface
# ###############


class TypeRegistry:
    """A name-keyed index of data types plus the predefined type names."""

    def __init__(self, predefined_types: Iterable[str] = ()) -> None:
        self._types: dict[str, DataType] = {}
        self._predefined: frozenset[str] = frozenset(predefined_types)

    @classmethod
    def build(cls, data_types: Sequence[DataType], predefined_types: Iterable[str] = ()) -> TypeRegistry:
        """Index *data_types* by name.

        Raises:
            DuplicateTypeError: For the first name that appears twice.
        """
        registry = cls(predefined_types)
        for data_type in data_types:
            registry.add(data_type)
        return registry

    def add(self, data_type: DataType) -> None:
        if data_type.name in self._types:
            raise DuplicateTypeError(data_type.name)
        self._types[data_type.name] = data_type

    def get(self, name: str) -> DataType | None:
        return self._types.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[DataType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    @property
    def names(self) -> list[str]:
        """Defined data type names in registration order."""
        return list(self._types)

    @property
    def predefined_types(self) -> frozenset[str]:
        return self._predefined

    def is_known(self, name: str) -> bool:
        """Return True if *name* is a defined data type or a predefined type."""
        return name in self._types or name in self._predefined

    def check_references(self) -> None:
        """Verify that every referenced type name resolves.

        Raises:
            UndefinedTypeError: For the first unresolved reference.
        """
        for data_type in self._types.values():
            for name, property_name in data_type.referenced_types():
                if not self.is_known(name):
                    raise UndefinedTypeError(name, owner=data_type.name, property_name=property_name)


def validate(data_types: Sequence[DataType], predefined_types: Iterable[str] = ()) -> list[DataType]:
    """Validate the merged data types and return them ready for rendering.

    Args:
        data_types: All data types of the run, in schema order.
        predefined_types: Names accepted without a matching definition.

    Returns:
        The data types in their original order.

    Raises:
        DuplicateTypeError: If two data types share a name. References are not
            checked in that case.
        UndefinedTypeError: If a referenced type is neither defined nor predefined.
    """
    registry = TypeRegistry.build(data_types, predefined_types)
    registry.check_references()
    logger.debug("Validated %d data type(s)", len(registry))
    return list(data_types)
