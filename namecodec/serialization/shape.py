# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

r"""
Shapes are the structural categories the traversal framework sorts every value and type hint into.

A `Shape` value doubles as the operation name reported when a serializer or deserializer refuses to handle it:

>>> Shape.TUPLE_VARIANT.value
'tuple variant'

Named types and enumerations are summarized by a `ShapeDescriptor`, built by `describe()` in the declarations module:

>>> descriptor = ShapeDescriptor(name='Foo', kind=None, variants=(
...     VariantDescriptor(name='Var1', index=0, kind=Kind.UNIT, target=None),
...     VariantDescriptor(name='VAR2', index=1, kind=Kind.NEWTYPE, fields=('value',), target=None),
... ))
>>> descriptor.is_enum
True
>>> descriptor.variant_names
('Var1', 'VAR2')
>>> descriptor.find_variant('VAR2').index
1
>>> descriptor.find_variant('Var2') is None
True
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional


class Shape(Enum):
    BOOL = 'bool'
    INT = 'int'
    FLOAT = 'float'
    STR = 'str'
    BYTES = 'bytes'
    BYTE_BUF = 'byte buf'
    NONE = 'none'
    SOME = 'some'
    UNIT = 'unit'
    UNIT_STRUCT = 'unit struct'
    UNIT_VARIANT = 'unit variant'
    NEWTYPE_STRUCT = 'new type struct'
    NEWTYPE_VARIANT = 'new type variant'
    SEQ = 'seq'
    TUPLE = 'tuple'
    TUPLE_STRUCT = 'tuple struct'
    TUPLE_VARIANT = 'tuple variant'
    MAP = 'map'
    STRUCT = 'struct'
    STRUCT_VARIANT = 'struct variant'
    OPTION = 'option'
    ENUM = 'enum'
    IDENTIFIER = 'identifier'
    ANY = 'any'
    IGNORED_ANY = 'ignored any'


class Kind(Enum):
    """Payload layout of a named type or of an enumeration variant."""
    UNIT = auto()
    NEWTYPE = auto()
    TUPLE = auto()
    STRUCT = auto()


@dataclass(frozen=True, slots=True)
class VariantDescriptor:
    name: str
    index: int
    kind: Kind
    # an enum member or a variant class
    target: Any
    fields: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ShapeDescriptor:
    """ Metadata of a named type as seen by the traversal framework.

    `kind` is None for enumerations, which carry their variants instead.
    """
    name: str
    kind: Optional[Kind]
    fields: tuple[str, ...] = ()
    variants: tuple[VariantDescriptor, ...] = ()

    @property
    def is_enum(self) -> bool:
        return self.kind is None

    @property
    def variant_names(self) -> tuple[str, ...]:
        return tuple(variant.name for variant in self.variants)

    def find_variant(self, name: str) -> Optional[VariantDescriptor]:
        for variant in self.variants:
            if variant.name == name:
                return variant
        return None

    def find_member(self, value: Any) -> Optional[VariantDescriptor]:
        """Find the descriptor of the variant `value` is an instance of (or is, for enum members)."""
        for variant in self.variants:
            if value is variant.target or (isinstance(variant.target, type) and type(value) is variant.target):
                return variant
        return None

    def variant_of(self, value: Any) -> VariantDescriptor:
        variant = self.find_member(value)
        if variant is not None:
            return variant
        raise TypeError(f'{value!r} is not a variant of {self.name}')
