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
Deserializer that builds a value out of a single name.

The whole input is the name: it is either matched against the name of the requested unit struct or read as an enum
variant identifier, and it is consumed only once.

>>> from namecodec.serialization.traversal import StrVisitor, UnitVisitor
>>> de = NameDeserializer('Foo')
>>> de.deserialize_str(StrVisitor())
'Foo'
>>> de.is_empty()
True

A unit is produced without reading anything:

>>> de = NameDeserializer('Foo')
>>> str(de.deserialize_unit(UnitVisitor()))
'None'
>>> de.input
'Foo'
"""

from typing import Any, NoReturn, Sequence, TypeVar

from typing_extensions import override

from namecodec.exception import (
    Direction,
    InvalidTypeError,
    InvalidVariantNameError,
    NameCodecError,
    TrailingNameError,
    UnsupportedOperationError,
)
from namecodec.serialization.deserializer import Deserializer, EnumAccess, VariantAccess, Visitor
from namecodec.serialization.shape import Shape

T = TypeVar('T')


def _unsupported(shape: Shape) -> NoReturn:
    raise UnsupportedOperationError(Direction.DESERIALIZATION, shape.value)


class NameDeserializer(Deserializer):
    """ Deserializer whose entire input is one name.

    The input is set to the empty string as soon as it is consumed, so it is never read twice. A caller checks
    `is_empty()` after decoding to detect leftover input.
    """

    __slots__ = ('input',)

    def __init__(self, input: str) -> None:
        self.input = input

    def is_empty(self) -> bool:
        return not self.input

    def _consume(self) -> str:
        value, self.input = self.input, ''
        return value

    @override
    def deserialize_any(self, visitor: Visitor[T]) -> T:
        _unsupported(Shape.ANY)

    @override
    def deserialize_bool(self, visitor: Visitor[T]) -> T:
        _unsupported(Shape.BOOL)

    @override
    def deserialize_int(self, visitor: Visitor[T]) -> T:
        _unsupported(Shape.INT)

    @override
    def deserialize_float(self, visitor: Visitor[T]) -> T:
        _unsupported(Shape.FLOAT)

    @override
    def deserialize_str(self, visitor: Visitor[T]) -> T:
        return visitor.visit_str(self._consume())

    @override
    def deserialize_bytes(self, visitor: Visitor[T]) -> T:
        _unsupported(Shape.BYTES)

    @override
    def deserialize_byte_buf(self, visitor: Visitor[T]) -> T:
        _unsupported(Shape.BYTE_BUF)

    @override
    def deserialize_option(self, visitor: Visitor[T]) -> T:
        return visitor.visit_enum(VariantName(self))

    @override
    def deserialize_unit(self, visitor: Visitor[T]) -> T:
        return visitor.visit_unit()

    @override
    def deserialize_unit_struct(self, name: str, visitor: Visitor[T]) -> T:
        if self.input != name:
            if self.input.startswith(name):
                raise TrailingNameError(unexpected=self.input, expected=name)
            raise InvalidTypeError(unexpected=self.input, expected=name)
        self._consume()
        return visitor.visit_unit()

    @override
    def deserialize_newtype_struct(self, name: str, visitor: Visitor[T]) -> T:
        _unsupported(Shape.NEWTYPE_STRUCT)

    @override
    def deserialize_seq(self, visitor: Visitor[T]) -> T:
        _unsupported(Shape.SEQ)

    @override
    def deserialize_tuple(self, length: int, visitor: Visitor[T]) -> T:
        _unsupported(Shape.TUPLE)

    @override
    def deserialize_tuple_struct(self, name: str, length: int, visitor: Visitor[T]) -> T:
        _unsupported(Shape.TUPLE_STRUCT)

    @override
    def deserialize_map(self, visitor: Visitor[T]) -> T:
        _unsupported(Shape.MAP)

    @override
    def deserialize_struct(self, name: str, fields: Sequence[str], visitor: Visitor[T]) -> T:
        _unsupported(Shape.STRUCT)

    @override
    def deserialize_enum(self, name: str, variants: Sequence[str], visitor: Visitor[T]) -> T:
        received = self.input
        try:
            return visitor.visit_enum(VariantName(self))
        except NameCodecError as e:
            raise InvalidVariantNameError(received=received, allowed=variants) from e

    @override
    def deserialize_identifier(self, visitor: Visitor[T]) -> T:
        return self.deserialize_str(visitor)

    @override
    def deserialize_ignored_any(self, visitor: Visitor[T]) -> T:
        _unsupported(Shape.IGNORED_ANY)


class VariantName(EnumAccess, VariantAccess):
    """ Reads the whole input as a variant identifier, only variants without payload can then be built.
    """

    __slots__ = ('deserializer',)

    def __init__(self, deserializer: NameDeserializer) -> None:
        self.deserializer = deserializer

    @override
    def variant(self, visitor: Visitor[T]) -> tuple[T, VariantAccess]:
        return self.deserializer.deserialize_identifier(visitor), self

    @override
    def unit_variant(self) -> None:
        pass

    @override
    def newtype_variant(self, target: Any) -> Any:
        _unsupported(Shape.NEWTYPE_VARIANT)

    @override
    def tuple_variant(self, length: int, visitor: Visitor[T]) -> T:
        _unsupported(Shape.TUPLE_VARIANT)

    @override
    def struct_variant(self, fields: Sequence[str], visitor: Visitor[T]) -> T:
        _unsupported(Shape.STRUCT_VARIANT)
