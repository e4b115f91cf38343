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

from typing import Any, NoReturn, Optional

from typing_extensions import override

from namecodec.exception import Direction, UnsupportedOperationError
from namecodec.serialization.serializer import SerializeMapping, SerializeSequence, SerializeStructure, Serializer
from namecodec.serialization.shape import Shape
from namecodec.serialization.traversal import serialize


def _unsupported(shape: Shape) -> NoReturn:
    raise UnsupportedOperationError(Direction.SERIALIZATION, shape.value)


class TupleVariantSerializer(SerializeSequence[str]):
    """Ignores the payload of a tuple variant and produces the variant name."""

    __slots__ = ('variant',)

    def __init__(self, variant: str) -> None:
        self.variant = variant

    @override
    def serialize_element(self, value: Any) -> None:
        pass

    @override
    def end(self) -> str:
        return self.variant


class StructVariantSerializer(SerializeStructure[str]):
    """Ignores the fields of a struct variant and produces the variant name."""

    __slots__ = ('variant',)

    def __init__(self, variant: str) -> None:
        self.variant = variant

    @override
    def serialize_field(self, key: str, value: Any) -> None:
        pass

    @override
    def end(self) -> str:
        return self.variant


class NameSerializer(Serializer[str]):
    """ Serializer that converts an enum variant, a unit struct or a newtype struct into its name.

    Any payload is discarded without being visited. Every other shape raises an `UnsupportedOperationError` naming the
    shape. It has no state, a new instance is used for each value.
    """

    __slots__ = ()

    @override
    def serialize_bool(self, value: bool) -> str:
        _unsupported(Shape.BOOL)

    @override
    def serialize_int(self, value: int) -> str:
        _unsupported(Shape.INT)

    @override
    def serialize_float(self, value: float) -> str:
        _unsupported(Shape.FLOAT)

    @override
    def serialize_str(self, value: str) -> str:
        _unsupported(Shape.STR)

    @override
    def serialize_bytes(self, value: bytes) -> str:
        _unsupported(Shape.BYTES)

    @override
    def serialize_none(self) -> str:
        _unsupported(Shape.NONE)

    @override
    def serialize_some(self, value: Any) -> str:
        return serialize(value, self)

    @override
    def serialize_unit(self) -> str:
        _unsupported(Shape.UNIT)

    @override
    def serialize_unit_struct(self, name: str) -> str:
        return name

    @override
    def serialize_unit_variant(self, name: str, variant_index: int, variant: str) -> str:
        return variant

    @override
    def serialize_newtype_struct(self, name: str, value: Any) -> str:
        return name

    @override
    def serialize_newtype_variant(self, name: str, variant_index: int, variant: str, value: Any) -> str:
        return variant

    @override
    def serialize_seq(self, length: Optional[int]) -> SerializeSequence[str]:
        _unsupported(Shape.SEQ)

    @override
    def serialize_tuple(self, length: int) -> SerializeSequence[str]:
        _unsupported(Shape.TUPLE)

    @override
    def serialize_tuple_struct(self, name: str, length: int) -> SerializeSequence[str]:
        _unsupported(Shape.TUPLE_STRUCT)

    @override
    def serialize_tuple_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
    ) -> SerializeSequence[str]:
        return TupleVariantSerializer(variant)

    @override
    def serialize_map(self, length: Optional[int]) -> SerializeMapping[str]:
        _unsupported(Shape.MAP)

    @override
    def serialize_struct(self, name: str, length: int) -> SerializeStructure[str]:
        _unsupported(Shape.STRUCT)

    @override
    def serialize_struct_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
    ) -> SerializeStructure[str]:
        return StructVariantSerializer(variant)

    @override
    def serialize_any(self, value: Any) -> str:
        _unsupported(Shape.ANY)
