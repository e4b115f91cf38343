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
The traversal framework: sort a value (or a type hint, when decoding) into a shape and call the one matching method of
a serializer (or deserializer).

Values are sorted like this:

- `None` is the unit value, unless the hint is `Optional[X]`, which makes it an absent optional and anything else a
  present one;
- `Enum` members are unit variants, instances of `TaggedEnum` variants are variants of their declared kind;
- dataclasses and declared classes are named types of their declared kind;
- `bool`, `int`, `float`, `str` and bytes-like objects are scalars;
- tuples, other sequences and sets, and mappings are compounds;
- anything else goes to `serialize_any`.

Type hints are sorted the same way. `NoneType` requests a unit, `Optional[X]` an option, and a class that is neither
a scalar, a collection nor a named type requests "any".
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence, Set
from enum import Enum
from types import NoneType, UnionType
from typing import Any, Optional, TypeVar, Union, get_args, get_origin

from structlog import get_logger
from typing_extensions import assert_never, override

from namecodec.exception import Direction, InvalidVariantNameError, MessageError, UnsupportedOperationError
from namecodec.serialization.declarations import describe, is_tagged_enum, is_tagged_variant
from namecodec.serialization.deserializer import Deserializer, EnumAccess, Visitor
from namecodec.serialization.serializer import Serializer
from namecodec.serialization.shape import Kind, Shape, ShapeDescriptor, VariantDescriptor

logger = get_logger()

T = TypeVar('T')

_BYTES_LIKE = (bytes, bytearray, memoryview)


def optional_argument(hint: Any) -> tuple[bool, Any]:
    """ Check whether a type hint is `Optional[X]` and extract X.

    >>> optional_argument(Optional[int])
    (True, <class 'int'>)
    >>> optional_argument(int | None)
    (True, <class 'int'>)
    >>> optional_argument(int)
    (False, None)
    >>> optional_argument(int | str)
    (False, None)
    """
    origin = get_origin(hint)
    if origin is not Union and origin is not UnionType:
        return False, None
    args = get_args(hint)
    inner = tuple(arg for arg in args if arg is not NoneType)
    if len(inner) == len(args):
        return False, None
    if len(inner) == 1:
        return True, inner[0]
    return True, Union[inner]


def serialize(value: Any, serializer: Serializer[T], hint: Any = None) -> T:
    """ Feed `value` to the serializer method matching its shape and return what it produced.

    The only hint that has an effect is `Optional[X]`, which is needed to tell an absent optional from a unit.
    """
    if hint is not None:
        is_optional, _ = optional_argument(hint)
        if is_optional:
            if value is None:
                return serializer.serialize_none()
            return serializer.serialize_some(value)

    if value is None:
        return serializer.serialize_unit()

    # XXX: must come before the scalars because of IntEnum and StrEnum
    if isinstance(value, Enum):
        enum_descriptor = describe(type(value))
        assert enum_descriptor is not None
        variant = enum_descriptor.find_member(value)
        if variant is None:
            # e.g. a combination of Flag members that was never declared
            raise UnsupportedOperationError(Direction.SERIALIZATION, Shape.UNIT_VARIANT.value)
        return serializer.serialize_unit_variant(enum_descriptor.name, variant.index, variant.name)

    if isinstance(value, bool):
        return serializer.serialize_bool(value)
    if isinstance(value, int):
        return serializer.serialize_int(value)
    if isinstance(value, float):
        return serializer.serialize_float(value)
    if isinstance(value, str):
        return serializer.serialize_str(value)
    if isinstance(value, _BYTES_LIKE):
        return serializer.serialize_bytes(bytes(value))

    value_type = type(value)
    if is_tagged_variant(value_type):
        root = next(base for base in value_type.__bases__ if is_tagged_enum(base))
        enum_descriptor = describe(root)
        assert enum_descriptor is not None
        return _serialize_variant(value, enum_descriptor, enum_descriptor.variant_of(value), serializer)

    descriptor = describe(value_type)
    if descriptor is not None:
        if descriptor.is_enum:
            raise TypeError(f'{value!r} is an instance of the enumeration itself, not of one of its variants')
        return _serialize_named(value, descriptor, serializer)

    if isinstance(value, tuple):
        elements = serializer.serialize_tuple(len(value))
        for element in value:
            elements.serialize_element(element)
        return elements.end()

    if isinstance(value, Mapping):
        entries = serializer.serialize_map(len(value))
        for key, item in value.items():
            entries.serialize_entry(key, item)
        return entries.end()

    if isinstance(value, (Sequence, Set)):
        elements = serializer.serialize_seq(len(value))
        for element in value:
            elements.serialize_element(element)
        return elements.end()

    return serializer.serialize_any(value)


def _serialize_named(value: Any, descriptor: ShapeDescriptor, serializer: Serializer[T]) -> T:
    name = descriptor.name
    fields = descriptor.fields
    kind = descriptor.kind
    assert kind is not None
    match kind:
        case Kind.UNIT:
            return serializer.serialize_unit_struct(name)
        case Kind.NEWTYPE:
            return serializer.serialize_newtype_struct(name, getattr(value, fields[0]))
        case Kind.TUPLE:
            elements = serializer.serialize_tuple_struct(name, len(fields))
            for field in fields:
                elements.serialize_element(getattr(value, field))
            return elements.end()
        case Kind.STRUCT:
            structure = serializer.serialize_struct(name, len(fields))
            for field in fields:
                structure.serialize_field(field, getattr(value, field))
            return structure.end()
        case _:
            assert_never(kind)


def _serialize_variant(
    value: Any,
    descriptor: ShapeDescriptor,
    variant: VariantDescriptor,
    serializer: Serializer[T],
) -> T:
    name = descriptor.name
    fields = variant.fields
    match variant.kind:
        case Kind.UNIT:
            return serializer.serialize_unit_variant(name, variant.index, variant.name)
        case Kind.NEWTYPE:
            return serializer.serialize_newtype_variant(name, variant.index, variant.name, getattr(value, fields[0]))
        case Kind.TUPLE:
            elements = serializer.serialize_tuple_variant(name, variant.index, variant.name, len(fields))
            for field in fields:
                elements.serialize_element(getattr(value, field))
            return elements.end()
        case Kind.STRUCT:
            structure = serializer.serialize_struct_variant(name, variant.index, variant.name, len(fields))
            for field in fields:
                structure.serialize_field(field, getattr(value, field))
            return structure.end()
        case _:
            assert_never(variant.kind)


def deserialize(target: Any, deserializer: Deserializer) -> Any:
    """ Request the shape of the type hint `target` from the deserializer and return the value it built.
    """
    if target is None or target is NoneType:
        return deserializer.deserialize_unit(UnitVisitor())

    is_optional, inner = optional_argument(target)
    if is_optional:
        return deserializer.deserialize_option(OptionVisitor(inner))

    descriptor = describe(target)
    if descriptor is not None:
        if descriptor.is_enum:
            return deserializer.deserialize_enum(descriptor.name, descriptor.variant_names, EnumVisitor(descriptor))
        return _deserialize_named(target, descriptor, deserializer)

    origin = get_origin(target) or target
    if origin is bool:
        return deserializer.deserialize_bool(ScalarVisitor(bool, 'a boolean'))
    if origin is int:
        return deserializer.deserialize_int(ScalarVisitor(int, 'an integer'))
    if origin is float:
        return deserializer.deserialize_float(ScalarVisitor(float, 'a float'))
    if origin is str:
        return deserializer.deserialize_str(StrVisitor())
    if origin is bytes:
        return deserializer.deserialize_bytes(ScalarVisitor(bytes, 'a byte array'))
    if origin is bytearray:
        return deserializer.deserialize_byte_buf(ScalarVisitor(bytearray, 'a byte buffer'))
    if isinstance(origin, type):
        if issubclass(origin, tuple):
            return deserializer.deserialize_tuple(len(get_args(target)), OpaqueVisitor('a tuple'))
        if issubclass(origin, Mapping):
            return deserializer.deserialize_map(OpaqueVisitor('a map'))
        if issubclass(origin, (Sequence, Set)):
            return deserializer.deserialize_seq(OpaqueVisitor('a sequence'))

    logger.debug('no specific shape for target, requesting any', target=target)
    return deserializer.deserialize_any(OpaqueVisitor('any value'))


def _deserialize_named(target: type, descriptor: ShapeDescriptor, deserializer: Deserializer) -> Any:
    name = descriptor.name
    kind = descriptor.kind
    assert kind is not None
    match kind:
        case Kind.UNIT:
            return deserializer.deserialize_unit_struct(name, UnitStructVisitor(target, name))
        case Kind.NEWTYPE:
            return deserializer.deserialize_newtype_struct(name, OpaqueVisitor(f'newtype struct {name}'))
        case Kind.TUPLE:
            return deserializer.deserialize_tuple_struct(
                name,
                len(descriptor.fields),
                OpaqueVisitor(f'tuple struct {name}'),
            )
        case Kind.STRUCT:
            return deserializer.deserialize_struct(name, descriptor.fields, OpaqueVisitor(f'struct {name}'))
        case _:
            assert_never(kind)


def _instantiate(target: Any, *args: Any) -> Any:
    """Build the value of a unit struct or a variant, enum members are already values."""
    if isinstance(target, Enum):
        return target
    try:
        return target(*args)
    except (TypeError, ValueError) as e:
        raise MessageError(f'failed to build {target.__name__}: {e}') from e


def _field_type(target: type, field_name: str) -> Any:
    if dataclasses.is_dataclass(target):
        for field in dataclasses.fields(target):
            if field.name == field_name:
                return field.type
    return Any


class OpaqueVisitor(Visitor[Any]):
    """Used for the shapes the framework requests but never builds values for, every visit is an invalid type."""

    def __init__(self, expecting: str) -> None:
        self._expecting = expecting

    @override
    def expecting(self) -> str:
        return self._expecting


class UnitVisitor(Visitor[None]):
    @override
    def expecting(self) -> str:
        return 'unit'

    @override
    def visit_unit(self) -> None:
        return None


class StrVisitor(Visitor[str]):
    @override
    def expecting(self) -> str:
        return 'a string'

    @override
    def visit_str(self, value: str) -> str:
        return value


class ScalarVisitor(Visitor[Any]):
    """Accepts a single kind of scalar, converting bytes-like values to the expected bytes type."""

    def __init__(self, type_: type, expecting: str) -> None:
        self.type_ = type_
        self._expecting = expecting

    @override
    def expecting(self) -> str:
        return self._expecting

    @override
    def visit_bool(self, value: bool) -> Any:
        if self.type_ is bool:
            return value
        return super().visit_bool(value)

    @override
    def visit_int(self, value: int) -> Any:
        if self.type_ is int:
            return value
        return super().visit_int(value)

    @override
    def visit_float(self, value: float) -> Any:
        if self.type_ is float:
            return value
        return super().visit_float(value)

    @override
    def visit_bytes(self, value: bytes) -> Any:
        if self.type_ in (bytes, bytearray):
            return self.type_(value)
        return super().visit_bytes(value)


class OptionVisitor(Visitor[Any]):
    def __init__(self, inner: Any) -> None:
        self.inner = inner

    @override
    def expecting(self) -> str:
        return 'option'

    @override
    def visit_none(self) -> None:
        return None

    @override
    def visit_some(self, deserializer: Deserializer) -> Any:
        return deserialize(self.inner, deserializer)


class UnitStructVisitor(Visitor[Any]):
    def __init__(self, target: type, name: str) -> None:
        self.target = target
        self.name = name

    @override
    def expecting(self) -> str:
        return f'unit struct {self.name}'

    @override
    def visit_unit(self) -> Any:
        return _instantiate(self.target)


class VariantIdentifierVisitor(Visitor[VariantDescriptor]):
    """Resolves the identifier read from the input to one of the declared variants."""

    def __init__(self, descriptor: ShapeDescriptor) -> None:
        self.descriptor = descriptor

    @override
    def expecting(self) -> str:
        return 'variant identifier'

    @override
    def visit_str(self, value: str) -> VariantDescriptor:
        variant = self.descriptor.find_variant(value)
        if variant is None:
            raise InvalidVariantNameError(received=value, allowed=self.descriptor.variant_names)
        return variant


class EnumVisitor(Visitor[Any]):
    def __init__(self, descriptor: ShapeDescriptor) -> None:
        self.descriptor = descriptor

    @override
    def expecting(self) -> str:
        return f'enum {self.descriptor.name}'

    @override
    def visit_enum(self, access: EnumAccess) -> Any:
        variant, variant_access = access.variant(VariantIdentifierVisitor(self.descriptor))
        qualified_name = f'{self.descriptor.name}::{variant.name}'
        match variant.kind:
            case Kind.UNIT:
                variant_access.unit_variant()
                return _instantiate(variant.target)
            case Kind.NEWTYPE:
                payload = variant_access.newtype_variant(_field_type(variant.target, variant.fields[0]))
                return _instantiate(variant.target, payload)
            case Kind.TUPLE:
                return variant_access.tuple_variant(
                    len(variant.fields),
                    OpaqueVisitor(f'tuple variant {qualified_name}'),
                )
            case Kind.STRUCT:
                return variant_access.struct_variant(variant.fields, OpaqueVisitor(f'struct variant {qualified_name}'))
            case _:
                assert_never(variant.kind)
