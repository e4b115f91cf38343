from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum, StrEnum
from types import NoneType
from typing import Any, Optional, Sequence

import pytest
from typing_extensions import override

from namecodec.exception import InvalidTypeError, InvalidVariantNameError
from namecodec.serialization import (
    Deserializer,
    EnumAccess,
    Kind,
    SerializeMapping,
    SerializeSequence,
    SerializeStructure,
    Serializer,
    TaggedEnum,
    VariantAccess,
    Visitor,
    declare,
    deserialize,
    serialize,
)
from namecodec.serialization.traversal import optional_argument


class Elements(SerializeSequence[tuple], SerializeStructure[tuple], SerializeMapping[tuple]):
    def __init__(self, *head: Any) -> None:
        self.head = head
        self.items: list[Any] = []

    @override
    def serialize_element(self, value: Any) -> None:
        self.items.append(value)

    @override
    def serialize_field(self, key: str, value: Any) -> None:
        self.items.append((key, value))

    @override
    def serialize_entry(self, key: Any, value: Any) -> None:
        self.items.append((key, value))

    @override
    def end(self) -> tuple:
        return (*self.head, self.items)


class RecordingSerializer(Serializer[tuple]):
    """Returns the name and the arguments of the method that was called."""

    @override
    def serialize_bool(self, value: bool) -> tuple:
        return ('bool', value)

    @override
    def serialize_int(self, value: int) -> tuple:
        return ('int', value)

    @override
    def serialize_float(self, value: float) -> tuple:
        return ('float', value)

    @override
    def serialize_str(self, value: str) -> tuple:
        return ('str', value)

    @override
    def serialize_bytes(self, value: bytes) -> tuple:
        return ('bytes', value)

    @override
    def serialize_none(self) -> tuple:
        return ('none',)

    @override
    def serialize_some(self, value: Any) -> tuple:
        return ('some', value)

    @override
    def serialize_unit(self) -> tuple:
        return ('unit',)

    @override
    def serialize_unit_struct(self, name: str) -> tuple:
        return ('unit struct', name)

    @override
    def serialize_unit_variant(self, name: str, variant_index: int, variant: str) -> tuple:
        return ('unit variant', name, variant_index, variant)

    @override
    def serialize_newtype_struct(self, name: str, value: Any) -> tuple:
        return ('new type struct', name, value)

    @override
    def serialize_newtype_variant(self, name: str, variant_index: int, variant: str, value: Any) -> tuple:
        return ('new type variant', name, variant_index, variant, value)

    @override
    def serialize_seq(self, length: Optional[int]) -> SerializeSequence[tuple]:
        return Elements('seq', length)

    @override
    def serialize_tuple(self, length: int) -> SerializeSequence[tuple]:
        return Elements('tuple', length)

    @override
    def serialize_tuple_struct(self, name: str, length: int) -> SerializeSequence[tuple]:
        return Elements('tuple struct', name, length)

    @override
    def serialize_tuple_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
    ) -> SerializeSequence[tuple]:
        return Elements('tuple variant', name, variant_index, variant, length)

    @override
    def serialize_map(self, length: Optional[int]) -> SerializeMapping[tuple]:
        return Elements('map', length)

    @override
    def serialize_struct(self, name: str, length: int) -> SerializeStructure[tuple]:
        return Elements('struct', name, length)

    @override
    def serialize_struct_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
    ) -> SerializeStructure[tuple]:
        return Elements('struct variant', name, variant_index, variant, length)

    @override
    def serialize_any(self, value: Any) -> tuple:
        return ('any', value)


class Color(Enum):
    RED = 1
    GREEN = 2


class Mode(StrEnum):
    FAST = 'fast'


@dataclass
class Unit:
    pass


@declare(name='Meters', kind=Kind.NEWTYPE)
@dataclass
class Length:
    value: float


@declare(kind=Kind.TUPLE)
@dataclass
class Pair:
    first: int
    second: str


@dataclass
class Point:
    x: int
    y: int


class Message(TaggedEnum):
    pass


@dataclass
class Quit(Message):
    pass


@declare(kind=Kind.NEWTYPE)
@dataclass
class Write(Message):
    text: str


@declare(name='MOVE', kind=Kind.TUPLE)
@dataclass
class Move(Message):
    x: int
    y: int


@dataclass
class Paint(Message):
    r: int
    g: int


class Opaque:
    pass


opaque = Opaque()


@pytest.mark.parametrize(['value', 'expected'], [
    (None, ('unit',)),
    (True, ('bool', True)),
    (3, ('int', 3)),
    (1.5, ('float', 1.5)),
    ('x', ('str', 'x')),
    (b'x', ('bytes', b'x')),
    (bytearray(b'x'), ('bytes', b'x')),
    (memoryview(b'x'), ('bytes', b'x')),
    (Color.GREEN, ('unit variant', 'Color', 1, 'GREEN')),
    (Mode.FAST, ('unit variant', 'Mode', 0, 'FAST')),
    (Unit(), ('unit struct', 'Unit')),
    (Length(2.0), ('new type struct', 'Meters', 2.0)),
    (Pair(1, 'a'), ('tuple struct', 'Pair', 2, [1, 'a'])),
    (Point(1, 2), ('struct', 'Point', 2, [('x', 1), ('y', 2)])),
    (Quit(), ('unit variant', 'Message', 0, 'Quit')),
    (Write('hi'), ('new type variant', 'Message', 1, 'Write', 'hi')),
    (Move(1, 2), ('tuple variant', 'Message', 2, 'MOVE', 2, [1, 2])),
    (Paint(1, 2), ('struct variant', 'Message', 3, 'Paint', 2, [('r', 1), ('g', 2)])),
    ((1, 'a'), ('tuple', 2, [1, 'a'])),
    ([1, 2, 3], ('seq', 3, [1, 2, 3])),
    (frozenset([1]), ('seq', 1, [1])),
    (OrderedDict(a=1), ('map', 1, [('a', 1)])),
    (opaque, ('any', opaque)),
])
def test_serialize_dispatch(value: Any, expected: tuple) -> None:
    assert serialize(value, RecordingSerializer()) == expected


def test_serialize_optional_hint() -> None:
    assert serialize(None, RecordingSerializer(), Optional[Color]) == ('none',)
    assert serialize(Color.RED, RecordingSerializer(), Optional[Color]) == ('some', Color.RED)
    assert serialize(None, RecordingSerializer(), Color | None) == ('none',)
    # only optionals have an effect
    assert serialize(None, RecordingSerializer(), Color) == ('unit',)
    assert serialize(3, RecordingSerializer(), str) == ('int', 3)


def test_optional_argument_of_a_wider_union() -> None:
    is_optional, inner = optional_argument(Optional[int | str])
    assert is_optional
    assert inner == int | str


class Found(Exception):
    """Raised by `RecordingDeserializer` to report which method the framework called."""

    def __init__(self, method: str, *args: Any) -> None:
        super().__init__(method, *args)
        self.method = method
        self.args_ = args


class RecordingDeserializer(Deserializer):
    def _found(self, method: str, *args: Any) -> Any:
        raise Found(method, *args)

    @override
    def deserialize_any(self, visitor: Visitor[Any]) -> Any:
        return self._found('any')

    @override
    def deserialize_bool(self, visitor: Visitor[Any]) -> Any:
        return self._found('bool')

    @override
    def deserialize_int(self, visitor: Visitor[Any]) -> Any:
        return self._found('int')

    @override
    def deserialize_float(self, visitor: Visitor[Any]) -> Any:
        return self._found('float')

    @override
    def deserialize_str(self, visitor: Visitor[Any]) -> Any:
        return self._found('str')

    @override
    def deserialize_bytes(self, visitor: Visitor[Any]) -> Any:
        return self._found('bytes')

    @override
    def deserialize_byte_buf(self, visitor: Visitor[Any]) -> Any:
        return self._found('byte buf')

    @override
    def deserialize_option(self, visitor: Visitor[Any]) -> Any:
        return self._found('option')

    @override
    def deserialize_unit(self, visitor: Visitor[Any]) -> Any:
        return self._found('unit')

    @override
    def deserialize_unit_struct(self, name: str, visitor: Visitor[Any]) -> Any:
        return self._found('unit struct', name)

    @override
    def deserialize_newtype_struct(self, name: str, visitor: Visitor[Any]) -> Any:
        return self._found('new type struct', name)

    @override
    def deserialize_seq(self, visitor: Visitor[Any]) -> Any:
        return self._found('seq')

    @override
    def deserialize_tuple(self, length: int, visitor: Visitor[Any]) -> Any:
        return self._found('tuple', length)

    @override
    def deserialize_tuple_struct(self, name: str, length: int, visitor: Visitor[Any]) -> Any:
        return self._found('tuple struct', name, length)

    @override
    def deserialize_map(self, visitor: Visitor[Any]) -> Any:
        return self._found('map')

    @override
    def deserialize_struct(self, name: str, fields: Sequence[str], visitor: Visitor[Any]) -> Any:
        return self._found('struct', name, tuple(fields))

    @override
    def deserialize_enum(self, name: str, variants: Sequence[str], visitor: Visitor[Any]) -> Any:
        return self._found('enum', name, tuple(variants))

    @override
    def deserialize_identifier(self, visitor: Visitor[Any]) -> Any:
        return self._found('identifier')

    @override
    def deserialize_ignored_any(self, visitor: Visitor[Any]) -> Any:
        return self._found('ignored any')


@pytest.mark.parametrize(['target', 'method', 'args'], [
    (None, 'unit', ()),
    (NoneType, 'unit', ()),
    (Optional[Color], 'option', ()),
    (bool, 'bool', ()),
    (int, 'int', ()),
    (float, 'float', ()),
    (str, 'str', ()),
    (bytes, 'bytes', ()),
    (bytearray, 'byte buf', ()),
    (Color, 'enum', ('Color', ('RED', 'GREEN'))),
    (Message, 'enum', ('Message', ('Quit', 'Write', 'MOVE', 'Paint'))),
    (Unit, 'unit struct', ('Unit',)),
    (Length, 'new type struct', ('Meters',)),
    (Pair, 'tuple struct', ('Pair', 2)),
    (Point, 'struct', ('Point', ('x', 'y'))),
    (tuple[int, str, bytes], 'tuple', (3,)),
    (list[int], 'seq', ()),
    (frozenset, 'seq', ()),
    (dict[str, int], 'map', ()),
    (Opaque, 'any', ()),
])
def test_deserialize_dispatch(target: Any, method: str, args: tuple) -> None:
    with pytest.raises(Found) as exc_info:
        deserialize(target, RecordingDeserializer())
    assert exc_info.value.method == method
    assert exc_info.value.args_ == args


class Identifier(EnumAccess, VariantAccess):
    """Enum access that reads `name` as the variant and `payload` as the newtype payload."""

    def __init__(self, name: str, payload: Any = None) -> None:
        self.name = name
        self.payload = payload
        self.requested: Any = None

    @override
    def variant(self, visitor: Visitor[Any]) -> tuple[Any, VariantAccess]:
        return visitor.visit_str(self.name), self

    @override
    def unit_variant(self) -> None:
        pass

    @override
    def newtype_variant(self, target: Any) -> Any:
        self.requested = target
        return self.payload

    @override
    def tuple_variant(self, length: int, visitor: Visitor[Any]) -> Any:
        return visitor.visit_unit()

    @override
    def struct_variant(self, fields: Sequence[str], visitor: Visitor[Any]) -> Any:
        return visitor.visit_unit()


class EnumDeserializer(RecordingDeserializer):
    def __init__(self, access: Identifier) -> None:
        self.access = access

    @override
    def deserialize_enum(self, name: str, variants: Sequence[str], visitor: Visitor[Any]) -> Any:
        return visitor.visit_enum(self.access)

    @override
    def deserialize_option(self, visitor: Visitor[Any]) -> Any:
        return visitor.visit_some(self)


class TestEnumVisitor:
    def test_unit_variants(self) -> None:
        assert deserialize(Color, EnumDeserializer(Identifier('GREEN'))) is Color.GREEN
        assert deserialize(Message, EnumDeserializer(Identifier('Quit'))) == Quit()

    def test_newtype_variant_receives_the_field_type(self) -> None:
        access = Identifier('Write', payload='hello')
        assert deserialize(Message, EnumDeserializer(access)) == Write('hello')
        assert access.requested is str

    def test_unknown_variant(self) -> None:
        with pytest.raises(InvalidVariantNameError) as exc_info:
            deserialize(Message, EnumDeserializer(Identifier('Move')))
        assert exc_info.value.allowed == ['Quit', 'Write', 'MOVE', 'Paint']

    def test_compound_variants_are_never_built(self) -> None:
        with pytest.raises(InvalidTypeError) as exc_info:
            deserialize(Message, EnumDeserializer(Identifier('MOVE')))
        assert str(exc_info.value) == 'invalid type: unit value, expected tuple variant Message::MOVE'
        with pytest.raises(InvalidTypeError) as exc_info:
            deserialize(Message, EnumDeserializer(Identifier('Paint')))
        assert str(exc_info.value) == 'invalid type: unit value, expected struct variant Message::Paint'

    def test_present_option(self) -> None:
        assert deserialize(Optional[Color], EnumDeserializer(Identifier('RED'))) is Color.RED
