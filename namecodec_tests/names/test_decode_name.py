from dataclasses import dataclass
from enum import Enum, Flag
from types import NoneType
from typing import Any, Optional

import pytest

from namecodec import (
    Direction,
    ErrorCode,
    InvalidTypeError,
    InvalidVariantNameError,
    Kind,
    MessageError,
    NameCodecError,
    TaggedEnum,
    TrailingCharactersError,
    UnsupportedOperationError,
    declare,
    decode_name,
    encode_name,
    rename_variants,
)


class CaseFoo(Enum):
    foo = 1
    FoO = 2
    FOO = 3
    fOO = 4


@rename_variants(Var2='VAR2')
class Foo(Enum):
    Var1 = 1
    Var2 = 2


@dataclass
class Bar:
    pass


@declare(name='BAR')
@dataclass
class RenamedBar:
    pass


class PayloadFoo(TaggedEnum):
    pass


@declare(kind=Kind.NEWTYPE)
@dataclass
class BAz(PayloadFoo):
    value: int


@declare(name='VAR', kind=Kind.TUPLE)
@dataclass
class Var(PayloadFoo):
    first: None
    second: None
    third: int


@dataclass
class Struct(PayloadFoo):
    field: int


@dataclass
class Unit(PayloadFoo):
    pass


class TestEnums:
    def test_case_sensitive(self) -> None:
        assert decode_name('foo', CaseFoo) is CaseFoo.foo
        assert decode_name('FoO', CaseFoo) is CaseFoo.FoO
        assert decode_name('FOO', CaseFoo) is CaseFoo.FOO
        assert decode_name('fOO', CaseFoo) is CaseFoo.fOO
        for name in ['Foo', 'fOo', 'foO', 'FOo']:
            with pytest.raises(InvalidVariantNameError):
                decode_name(name, CaseFoo)

    @pytest.mark.parametrize('name', ['Var1 ', ' Var1', 'V ar1', 'V a r 1', '', 'Var1\n'])
    def test_space_sensitive(self, name: str) -> None:
        with pytest.raises(InvalidVariantNameError):
            decode_name(name, Foo)

    def test_unit_variants(self) -> None:
        assert decode_name('Var1', Foo) is Foo.Var1
        assert decode_name('VAR2', Foo) is Foo.Var2

    def test_renamed_variant_is_only_known_by_its_new_name(self) -> None:
        with pytest.raises(InvalidVariantNameError):
            decode_name('Var2', Foo)

    def test_unknown_name(self) -> None:
        with pytest.raises(InvalidVariantNameError) as exc_info:
            decode_name('Var3', Foo)
        assert exc_info.value.received == 'Var3'
        assert exc_info.value.allowed == ['Var1', 'VAR2']
        assert exc_info.value.code is ErrorCode.INVALID_VARIANT_NAME
        assert str(exc_info.value) == "invalid variant: Var3 is not a valid variant name (['Var1', 'VAR2'])"

    def test_multi_bit_flag_member(self) -> None:
        class Perm(Flag):
            R = 1
            W = 2
            RW = 3

        assert decode_name('RW', Perm) is Perm.RW
        assert decode_name('W', Perm) is Perm.W
        with pytest.raises(InvalidVariantNameError) as exc_info:
            decode_name('R|W', Perm)
        assert exc_info.value.allowed == ['R', 'W', 'RW']

    def test_unit_variant_of_tagged_enum(self) -> None:
        assert decode_name('Unit', PayloadFoo) == Unit()

    @pytest.mark.parametrize('name', ['BAz', 'VAR', 'Struct'])
    def test_variants_with_payload_are_impossible(self, name: str) -> None:
        with pytest.raises(InvalidVariantNameError) as exc_info:
            decode_name(name, PayloadFoo)
        assert exc_info.value.received == name
        assert exc_info.value.allowed == ['BAz', 'VAR', 'Struct', 'Unit']
        assert isinstance(exc_info.value.__cause__, UnsupportedOperationError)
        assert exc_info.value.__cause__.direction is Direction.DESERIALIZATION

    def test_payload_variant_cause_names_the_variant_kind(self) -> None:
        causes = {}
        for name in ['BAz', 'VAR', 'Struct']:
            with pytest.raises(InvalidVariantNameError) as exc_info:
                decode_name(name, PayloadFoo)
            cause = exc_info.value.__cause__
            assert isinstance(cause, UnsupportedOperationError)
            causes[name] = cause.operation
        assert causes == {'BAz': 'new type variant', 'VAR': 'tuple variant', 'Struct': 'struct variant'}

    def test_failing_variant_constructor(self) -> None:
        class Flaky(TaggedEnum):
            pass

        @dataclass
        class Broken(Flaky):
            def __post_init__(self) -> None:
                raise ValueError('nope')

        with pytest.raises(InvalidVariantNameError) as exc_info:
            decode_name('Broken', Flaky)
        assert isinstance(exc_info.value.__cause__, MessageError)
        assert str(exc_info.value.__cause__) == 'failed to build Broken: nope'


class TestStructs:
    def test_case_sensitive(self) -> None:
        @dataclass
        class foo:
            pass

        @dataclass
        class FoO:
            pass

        assert decode_name('foo', foo) == foo()
        assert decode_name('FoO', FoO) == FoO()
        for name in ['Foo', 'FoO', 'FOo', 'fOO']:
            with pytest.raises(InvalidTypeError):
                decode_name(name, foo)
        for name in ['Foo', 'foO', 'foo', 'FOo']:
            with pytest.raises(InvalidTypeError):
                decode_name(name, FoO)

    @pytest.mark.parametrize('name', [' Bar', 'B ar', 'B a r', 'bar', 'BAR', ''])
    def test_mismatch(self, name: str) -> None:
        with pytest.raises(InvalidTypeError) as exc_info:
            decode_name(name, Bar)
        assert exc_info.value.unexpected == name
        assert exc_info.value.expected == 'Bar'
        assert exc_info.value.code is ErrorCode.INVALID_TYPE

    @pytest.mark.parametrize('name', ['Bar ', 'Bar!', 'BarX', 'BarBar'])
    def test_trailing_characters(self, name: str) -> None:
        with pytest.raises(TrailingCharactersError) as exc_info:
            decode_name(name, Bar)
        assert isinstance(exc_info.value, InvalidTypeError)
        assert exc_info.value.code is ErrorCode.TRAILING_CHARACTERS
        assert str(exc_info.value) == f'invalid type: {name}, expected Bar'

    def test_unit_struct(self) -> None:
        assert decode_name('Bar', Bar) == Bar()
        assert decode_name('BAR', RenamedBar) == RenamedBar()
        for name in ['bAR', 'bar', 'RenamedBar']:
            with pytest.raises(InvalidTypeError):
                decode_name(name, RenamedBar)

    def test_declared_plain_class(self) -> None:
        @declare
        class Marker:
            pass

        assert isinstance(decode_name('Marker', Marker), Marker)

    def test_failing_constructor(self) -> None:
        @declare
        class NeedsArgs:
            def __init__(self, value: int) -> None:
                self.value = value

        with pytest.raises(MessageError) as exc_info:
            decode_name('NeedsArgs', NeedsArgs)
        assert exc_info.value.code is ErrorCode.MESSAGE

    def test_newtype_struct_is_impossible(self) -> None:
        @declare(kind=Kind.NEWTYPE)
        @dataclass
        class Newtype:
            value: int

        with pytest.raises(UnsupportedOperationError) as exc_info:
            decode_name('Newtype', Newtype)
        assert exc_info.value.operation == 'new type struct'

    def test_field_struct_is_impossible(self) -> None:
        @dataclass
        class Fields:
            field: int

        with pytest.raises(UnsupportedOperationError) as exc_info:
            decode_name('Fields', Fields)
        assert exc_info.value.operation == 'struct'

    def test_tuple_struct_is_impossible(self) -> None:
        @declare(kind=Kind.TUPLE)
        @dataclass
        class Pair:
            first: int
            second: int

        with pytest.raises(UnsupportedOperationError) as exc_info:
            decode_name('Pair', Pair)
        assert exc_info.value.operation == 'tuple struct'


class Anything:
    pass


@pytest.mark.parametrize(['target', 'operation'], [
    (bool, 'bool'),
    (int, 'int'),
    (float, 'float'),
    (bytes, 'bytes'),
    (bytearray, 'byte buf'),
    (list[str], 'seq'),
    (set, 'seq'),
    (tuple[str, str], 'tuple'),
    (dict[str, int], 'map'),
    (Any, 'any'),
    (Anything, 'any'),
])
def test_unsupported_targets(target: Any, operation: str) -> None:
    with pytest.raises(UnsupportedOperationError) as exc_info:
        decode_name('true', target)
    assert exc_info.value.direction is Direction.DESERIALIZATION
    assert exc_info.value.operation == operation
    assert str(exc_info.value) == f'unsupported operation: deserialization: {operation}'


def test_str_takes_the_whole_input() -> None:
    assert decode_name('Foo Bar!', str) == 'Foo Bar!'
    assert decode_name('', str) == ''


def test_unit() -> None:
    assert decode_name('', NoneType) is None
    assert decode_name('', None) is None
    with pytest.raises(TrailingCharactersError) as exc_info:
        decode_name('None', NoneType)
    assert str(exc_info.value) == 'trailing characters: input ends with trailing characters'


def test_optional_is_impossible() -> None:
    with pytest.raises(InvalidTypeError) as exc_info:
        decode_name('Var1', Optional[Foo])
    assert exc_info.value.unexpected == 'enum'
    assert exc_info.value.expected == 'option'


@pytest.mark.parametrize(['value', 'target'], [
    (Foo.Var1, Foo),
    (Foo.Var2, Foo),
    (CaseFoo.fOO, CaseFoo),
    (Bar(), Bar),
    (RenamedBar(), RenamedBar),
    (Unit(), PayloadFoo),
])
def test_round_trip(value: Any, target: Any) -> None:
    name = encode_name(value)
    decoded = decode_name(name, target)
    assert decoded == value
    assert encode_name(decoded) == name


def test_all_errors_share_a_base() -> None:
    for error_class in [
        InvalidTypeError,
        InvalidVariantNameError,
        MessageError,
        TrailingCharactersError,
        UnsupportedOperationError,
    ]:
        assert issubclass(error_class, NameCodecError)
