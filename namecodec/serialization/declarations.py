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
Declarations tell the traversal framework how a Python class maps onto the name-bearing shapes.

A dataclass without fields is a unit struct, one with fields is a struct:

>>> from dataclasses import dataclass
>>> @dataclass
... class Bar:
...     pass
>>> describe(Bar)
ShapeDescriptor(name='Bar', kind=<Kind.UNIT: 1>, fields=(), variants=())

The serialized name can be overridden, and so can the kind:

>>> @declare(name='BAZ', kind=Kind.NEWTYPE)
... @dataclass
... class Baz:
...     value: int
>>> describe(Baz)
ShapeDescriptor(name='BAZ', kind=<Kind.NEWTYPE: 2>, fields=('value',), variants=())

Plain enumerations only have unit variants:

>>> from enum import Enum
>>> @rename_variants(Var2='VAR2')
... class Foo(Enum):
...     Var1 = 1
...     Var2 = 2
>>> describe(Foo).variant_names
('Var1', 'VAR2')

Variants carrying data are declared by subclassing a `TaggedEnum`:

>>> class Qux(TaggedEnum):
...     pass
>>> @dataclass
... class Unit(Qux):
...     pass
>>> @declare(name='PAIR', kind=Kind.TUPLE)
... @dataclass
... class Pair(Qux):
...     first: int
...     second: str
>>> [(v.name, v.kind.name) for v in describe(Qux).variants]
[('Unit', 'UNIT'), ('PAIR', 'TUPLE')]
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Callable, ClassVar, Optional, TypeVar, overload

from namecodec.serialization.shape import Kind, ShapeDescriptor, VariantDescriptor

T = TypeVar('T', bound=type)
E = TypeVar('E', bound=type[Enum])

NAME_ATTR = '__serialized_name__'
KIND_ATTR = '__serialized_kind__'
DECLARED_ATTR = '__serialized_declared__'
VARIANT_NAMES_ATTR = '__serialized_variant_names__'


class TaggedEnum:
    """ Base class for enumerations whose variants may carry data.

    Every direct subclass of a tagged enumeration is one of its variants, in declaration order. Variants are usually
    dataclasses, their kind is inferred from their fields unless `declare(kind=...)` says otherwise.
    """

    # XXX: only set on the enumeration itself, each variant class is an item of this list
    __variants__: ClassVar[list[type]]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if TaggedEnum in cls.__bases__:
            cls.__variants__ = []
            return
        roots = [base for base in cls.__bases__ if is_tagged_enum(base)]
        if not roots:
            raise TypeError(f'{cls.__name__}: variants of a tagged enum cannot be subclassed')
        if len(roots) > 1:
            raise TypeError(f'{cls.__name__}: a variant must belong to a single tagged enum')
        variants = roots[0].__variants__
        # dataclass(slots=True) creates a new class right after the decorated one, which it replaces
        if variants and _is_slotted_copy(cls, variants[-1]):
            variants[-1] = cls
        else:
            variants.append(cls)


def _is_slotted_copy(cls: type, registered: type) -> bool:
    # the copy does not keep __qualname__ on every supported Python version, so it is matched by name
    return (
        '__slots__' in vars(cls)
        and '__slots__' not in vars(registered)
        and registered.__name__ == cls.__name__
        and registered.__module__ == cls.__module__
    )


def is_tagged_enum(type_: Any) -> bool:
    """Whether `type_` is an enumeration declared by subclassing `TaggedEnum` directly."""
    return isinstance(type_, type) and TaggedEnum in type_.__bases__


def is_tagged_variant(type_: Any) -> bool:
    return isinstance(type_, type) and any(is_tagged_enum(base) for base in type_.__bases__)


@overload
def declare(cls: T, /) -> T:
    ...


@overload
def declare(*, name: Optional[str] = None, kind: Optional[Kind] = None) -> Callable[[T], T]:
    ...


def declare(cls: Optional[T] = None, /, *, name: Optional[str] = None, kind: Optional[Kind] = None) -> Any:
    """ Declare a class as a named type, optionally overriding its serialized name and its kind.

    It can be applied to dataclasses, plain classes (which then default to unit structs), tagged enumerations and
    their variants, and to `Enum` subclasses (only to rename them).
    """
    def wrap(cls: T) -> T:
        if not isinstance(cls, type):
            raise TypeError('only classes can be declared')
        if kind is not None and (issubclass(cls, Enum) or is_tagged_enum(cls)):
            raise TypeError(f'{cls.__name__}: enumerations cannot be declared with a kind')
        if name is not None:
            setattr(cls, NAME_ATTR, name)
        if kind is not None:
            setattr(cls, KIND_ATTR, kind)
        setattr(cls, DECLARED_ATTR, True)
        return cls

    if cls is not None:
        return wrap(cls)
    return wrap


def rename_variants(**names: str) -> Callable[[E], E]:
    """Override the serialized name of some members of an `Enum` subclass, by member name."""
    def wrap(enum_class: E) -> E:
        if not (isinstance(enum_class, type) and issubclass(enum_class, Enum)):
            raise TypeError('rename_variants only applies to Enum subclasses')
        unknown = set(names) - set(enum_class.__members__)
        if unknown:
            raise ValueError(f'{enum_class.__name__} has no members named {", ".join(sorted(unknown))}')
        aliases = set(names) - set(_canonical_members(enum_class))
        if aliases:
            raise ValueError(
                f'{enum_class.__name__}: {", ".join(sorted(aliases))} are aliases, rename the canonical member'
            )
        setattr(enum_class, VARIANT_NAMES_ATTR, dict(names))
        return enum_class
    return wrap


def declared_name(type_: type) -> str:
    """The serialized name of a class, renames are not inherited."""
    name = vars(type_).get(NAME_ATTR, type_.__name__)
    assert isinstance(name, str)
    return name


def describe(type_: Any) -> Optional[ShapeDescriptor]:
    """ Build the descriptor of a named type or an enumeration, None when `type_` is neither.

    Declaration mistakes (duplicated variant names, a newtype without exactly one field, a unit with fields) raise a
    TypeError.
    """
    if not isinstance(type_, type):
        return None
    if issubclass(type_, Enum):
        return _describe_enum(type_)
    if is_tagged_enum(type_):
        return _describe_tagged_enum(type_)
    if dataclasses.is_dataclass(type_) or vars(type_).get(DECLARED_ATTR, False):
        kind, fields = _layout(type_)
        return ShapeDescriptor(name=declared_name(type_), kind=kind, fields=fields)
    return None


def _layout(type_: type) -> tuple[Kind, tuple[str, ...]]:
    fields: tuple[str, ...] = ()
    if dataclasses.is_dataclass(type_):
        fields = tuple(field.name for field in dataclasses.fields(type_))
    kind = vars(type_).get(KIND_ATTR)
    if kind is None:
        kind = Kind.STRUCT if fields else Kind.UNIT
    if kind is Kind.UNIT and fields:
        raise TypeError(f'{type_.__name__}: a unit cannot have fields')
    if kind is Kind.NEWTYPE and len(fields) != 1:
        raise TypeError(f'{type_.__name__}: a newtype must have exactly one field, found {len(fields)}')
    return kind, fields


def _describe_enum(enum_class: type[Enum]) -> ShapeDescriptor:
    renames = vars(enum_class).get(VARIANT_NAMES_ATTR, {})
    variants = tuple(
        VariantDescriptor(name=renames.get(key, key), index=i, kind=Kind.UNIT, target=member)
        for i, (key, member) in enumerate(_canonical_members(enum_class).items())
    )
    return _enum_descriptor(declared_name(enum_class), variants)


def _describe_tagged_enum(enum_class: type[TaggedEnum]) -> ShapeDescriptor:
    variants = []
    for i, variant_class in enumerate(enum_class.__variants__):
        kind, fields = _layout(variant_class)
        variants.append(VariantDescriptor(
            name=declared_name(variant_class),
            index=i,
            kind=kind,
            target=variant_class,
            fields=fields,
        ))
    return _enum_descriptor(declared_name(enum_class), tuple(variants))


def _enum_descriptor(name: str, variants: tuple[VariantDescriptor, ...]) -> ShapeDescriptor:
    seen: set[str] = set()
    for variant in variants:
        if variant.name in seen:
            raise TypeError(f'{name}: duplicated variant name {variant.name!r}')
        seen.add(variant.name)
    return ShapeDescriptor(name=name, kind=None, variants=variants)


def _canonical_members(enum_class: type[Enum]) -> dict[str, Enum]:
    """Declared members by name, without aliases.

    Iterating a `Flag` skips members with more than one bit set, so `__members__` is used instead.
    """
    return {key: member for key, member in enum_class.__members__.items() if member.name == key}
