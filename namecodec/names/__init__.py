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
Name-only codec: a value is represented by the name of its type or enum variant alone.

>>> from dataclasses import dataclass
>>> from enum import Enum
>>> from namecodec.serialization import TaggedEnum, declare, rename_variants
>>> @rename_variants(Var2='VAR2')
... class Foo(Enum):
...     Var1 = 1
...     Var2 = 2
>>> encode_name(Foo.Var2)
'VAR2'
>>> decode_name('Var1', Foo)
<Foo.Var1: 1>

Payloads are dropped, so variants that carry data can be encoded but never decoded:

>>> class Shape(TaggedEnum):
...     pass
>>> @declare(name='CIRCLE')
... @dataclass
... class Circle(Shape):
...     radius: float
>>> encode_name(Circle(radius=2.0))
'CIRCLE'
>>> try:
...     decode_name('CIRCLE', Shape)
... except InvalidVariantNameError as e:
...     print(e)
invalid variant: CIRCLE is not a valid variant name (['CIRCLE'])

The whole input must be used:

>>> @dataclass
... class Bar:
...     pass
>>> decode_name('Bar', Bar)
Bar()
>>> try:
...     decode_name('Bar!', Bar)
... except InvalidTypeError as e:
...     print(e)
invalid type: Bar!, expected Bar
"""

from typing import Any, TypeVar, overload

import yaml
from structlog import get_logger

from namecodec.exception import InvalidTypeError, InvalidVariantNameError, NameCodecError, TrailingCharactersError
from namecodec.names.deserializer import NameDeserializer, VariantName
from namecodec.names.serializer import NameSerializer, StructVariantSerializer, TupleVariantSerializer
from namecodec.serialization.traversal import deserialize, serialize

__all__ = [
    'NameDeserializer',
    'NameSerializer',
    'StructVariantSerializer',
    'TupleVariantSerializer',
    'VariantName',
    'decode_name',
    'encode_name',
]

logger = get_logger()

T = TypeVar('T')


def encode_name(value: Any, hint: Any = None) -> str:
    """ Convert an enum variant or a named type into its name.

    Only enum variants (of any kind), unit structs, newtype structs and present optionals of those can be converted,
    any payload is discarded. Every other shape raises `UnsupportedOperationError`. Pass `Optional[X]` as `hint` for
    `None` to be treated as an absent optional instead of a unit.
    """
    log = logger.new(operation='encode')
    try:
        name = serialize(value, NameSerializer(), hint)
    except NameCodecError as e:
        _log_rejection(log, e)
        raise
    log.debug('name encoded', name=name)
    return name


@overload
def decode_name(input: str, target: type[T]) -> T:
    ...


@overload
def decode_name(input: str, target: Any) -> Any:
    ...


def decode_name(input: str, target: Any) -> Any:
    """ Build a value of `target` out of its name.

    Only unit enum variants and unit structs can be built. The name must match exactly, without any normalization,
    and must make up the whole input, otherwise `TrailingCharactersError` is raised.
    """
    log = logger.new(operation='decode')
    deserializer = NameDeserializer(input)
    try:
        value = deserialize(target, deserializer)
        if not deserializer.is_empty():
            raise TrailingCharactersError
    except NameCodecError as e:
        _log_rejection(log, e, input=input)
        raise
    log.debug('name decoded', input=input)
    return value


def _log_rejection(log: Any, error: NameCodecError, **kwargs: Any) -> None:
    from namecodec.conf.get_settings import get_global_settings
    try:
        settings = get_global_settings()
    except (OSError, ValueError, yaml.YAMLError) as settings_error:
        # the codec error is raised either way
        log.warning('settings unavailable, rejection not logged', settings_error=str(settings_error))
        return
    if settings.LOG_REJECTIONS:
        log.debug('request rejected', code=error.code.name, error=str(error), **kwargs)
