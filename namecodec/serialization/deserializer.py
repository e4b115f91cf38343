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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Sequence, TypeVar

from namecodec.exception import InvalidTypeError

T = TypeVar('T')


class Visitor(ABC, Generic[T]):
    """ Builds a value out of what a deserializer found in its input.

    A deserializer calls one `visit_*` method, visitors only override the ones that make sense for the value they
    build. The default implementations raise an `InvalidTypeError` naming what was found and what was expected.
    """

    @abstractmethod
    def expecting(self) -> str:
        """Describe what this visitor builds, used in error messages."""
        raise NotImplementedError

    def invalid_type(self, unexpected: str) -> InvalidTypeError:
        return InvalidTypeError(unexpected=unexpected, expected=self.expecting())

    def visit_bool(self, value: bool) -> T:
        raise self.invalid_type(f'boolean `{str(value).lower()}`')

    def visit_int(self, value: int) -> T:
        raise self.invalid_type(f'integer `{value}`')

    def visit_float(self, value: float) -> T:
        raise self.invalid_type(f'floating point `{value}`')

    def visit_str(self, value: str) -> T:
        raise self.invalid_type(f'string "{value}"')

    def visit_bytes(self, value: bytes) -> T:
        raise self.invalid_type('byte array')

    def visit_none(self) -> T:
        raise self.invalid_type('Option value')

    def visit_some(self, deserializer: Deserializer) -> T:
        raise self.invalid_type('Option value')

    def visit_unit(self) -> T:
        raise self.invalid_type('unit value')

    def visit_enum(self, access: EnumAccess) -> T:
        raise self.invalid_type('enum')


class VariantAccess(ABC):
    """Second step of decoding an enumeration: the payload layout of the variant that was read is declared here."""

    @abstractmethod
    def unit_variant(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def newtype_variant(self, target: Any) -> Any:
        """Decode the single payload value of a newtype variant, `target` is its type hint."""
        raise NotImplementedError

    @abstractmethod
    def tuple_variant(self, length: int, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def struct_variant(self, fields: Sequence[str], visitor: Visitor[T]) -> T:
        raise NotImplementedError


class EnumAccess(ABC):
    """First step of decoding an enumeration: the variant identifier is read through the given visitor."""

    @abstractmethod
    def variant(self, visitor: Visitor[T]) -> tuple[T, VariantAccess]:
        raise NotImplementedError


class Deserializer(ABC):
    """ A deserializer has one method per requested shape, the traversal framework calls exactly one of them.

    Each method either hands what it reads to the given visitor or raises.
    """

    def is_human_readable(self) -> bool:
        return True

    @abstractmethod
    def deserialize_any(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_bool(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_int(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_float(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_str(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_bytes(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_byte_buf(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_option(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_unit(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_unit_struct(self, name: str, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_newtype_struct(self, name: str, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_seq(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_tuple(self, length: int, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_tuple_struct(self, name: str, length: int, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_map(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_struct(self, name: str, fields: Sequence[str], visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_enum(self, name: str, variants: Sequence[str], visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_identifier(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def deserialize_ignored_any(self, visitor: Visitor[T]) -> T:
        raise NotImplementedError
