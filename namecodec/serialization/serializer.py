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

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

T = TypeVar('T')


class SerializeSequence(ABC, Generic[T]):
    """Returned by a serializer for shapes whose elements are visited in order: seq, tuple, tuple struct/variant."""

    @abstractmethod
    def serialize_element(self, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def end(self) -> T:
        raise NotImplementedError


class SerializeStructure(ABC, Generic[T]):
    """Returned by a serializer for shapes whose fields are named: struct and struct variant."""

    @abstractmethod
    def serialize_field(self, key: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def end(self) -> T:
        raise NotImplementedError


class SerializeMapping(ABC, Generic[T]):
    @abstractmethod
    def serialize_entry(self, key: Any, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def end(self) -> T:
        raise NotImplementedError


class Serializer(ABC, Generic[T]):
    """ A serializer has one method per shape, `namecodec.serialization.traversal.serialize` calls exactly one of them.

    Compound shapes return a helper that receives the elements, fields or entries and produces the result on `end()`.
    Implementations are expected to raise instead of returning when they do not support a shape.
    """

    @abstractmethod
    def serialize_bool(self, value: bool) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_int(self, value: int) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_float(self, value: float) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_str(self, value: str) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_bytes(self, value: bytes) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_none(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_some(self, value: Any) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_unit(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_unit_struct(self, name: str) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_unit_variant(self, name: str, variant_index: int, variant: str) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_newtype_struct(self, name: str, value: Any) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_newtype_variant(self, name: str, variant_index: int, variant: str, value: Any) -> T:
        raise NotImplementedError

    @abstractmethod
    def serialize_seq(self, length: Optional[int]) -> SerializeSequence[T]:
        raise NotImplementedError

    @abstractmethod
    def serialize_tuple(self, length: int) -> SerializeSequence[T]:
        raise NotImplementedError

    @abstractmethod
    def serialize_tuple_struct(self, name: str, length: int) -> SerializeSequence[T]:
        raise NotImplementedError

    @abstractmethod
    def serialize_tuple_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
    ) -> SerializeSequence[T]:
        raise NotImplementedError

    @abstractmethod
    def serialize_map(self, length: Optional[int]) -> SerializeMapping[T]:
        raise NotImplementedError

    @abstractmethod
    def serialize_struct(self, name: str, length: int) -> SerializeStructure[T]:
        raise NotImplementedError

    @abstractmethod
    def serialize_struct_variant(
        self,
        name: str,
        variant_index: int,
        variant: str,
        length: int,
    ) -> SerializeStructure[T]:
        raise NotImplementedError

    @abstractmethod
    def serialize_any(self, value: Any) -> T:
        """Called for values the traversal framework cannot classify into any other shape."""
        raise NotImplementedError
