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

from enum import Enum
from typing import ClassVar, Sequence


class Direction(Enum):
    """Which side of the codec rejected an operation."""
    SERIALIZATION = 'serialization'
    DESERIALIZATION = 'deserialization'

    def __str__(self) -> str:
        return self.value


class ErrorCode(Enum):
    MESSAGE = 'message'
    UNSUPPORTED_OPERATION = 'unsupported operation'
    INVALID_TYPE = 'invalid type'
    INVALID_VARIANT_NAME = 'invalid variant name'
    TRAILING_CHARACTERS = 'trailing characters'


class NameCodecError(Exception):
    """Base class for exceptions raised when encoding or decoding names."""
    code: ClassVar[ErrorCode]


class MessageError(NameCodecError):
    """Free-form error, used when building a decoded value fails for a reason the codec does not model."""
    code = ErrorCode.MESSAGE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class UnsupportedOperationError(NameCodecError):
    """The shape being encoded or decoded has no name-only representation."""
    code = ErrorCode.UNSUPPORTED_OPERATION

    def __init__(self, direction: Direction, operation: str) -> None:
        super().__init__(direction, operation)
        self.direction = direction
        self.operation = operation

    def __str__(self) -> str:
        return f'unsupported operation: {self.direction}: {self.operation}'


class InvalidTypeError(NameCodecError):
    """The input does not match the name of the requested type."""
    code = ErrorCode.INVALID_TYPE

    def __init__(self, unexpected: str, expected: str) -> None:
        super().__init__(unexpected, expected)
        self.unexpected = unexpected
        self.expected = expected

    def __str__(self) -> str:
        return f'invalid type: {self.unexpected}, expected {self.expected}'


class InvalidVariantNameError(NameCodecError):
    """The input is not among the declared variant names of an enumeration."""
    code = ErrorCode.INVALID_VARIANT_NAME

    def __init__(self, received: str, allowed: Sequence[str]) -> None:
        super().__init__(received, list(allowed))
        self.received = received
        self.allowed = list(allowed)

    def __str__(self) -> str:
        return f'invalid variant: {self.received} is not a valid variant name ({self.allowed!r})'


class TrailingCharactersError(NameCodecError):
    """Decoding succeeded without consuming the whole input."""
    code = ErrorCode.TRAILING_CHARACTERS

    def __str__(self) -> str:
        return 'trailing characters: input ends with trailing characters'


class TrailingNameError(InvalidTypeError, TrailingCharactersError):
    """The input starts with the expected name but has more characters after it.

    It is both a type mismatch, because the input as a whole is not the name, and a trailing characters condition.
    """
    code = ErrorCode.TRAILING_CHARACTERS

    def __str__(self) -> str:
        return InvalidTypeError.__str__(self)
