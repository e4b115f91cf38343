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

"""
This module exports the name-only codec and the declarations needed to describe the values it handles.
"""

from namecodec.exception import (
    Direction,
    ErrorCode,
    InvalidTypeError,
    InvalidVariantNameError,
    MessageError,
    NameCodecError,
    TrailingCharactersError,
    TrailingNameError,
    UnsupportedOperationError,
)
from namecodec.names import decode_name, encode_name
from namecodec.serialization import Kind, TaggedEnum, declare, rename_variants
from namecodec.version import __version__

__all__ = [
    'Direction',
    'ErrorCode',
    'InvalidTypeError',
    'InvalidVariantNameError',
    'MessageError',
    'NameCodecError',
    'TrailingCharactersError',
    'TrailingNameError',
    'UnsupportedOperationError',
    'Kind',
    'TaggedEnum',
    'declare',
    'rename_variants',
    'decode_name',
    'encode_name',
    '__version__',
]
