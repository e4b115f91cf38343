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

from namecodec.serialization.declarations import TaggedEnum, declare, describe, rename_variants
from namecodec.serialization.deserializer import Deserializer, EnumAccess, VariantAccess, Visitor
from namecodec.serialization.serializer import SerializeMapping, SerializeSequence, SerializeStructure, Serializer
from namecodec.serialization.shape import Kind, Shape, ShapeDescriptor, VariantDescriptor
from namecodec.serialization.traversal import deserialize, serialize

__all__ = [
    'Deserializer',
    'EnumAccess',
    'Kind',
    'SerializeMapping',
    'SerializeSequence',
    'SerializeStructure',
    'Serializer',
    'Shape',
    'ShapeDescriptor',
    'TaggedEnum',
    'VariantAccess',
    'VariantDescriptor',
    'Visitor',
    'declare',
    'describe',
    'deserialize',
    'rename_variants',
    'serialize',
]
