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

from namecodec.logging import LoggingOutput
from namecodec.utils.pydantic import BaseModel


class NameCodecSettings(BaseModel):
    # When enabled, every encode or decode request rejected by the codec is logged at debug level, together with the
    # error that was raised.
    LOG_REJECTIONS: bool = False

    # Where `setup_logging` sends the log output: "pretty" (console), "json" or "null" (discard)
    LOGGING_OUTPUT: LoggingOutput = LoggingOutput.PRETTY

    # Lower the root log level from INFO to DEBUG
    LOGGING_DEBUG: bool = False

    @classmethod
    def from_yaml(cls, *, filepath: str) -> 'NameCodecSettings':
        """Takes a filepath to a yaml file and returns a validated NameCodecSettings instance."""
        from namecodec.utils.yaml import model_from_extended_yaml
        return model_from_extended_yaml(cls, filepath=filepath)
