# Copyright 2024-present MongoDB, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import enum
import logging
from typing import Any

from bson import json_util
from bson.binary import UuidRepresentation
from bson.json_util import JSONOptions


class _ParseStatusMessage(str, enum.Enum):
    FAILED = "Shell literal parse failed"


_JSON_OPTIONS = JSONOptions(uuid_representation=UuidRepresentation.STANDARD)
_PARSE_LOGGER = logging.getLogger("bson_shell.parse")


def _error_log(logger: logging.Logger, **fields: Any) -> None:
    if logger.isEnabledFor(logging.ERROR):
        logger.error(LogMessage(**fields))


class LogMessage:
    __slots__ = ["_kwargs", "_max_document_length"]

    def __init__(self, max_document_length: int = 1000, **kwargs: Any):
        self._kwargs = kwargs
        self._max_document_length = max_document_length

        if "failure" in self._kwargs and isinstance(self._kwargs["failure"], BaseException):
            exc = self._kwargs["failure"]
            self._kwargs["failure"] = f"{type(exc).__name__}: {exc}"

    def __str__(self) -> str:
        self._truncate()
        return "%s" % (
            json_util.dumps(
                self._kwargs, json_options=_JSON_OPTIONS, default=lambda o: o.__repr__()
            )
        )

    def _truncate(self) -> None:
        text = self._kwargs.get("input")
        if isinstance(text, str) and len(text) > self._max_document_length:
            self._kwargs["input"] = text[: self._max_document_length] + "..."
