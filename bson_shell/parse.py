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

"""Parse free-form MongoDB shell text into BSON values."""
from __future__ import annotations

import re
from typing import Any, Optional

from bson.objectid import ObjectId

from bson_shell import grammar
from bson_shell.logger import _PARSE_LOGGER, _error_log, _ParseStatusMessage
from bson_shell.options import DEFAULT_SHELL_OPTIONS, ShellOptions

_OBJECT_ID_HEX = re.compile(r"[\da-f]{24}", re.IGNORECASE)


def to_bson(text: str) -> Any:
    """Parse `text` as a MongoDB shell literal.

    Raises :class:`~bson_shell.errors.ShellSyntaxError` on malformed input.
    """
    return grammar.parse(text)


def to_safe_bson(text: str, shell_options: ShellOptions = DEFAULT_SHELL_OPTIONS) -> Optional[Any]:
    """Parse `text` as a MongoDB shell literal, returning ``None`` on failure.

    Free-form input fails often, so instead of raising, the failure is
    logged at ERROR level on the ``bson_shell.parse`` logger.
    """
    try:
        return to_bson(text)
    except Exception as exc:
        _error_log(
            _PARSE_LOGGER,
            max_document_length=shell_options.max_log_document_length,
            message=_ParseStatusMessage.FAILED,
            failure=exc,
            input=text,
        )
        return None


def parse_object_id(text: str) -> Any:
    """Parse `text`, reading a bare 24 character hex string as an ObjectId.

    Any other input is handed to :func:`to_bson` unchanged.
    """
    if isinstance(text, str) and _OBJECT_ID_HEX.fullmatch(text):
        return ObjectId(text)
    return to_bson(text)
