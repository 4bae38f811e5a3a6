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

"""Exceptions raised by the bson_shell package."""
from __future__ import annotations

from typing import Optional

from bson.errors import BSONError


class ShellSyntaxError(BSONError):
    """Raised when a string cannot be parsed as a MongoDB shell literal.

    :Parameters:
      - `message`: description of the failure
      - `text`: the text that failed to parse
      - `lineno`: (optional) 1-based line of the failure
      - `col`: (optional) 1-based column of the failure
    """

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        lineno: Optional[int] = None,
        col: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self._text = text
        self._lineno = lineno
        self._col = col

    @property
    def text(self) -> Optional[str]:
        """The text that failed to parse."""
        return self._text

    @property
    def lineno(self) -> Optional[int]:
        """The line at which parsing failed, if known."""
        return self._lineno

    @property
    def col(self) -> Optional[int]:
        """The column at which parsing failed, if known."""
        return self._col
