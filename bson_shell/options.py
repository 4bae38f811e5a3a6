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

"""Tools for specifying how documents are rendered and parsed."""
from __future__ import annotations

import os
from typing import Any, NamedTuple, Optional, Union

from bson.binary import UuidRepresentation
from bson.json_util import RELAXED_JSON_OPTIONS, JSONOptions

_DEFAULT_LOG_DOCUMENT_LENGTH = 1000


def _max_log_document_length() -> int:
    length = int(
        os.getenv("BSON_SHELL_LOG_MAX_DOCUMENT_LENGTH", _DEFAULT_LOG_DOCUMENT_LENGTH)
    )
    if length < 0:
        return _DEFAULT_LOG_DOCUMENT_LENGTH
    return length


class _BaseShellOptions(NamedTuple):
    indent: Union[int, str]
    string_indent: Union[int, str]
    json_options: JSONOptions
    max_log_document_length: int


class ShellOptions(_BaseShellOptions):
    """Encapsulates the options used when rendering and parsing shell literals.

    :Parameters:
      - `indent`: The indentation used by :func:`~bson_shell.to_js_string`
        when no explicit indent is passed. An ``int`` is a number of spaces,
        a ``str`` is used verbatim. Defaults to ``2``.
      - `string_indent`: The indentation used by
        :func:`~bson_shell.to_string`. Defaults to four spaces.
      - `json_options`: The :class:`~bson.json_util.JSONOptions` used by
        :func:`~bson_shell.to_json_string`. Defaults to relaxed Extended JSON
        with :data:`~bson.binary.UuidRepresentation.STANDARD` UUIDs.
      - `max_log_document_length`: Input longer than this many characters is
        truncated in parse failure log records. Defaults to the value of the
        ``BSON_SHELL_LOG_MAX_DOCUMENT_LENGTH`` environment variable, or
        ``1000``.
    """

    def __new__(
        cls,
        indent: Union[int, str] = 2,
        string_indent: Union[int, str] = "    ",
        json_options: JSONOptions = RELAXED_JSON_OPTIONS.with_options(
            uuid_representation=UuidRepresentation.STANDARD
        ),
        max_log_document_length: Optional[int] = None,
    ) -> ShellOptions:
        for name, value in (("indent", indent), ("string_indent", string_indent)):
            if isinstance(value, bool) or not isinstance(value, (int, str)):
                raise TypeError(f"{name} must be an int or a str")
            if isinstance(value, int) and value < 0:
                raise ValueError(f"{name} must be a non-negative integer")
        if not isinstance(json_options, JSONOptions):
            raise TypeError("json_options must be an instance of bson.json_util.JSONOptions")
        if max_log_document_length is None:
            max_log_document_length = _max_log_document_length()
        elif not isinstance(max_log_document_length, int):
            raise TypeError("max_log_document_length must be an integer")
        elif max_log_document_length < 0:
            max_log_document_length = _DEFAULT_LOG_DOCUMENT_LENGTH
        return tuple.__new__(
            cls, (indent, string_indent, json_options, max_log_document_length)
        )

    def _arguments_repr(self) -> str:
        return (
            "indent={!r}, string_indent={!r}, json_options={!r}, "
            "max_log_document_length={!r}".format(
                self.indent,
                self.string_indent,
                self.json_options,
                self.max_log_document_length,
            )
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._arguments_repr()})"

    def _options_dict(self) -> dict[str, Any]:
        return {
            "indent": self.indent,
            "string_indent": self.string_indent,
            "json_options": self.json_options,
            "max_log_document_length": self.max_log_document_length,
        }

    def with_options(self, **kwargs: Any) -> ShellOptions:
        """Make a copy of this ShellOptions, overriding some options::

            >>> from bson_shell.options import DEFAULT_SHELL_OPTIONS
            >>> DEFAULT_SHELL_OPTIONS.indent
            2
            >>> opts = DEFAULT_SHELL_OPTIONS.with_options(indent="\\t")
            >>> opts.indent
            '\\t'
        """
        opts = self._options_dict()
        opts.update(kwargs)
        return ShellOptions(**opts)


DEFAULT_SHELL_OPTIONS: ShellOptions = ShellOptions()
"""The default :class:`ShellOptions`."""
