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

"""Render documents as MongoDB shell source text.

Every visited value, nested or not, is first offered to the formatter
table in :mod:`bson_shell.formatters`. Values without a formatter are
rendered structurally: mappings as object literals in insertion order,
lists and tuples as array literals, and scalars as JavaScript literals.
"""
from __future__ import annotations

import math
import re
import warnings
from typing import Any, Union

from bson import json_util

from bson_shell.classify import detect_type
from bson_shell.formatters import format_leaf
from bson_shell.options import DEFAULT_SHELL_OPTIONS, ShellOptions

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_RESERVED_WORDS = frozenset(
    [
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "implements",
        "import",
        "in",
        "instanceof",
        "interface",
        "let",
        "new",
        "null",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "yield",
    ]
)

_ESCAPABLE = re.compile(r"[\\'\x00-\x1f\x7f-\x9f\u2028\u2029\ufeff]")

_META_CHARS = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    "'": "\\'",
    "\\": "\\\\",
}


def _escape_char(match: re.Match) -> str:
    char = match.group(0)
    return _META_CHARS.get(char) or "\\u%04x" % ord(char)


def _quote(value: str) -> str:
    return "'" + _ESCAPABLE.sub(_escape_char, value) + "'"


def _key(key: Any) -> str:
    key = str(key)
    if _IDENTIFIER.match(key) and key not in _RESERVED_WORDS:
        return key
    return _quote(key)


def _number(value: Union[int, float]) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            if value == 0 and math.copysign(1.0, value) < 0:
                return "-0"
            return str(int(value))
        mantissa, sep, exponent = repr(float(value)).partition("e")
        if sep:
            return f"{mantissa}e{int(exponent):+d}"
        return mantissa
    return str(int(value))


class _Stringifier:
    def __init__(self, space: str):
        self.space = space
        self.eol = "\n" if space else ""
        self.colon = ": " if space else ":"

    def stringify(self, value: Any, indent: str) -> str:
        formatted = format_leaf(value)
        if formatted is not None:
            return formatted
        tag = detect_type(value)
        if tag == "Object":
            return self._object(value, indent)
        if tag == "Array":
            return self._array(value, indent)
        if tag == "String":
            return _quote(value)
        if tag == "Number":
            return _number(value)
        if tag == "Boolean":
            return "true" if value else "false"
        if tag == "Null":
            return "null"
        return repr(value)

    def _object(self, value: Any, indent: str) -> str:
        if not value:
            return "{}"
        inner = indent + self.space
        values = [
            f"{inner}{_key(k)}{self.colon}{self.stringify(v, inner)}" for k, v in value.items()
        ]
        return "{" + self.eol + ("," + self.eol).join(values) + self.eol + indent + "}"

    def _array(self, value: Any, indent: str) -> str:
        if not value:
            return "[]"
        inner = indent + self.space
        values = [f"{inner}{self.stringify(v, inner)}" for v in value]
        return "[" + self.eol + ("," + self.eol).join(values) + self.eol + indent + "]"


def _space(indent: Union[int, str]) -> str:
    if isinstance(indent, int):
        return " " * indent
    return indent


def to_js_string(obj: Any, indent: Union[int, str, None] = None) -> str:
    """Render `obj` as MongoDB shell source text.

    :Parameters:
      - `obj`: the document or value to render
      - `indent` (optional): number of spaces, or the string, used for each
        nesting level. ``0`` renders everything on one line. Defaults to
        :attr:`~bson_shell.options.ShellOptions.indent` of
        :data:`~bson_shell.options.DEFAULT_SHELL_OPTIONS`.

    .. doctest::

       >>> from bson import ObjectId
       >>> print(to_js_string({"_id": ObjectId("507f1f77bcf86cd799439011"), "n": [1]}))
       {
         _id: ObjectId('507f1f77bcf86cd799439011'),
         n: [
           1
         ]
       }
    """
    if indent is None:
        indent = DEFAULT_SHELL_OPTIONS.indent
    return _Stringifier(_space(indent)).stringify(obj, "")


def to_string(doc: Any, shell_options: ShellOptions = DEFAULT_SHELL_OPTIONS) -> str:
    """Render `doc` with the :attr:`~ShellOptions.string_indent` indentation."""
    return to_js_string(doc, shell_options.string_indent)


def to_json_string(doc: Any, shell_options: ShellOptions = DEFAULT_SHELL_OPTIONS) -> str:
    """Render `doc` as Extended JSON using :func:`bson.json_util.dumps`."""
    return json_util.dumps(doc, json_options=shell_options.json_options)


def stringify(obj: Any) -> str:
    """Render `obj` on a single line.

    .. deprecated:: 1.0
       Collapses every newline and run of spaces, including those inside
       string values. Use :func:`to_js_string` with ``indent=0`` instead.
    """
    warnings.warn(
        "stringify is deprecated, use to_js_string(obj, 0) instead",
        DeprecationWarning,
        stacklevel=2,
    )
    text = to_js_string(obj, 1)
    text = re.sub(r" ?\n ? ?", "", text)
    return re.sub(r" {2,}", " ", text)
