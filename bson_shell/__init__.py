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

"""Render BSON documents as MongoDB shell literals and parse them back.

.. doctest::

   >>> from bson import ObjectId
   >>> from bson.int64 import Int64
   >>> import bson_shell
   >>> print(bson_shell.to_js_string({"_id": ObjectId("507f1f77bcf86cd799439011"), "n": Int64(5)}))
   {
     _id: ObjectId('507f1f77bcf86cd799439011'),
     n: NumberLong(5)
   }
   >>> bson_shell.to_bson("{ n: NumberLong(5) }")
   {'n': Int64(5)}
"""
from __future__ import annotations

from bson_shell._version import __version__, version, version_tuple
from bson_shell.classify import TypeDescriptor, get_type_descriptor
from bson_shell.errors import ShellSyntaxError
from bson_shell.options import DEFAULT_SHELL_OPTIONS, ShellOptions
from bson_shell.parse import parse_object_id, to_bson, to_safe_bson
from bson_shell.stringify import stringify, to_js_string, to_json_string, to_string
from bson_shell.types import Double, Int32

__all__ = [
    "DEFAULT_SHELL_OPTIONS",
    "Double",
    "Int32",
    "ShellOptions",
    "ShellSyntaxError",
    "TypeDescriptor",
    "__version__",
    "get_type_descriptor",
    "parse_object_id",
    "stringify",
    "to_bson",
    "to_js_string",
    "to_json_string",
    "to_safe_bson",
    "to_string",
    "version",
    "version_tuple",
]
