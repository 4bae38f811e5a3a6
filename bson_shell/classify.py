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

"""Classify values as BSON extended types or plain Python values."""
from __future__ import annotations

import datetime
import re
import uuid
from collections import abc
from typing import Any, NamedTuple, Optional

# Coarse tags for plain values, looked up along the value's MRO so that
# subclasses (SON, OrderedDict, bool) resolve to their nearest entry.
_TYPE_FOR_CLASS = {
    abc.Mapping: "Object",
    list: "Array",
    tuple: "Array",
    set: "Array",
    frozenset: "Array",
    str: "String",
    datetime.datetime: "Date",
    bool: "Boolean",
    int: "Number",
    float: "Number",
    type(None): "Null",
    re.Pattern: "RegExp",
    uuid.UUID: "UUID",
    bytes: "Binary",
}

# The ``_type_marker`` carried by :mod:`bson` value classes and by
# :mod:`bson_shell.types`.
_TYPE_FOR_MARKER = {
    1: "Double",
    5: "Binary",
    7: "ObjectId",
    9: "ISODate",
    11: "BSONRegExp",
    13: "Code",
    16: "Int32",
    17: "Timestamp",
    18: "Long",
    19: "Decimal128",
    100: "DBRef",
    101: "RawBSONDocument",
    127: "MaxKey",
    255: "MinKey",
}


class TypeDescriptor(NamedTuple):
    """The type tag of a value and whether it is a BSON extended type."""

    type: Optional[str]
    is_bson: bool


def detect_type(value: Any) -> Optional[str]:
    """Return the coarse type tag of `value`, or ``None`` if it has none."""
    for cls in type(value).__mro__:
        tag = _TYPE_FOR_CLASS.get(cls)
        if tag is not None:
            return tag
    # Mappings registered with the ABC rather than inheriting from it.
    if isinstance(value, abc.Mapping):
        return "Object"
    return None


def get_type_descriptor(value: Any) -> TypeDescriptor:
    """Classify `value`.

    Values carrying an integer ``_type_marker`` are BSON extended types; the
    tag is taken from the marker, or from the class name for markers this
    module does not know. Everything else gets its coarse tag.
    """
    marker = getattr(type(value), "_type_marker", None)
    if isinstance(marker, int) and not isinstance(marker, bool):
        return TypeDescriptor(_TYPE_FOR_MARKER.get(marker, type(value).__name__), True)
    return TypeDescriptor(detect_type(value), False)
