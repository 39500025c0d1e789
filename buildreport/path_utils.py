#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************************************************************************************
"""Path normalization and human readable formatting helpers."""

import posixpath
from typing import Optional, Union

from buildreport.constants import THIRD_PARTY_MARKER

_SIZE_UNITS = ["B", "KB", "MB", "GB"]


def normalize_path(path: str) -> str:
    """Normalize a unit path and use forward slashes on every platform.

    Args:
        path: File path or module identifier

    Returns:
        Normalized path with '/' separators
    """
    if not path:
        return path
    normalized = posixpath.normpath(path.replace("\\", "/"))
    # normpath keeps a leading '//' (POSIX allows it), collapse it
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def format_file_size(size_bytes: float) -> str:
    """Format a byte count as B, KB, MB or GB.

    Examples:
        >>> format_file_size(0)
        '0 B'
        >>> format_file_size(1536)
        '1.5 KB'
    """
    if size_bytes <= 0:
        return "0 B"
    index = 0
    value = float(size_bytes)
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[index]}"


def format_duration(ms: float) -> str:
    """Format milliseconds as ms, seconds or minutes.

    Examples:
        >>> format_duration(250)
        '250ms'
        >>> format_duration(1500)
        '1.5s'
        >>> format_duration(90000)
        '1.5m'
    """
    if ms < 1000:
        return f"{ms:.0f}ms"
    if ms < 60000:
        return f"{ms / 1000:.1f}s"
    return f"{ms / 60000:.1f}m"


def is_third_party(unit_id: str) -> bool:
    """Check whether a unit id lives inside a third-party dependency directory."""
    return THIRD_PARTY_MARKER in unit_id


def third_party_package(unit_id: str) -> str:
    """Extract the dependency package segment from a third-party unit id.

    The segment is the part between the first 'node_modules' directory and the
    next one, so a file of a nested dependency is attributed to the top-level
    package that pulled it in.

    Examples:
        >>> third_party_package("/app/node_modules/lodash/lodash.js")
        'lodash/lodash.js'
        >>> third_party_package("/app/node_modules/a/node_modules/b/index.js")
        'a'
    """
    normalized = normalize_path(unit_id)
    marker = "/" + THIRD_PARTY_MARKER + "/"
    rooted = normalized if normalized.startswith("/") else "/" + normalized
    if marker not in rooted:
        return normalized
    return rooted.split(marker)[1]


def content_length(content: Optional[Union[str, bytes]]) -> int:
    """Byte length of unit or artifact content (UTF-8 for text, 0 when unavailable)."""
    if content is None:
        return 0
    if isinstance(content, str):
        return len(content.encode("utf-8"))
    return len(content)
