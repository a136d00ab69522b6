# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later

"""
Extent arithmetic for block based update payloads.

This module exposes the public names. Anything else in this package is private
and should not be used.
"""

# flake8: noqa

from . _internal import version

# The public APIs
from . _internal.constants import (
    BLOCK_SIZE,
    NOT_FOUND,
    SPARSE_HOLE,
)

from . _internal.errors import (
    Error,
    IteratorExhausted,
)

from . _internal.extent import (
    Extent,
    contains_block,
    contains_extent,
    extents_to_string,
    format_extent,
    format_extents,
    sort_key,
)

from . _internal.extentutil import (
    BlockIterator,
    append_block,
    dedup,
    expand,
    extend,
    get_nth_block,
    normalize,
    sublist,
    total_blocks,
)

from . _internal.repeated import (
    RepeatedExtents,
    extents_to_list,
    store_extents,
)

__all__ = (
    "BLOCK_SIZE",
    "BlockIterator",
    "Error",
    "Extent",
    "IteratorExhausted",
    "NOT_FOUND",
    "RepeatedExtents",
    "SPARSE_HOLE",
    "append_block",
    "contains_block",
    "contains_extent",
    "dedup",
    "expand",
    "extend",
    "extents_to_list",
    "extents_to_string",
    "format_extent",
    "format_extents",
    "get_nth_block",
    "normalize",
    "sort_key",
    "store_extents",
    "sublist",
    "total_blocks",
)

__version__ = version.string
