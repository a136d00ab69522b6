# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later

"""
extentutil - arithmetic on lists of extents.

Files and partitions in an update payload are described by lists of extents
instead of lists of blocks. An extent list is an ordered collection of
objects with start_block and num_blocks attributes; the order of the extents
is the order of the blocks in the file, not the order on storage.

Expanding an extent list
========================

The blocks of an extent list are the blocks of every extent, in order:

    [(10, 2), (SPARSE_HOLE, 2), (4, 1)]  ->  [10, 11, H, H, 4]

Where H is SPARSE_HOLE. A hole contributes num_blocks copies of SPARSE_HOLE,
so the number of blocks is always the sum of num_blocks.

Normalizing
===========

A sorted extent list may contain consecutive or overlapping extents:

    [(1, 2), (3, 5), (10, 2)]  ->  [(1, 7), (10, 2)]

Holes are never merged with real extents. Consecutive holes are merged by
default, since the only meaningful property of a hole is its length.

Sublist
=======

A window of blocks in the flattened block sequence, expressed again as
extents. Extents at both ends of the window are trimmed:

    blocks:   [1  2 |3  4  5  6| 7 10 11]
    extents:  [(1, 7), (10, 2)]
    window:   offset=2, count=4  ->  [(3, 4)]

Most preconditions (sorted input, appending blocks in order) are the caller's
responsibility and are not validated.
"""

import logging

from . import errors
from .constants import NOT_FOUND, SPARSE_HOLE
from .extent import Extent, extents_to_string

log = logging.getLogger("extentutil")


def append_block(extents, block):
    """
    Append block to extents.

    block must be either the next block of the last extent, or the first
    block of a new extent. Inserting a block in an arbitrary place is not
    supported.
    """
    if extents:
        last = extents[-1]
        # A hole block extends only a hole, even if a data extent ends at the
        # hole value.
        if block == SPARSE_HOLE or last.start_block == SPARSE_HOLE:
            extend_last = block == last.start_block
        else:
            extend_last = block == last.start_block + last.num_blocks
        if extend_last:
            last.num_blocks += 1
            return

    extents.append(Extent(block, 1))


def expand(extents):
    """
    Return list of blocks referenced by extents, in order.
    """
    blocks = []
    for ext in extents:
        if ext.start_block == SPARSE_HOLE:
            blocks.extend([SPARSE_HOLE] * ext.num_blocks)
        else:
            blocks.extend(
                range(ext.start_block, ext.start_block + ext.num_blocks))
    return blocks


def total_blocks(extents):
    return sum(ext.num_blocks for ext in extents)


def normalize(extents, merge_holes=True):
    """
    Merge consecutive and overlapping extents in place.

    extents must be sorted by start block, and by number of blocks for
    extents starting at the same block. Unsorted extents are not merged
    correctly.

    Empty extents are dropped. Holes are never merged with other extents.
    Consecutive holes are merged if merge_holes is True.

    The extent objects in extents are not modified; merged extents are
    replaced by new extents.
    """
    merged = []

    for ext in extents:
        if ext.num_blocks == 0:
            continue

        if not merged:
            merged.append(Extent.copy(ext))
            continue

        cur = merged[-1]

        # A hole has no blocks to compare, check before block arithmetic.
        if cur.is_hole or ext.start_block == SPARSE_HOLE:
            if cur.is_hole and ext.start_block == SPARSE_HOLE and merge_holes:
                cur.num_blocks += ext.num_blocks
            else:
                merged.append(Extent.copy(ext))
            continue

        if ext.start_block <= cur.end:
            end = max(cur.end, ext.start_block + ext.num_blocks)
            cur.num_blocks = end - cur.start_block
        else:
            merged.append(Extent.copy(ext))

    log.debug("Normalized %d extents to %d extents", len(extents), len(merged))

    extents[:] = merged


def extend(extents, extents_to_add, merge_holes=True):
    """
    Add extents_to_add to extents and normalize the result in place.

    The extents are not sorted; the concatenated list must already be sorted.
    """
    extents.extend(Extent.copy(ext) for ext in extents_to_add)
    normalize(extents, merge_holes=merge_holes)


def sublist(extents, block_offset, block_count):
    """
    Return list of extents covering block_count blocks, skipping the first
    block_offset blocks of extents.

    block_offset and block_count are in blocks, not extents. If extents is
    shorter than block_offset + block_count, return only the available
    blocks.
    """
    result = []
    if block_count == 0:
        return result

    end_offset = block_offset + block_count
    scanned = 0

    for ext in extents:
        # Invariant: scanned < end_offset.
        if ext.num_blocks and scanned + ext.num_blocks > block_offset:
            start = ext.start_block
            count = ext.num_blocks

            # Cut the end of the extent.
            if scanned + count > end_offset:
                count = end_offset - scanned

            # Cut the start of the extent. A trimmed hole is still a hole.
            if block_offset > scanned:
                skip = block_offset - scanned
                count -= skip
                if start != SPARSE_HOLE:
                    start += skip

            result.append(Extent(start, count))

        scanned += ext.num_blocks
        if scanned >= end_offset:
            break

    if log.isEnabledFor(logging.DEBUG):
        log.debug("Sublist offset=%d count=%d: %s",
                  block_offset, block_count, extents_to_string(result))

    return result


def get_nth_block(extents, n):
    """
    Return the block at position n of the blocks referenced by extents.

    If n is out of range, return NOT_FOUND (None). A position inside a hole
    returns SPARSE_HOLE.
    """
    if n < 0:
        return NOT_FOUND

    scanned = 0
    for ext in extents:
        if n - scanned < ext.num_blocks:
            if ext.start_block == SPARSE_HOLE:
                return SPARSE_HOLE
            return ext.start_block + (n - scanned)
        scanned += ext.num_blocks
    return NOT_FOUND


def dedup(container):
    """
    Sort container in place and remove duplicate items.

    Works with any sortable items, typically blocks or extents.
    """
    items = sorted(container)
    unique = items[:1]
    for item in items[1:]:
        if item != unique[-1]:
            unique.append(item)
    container[:] = unique


class BlockIterator:
    """
    Iterate over the blocks of an extent list without expanding it.

    Example usage:

        it = BlockIterator(extents)
        while not it.at_end:
            block = it.current_block
            ...
            it.advance()

    Or as a Python iterator:

        for block in BlockIterator(extents):
            ...

    Holes are not special: the current block of a hole extent is SPARSE_HOLE
    plus the offset in the hole. Callers must check for holes themselves.

    The iterator is forward only. To iterate again, create a new iterator.
    """

    def __init__(self, extents):
        self._extents = extents
        self._index = 0
        self._offset = 0
        self._skip_empty()

    @property
    def at_end(self):
        return self._index >= len(self._extents)

    @property
    def current_block(self):
        if self.at_end:
            raise errors.IteratorExhausted(self._index, len(self._extents))
        return self._extents[self._index].start_block + self._offset

    def advance(self):
        if self.at_end:
            raise errors.IteratorExhausted(self._index, len(self._extents))
        self._offset += 1
        if self._offset >= self._extents[self._index].num_blocks:
            self._index += 1
            self._offset = 0
            self._skip_empty()

    def __iter__(self):
        return self

    def __next__(self):
        if self.at_end:
            raise StopIteration
        block = self.current_block
        self.advance()
        return block

    def _skip_empty(self):
        while (self._index < len(self._extents) and
               self._extents[self._index].num_blocks == 0):
            self._index += 1
