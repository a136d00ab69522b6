# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later

"""
extent - a run of consecutive blocks.

An extent is described by the first block and the number of blocks:

    Extent(10, 3)   ->  blocks 10, 11, 12

Extents using the SPARSE_HOLE start block describe blocks without backing
data, for example a gap in a sparse file:

    Extent(SPARSE_HOLE, 3)  ->  3 blocks reading as zeros

The functions in this module accept any object with start_block and
num_blocks attributes, so they work with extents created by the metadata
layer as well.
"""

from .constants import SPARSE_HOLE


class Extent:
    """
    A run of num_blocks blocks starting at start_block.

    The num_blocks field is mutable to allow growing the last extent of a list
    when appending blocks. Since this class is mutable, it must not implement
    __hash__.
    """

    __slots__ = ("start_block", "num_blocks")

    def __init__(self, start_block=0, num_blocks=0):
        self.start_block = start_block
        self.num_blocks = num_blocks

    @classmethod
    def copy(cls, other):
        """
        Create a new extent from any object with extent attributes.
        """
        return cls(other.start_block, other.num_blocks)

    @property
    def end(self):
        return self.start_block + self.num_blocks

    @property
    def is_hole(self):
        return self.start_block == SPARSE_HOLE

    def to_dict(self):
        return {
            "start_block": self.start_block,
            "num_blocks": self.num_blocks,
        }

    def __eq__(self, other):
        return (self.__class__ == other.__class__ and
                self.start_block == other.start_block and
                self.num_blocks == other.num_blocks)

    def __lt__(self, other):
        return sort_key(self) < sort_key(other)

    def __le__(self, other):
        return sort_key(self) <= sort_key(other)

    def __gt__(self, other):
        return sort_key(self) > sort_key(other)

    def __ge__(self, other):
        return sort_key(self) >= sort_key(other)

    def __str__(self):
        return format_extent(self)

    def __repr__(self):
        return "Extent(start_block={}, num_blocks={})".format(
            self.start_block, self.num_blocks)


def sort_key(extent):
    """
    Return the canonical sort key: start block, then number of blocks.

    Use with sorted() or list.sort() for extent objects that do not
    implement ordering.
    """
    return (extent.start_block, extent.num_blocks)


def contains_block(extent, block):
    """
    Return True if block is one of the blocks of extent.
    """
    return extent.start_block <= block < extent.start_block + extent.num_blocks


def contains_extent(big, small):
    """
    Return True if all blocks of small are blocks of big.
    """
    return (big.start_block <= small.start_block and
            small.start_block + small.num_blocks <=
            big.start_block + big.num_blocks)


def format_extent(extent):
    if extent.start_block == SPARSE_HOLE:
        start = "hole"
    else:
        start = extent.start_block
    return "({}, {})".format(start, extent.num_blocks)


def format_extents(extents):
    return "[" + ", ".join(format_extent(e) for e in extents) + "]"


def extents_to_string(extents):
    # Format used in the payload generator logs.
    return "".join(
        "[{}, {}] ".format(e.start_block, e.num_blocks) for e in extents)
