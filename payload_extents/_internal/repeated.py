# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later

"""
repeated - container for extents in payload metadata.

The payload metadata stores extents in repeated message fields. This module
provides a container with the same interface, so code converting between
metadata and extent lists does not depend on the metadata library.
"""

from .extent import Extent


class RepeatedExtents:
    """
    An ordered container of Extent objects owned by the container.

    Elements are added with add() or append(). Like repeated message fields,
    appended extents are copied, so modifying the original does not modify
    the container.
    """

    __slots__ = ("_items",)

    def __init__(self, extents=()):
        self._items = [Extent.copy(ext) for ext in extents]

    def add(self, start_block=0, num_blocks=0):
        """
        Add a new extent and return it.
        """
        ext = Extent(start_block, num_blocks)
        self._items.append(ext)
        return ext

    def append(self, extent):
        self._items.append(Extent.copy(extent))

    def extend(self, extents):
        self._items.extend(Extent.copy(ext) for ext in extents)

    def clear(self):
        del self._items[:]

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            self._items[index] = [Extent.copy(ext) for ext in value]
        else:
            self._items[index] = Extent.copy(value)

    def __delitem__(self, index):
        del self._items[index]

    def __eq__(self, other):
        if isinstance(other, RepeatedExtents):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self):
        return "RepeatedExtents({!r})".format(self._items)


def store_extents(extents, out):
    """
    Store copies of all extents in out.
    """
    for ext in extents:
        out.add(start_block=ext.start_block, num_blocks=ext.num_blocks)


def extents_to_list(repeated):
    """
    Return a new list with copies of the extents in repeated.
    """
    return [Extent.copy(ext) for ext in repeated]
