# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later

"""
Payload constants shared by the extent utilities.
"""

# Block size used by update payloads.
BLOCK_SIZE = 4096

# Reserved start_block value for extents without backing data. This is the
# maximum value of the unsigned 64 bit start_block field in the payload
# metadata, so it can never be a real block number.
SPARSE_HOLE = 2**64 - 1

# Returned when looking up a block position past the end of an extent list.
# Every unsigned 64 bit value is a valid block number or SPARSE_HOLE, so no
# integer can be used.
NOT_FOUND = None
