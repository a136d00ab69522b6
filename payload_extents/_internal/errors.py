# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later


class Error(Exception):
    msg = "Overide this in a subclass"

    def __str__(self):
        return self.msg.format(self=self)


class IteratorExhausted(Error):
    msg = ("Block iterator at end: extent {self.index} of {self.count} "
           "extents")

    def __init__(self, index, count):
        self.index = index
        self.count = count


class InvalidExtent(Error):
    msg = "Invalid extent {self.value!r}: {self.reason}"

    def __init__(self, value, reason):
        self.value = value
        self.reason = reason


class InvalidConfig(Error):
    msg = "Invalid configuration: {self.key} = {self.value!r}: {self.reason}"

    def __init__(self, key, value, reason):
        self.key = key
        self.value = value
        self.reason = reason
