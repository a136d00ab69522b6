# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later

import logging

import pytest


@pytest.fixture
def conf_dir(tmpdir):
    """
    Return a path to an empty configuration directory.

    The test can add configuration files to the "conf.d" sub directory.
    """
    tmpdir.mkdir("conf.d")
    return str(tmpdir)


@pytest.fixture
def root_logger():
    """
    Restore root logger configuration modified by the test.
    """
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    try:
        yield root
    finally:
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        root.setLevel(level)
