# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later

from . import configloader


class extents:

    # Merge consecutive sparse holes when normalizing extents. When disabled,
    # every hole is kept as a separate extent, preserving the hole boundaries
    # of the input.
    merge_holes = True


class tool:

    # Output format of payload-extents commands. Can be either "json" or
    # "text". The text format is the format used in the payload generator
    # logs.
    output = "json"


# Logger configuration.
# See Python logging documentation for details how to configure loggers.

class loggers:
    keys = "root"


class handlers:
    keys = "stderr"


class formatters:
    keys = "long"


class logger_root:
    level = "WARNING"
    handlers = "stderr"
    propagate = 0


class handler_stderr:
    keyword__class = "logging.StreamHandler"
    args = "()"
    level = "DEBUG"
    formatter = "long"


class formatter_long:
    format = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


class Config:

    def __init__(self):
        self.extents = extents()
        self.tool = tool()

        # Logger config.

        self.loggers = loggers()
        self.handlers = handlers()
        self.formatters = formatters()
        self.logger_root = logger_root()
        self.handler_stderr = handler_stderr()
        self.formatter_long = formatter_long()


def load(files):
    cfg = Config()
    configloader.load(cfg, files)
    return cfg


def to_dict(config):
    return configloader.to_dict(config)
