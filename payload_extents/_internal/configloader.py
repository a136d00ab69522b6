# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later

"""
configloader - load ini files into a class based configuration

The configuration structure and the default values are defined by classes:

    class extents:

        merge_holes = True

    class tool:

        output = "json"

Each class is a section and each public class attribute is an option. The type
of the default value is the type of the option. Options can be modified by ini
files:

    [extents]
    merge_holes = false

Loading the files updates the configuration object:

    configloader.load(cfg, ["/etc/payload-extents/conf.d/50-user.conf"])
    assert cfg.extents.merge_holes is False

Unknown sections and options are ignored. A value that cannot be converted
to the type of the default value raises errors.InvalidConfig.

Options that are python keywords (e.g. "class" in logging handler sections)
are defined with a "keyword__" prefix:

    class handler_stderr:

        keyword__class = "logging.StreamHandler"
"""

import configparser
import keyword

from . import errors

KEYWORD_PREFIX = "keyword__"


def load(config, files):
    """
    Update config from ini files. Files that do not exist are skipped; later
    files override earlier files.
    """
    parser = configparser.RawConfigParser()
    parser.optionxform = _option_name
    parser.read(files, encoding="utf-8")

    for section_name in _public_names(config):
        if not parser.has_section(section_name):
            continue

        section = getattr(config, section_name)
        for option in _public_names(section):
            if not parser.has_option(section_name, option):
                continue

            value = parser.get(section_name, option)
            default = getattr(section, option)
            convert = _converters.get(type(default))
            if convert is None:
                raise errors.InvalidConfig(
                    "{}.{}".format(section_name, option),
                    default,
                    "unsupported default value type {}".format(
                        type(default).__name__))

            try:
                value = convert(value)
            except ValueError as e:
                raise errors.InvalidConfig(
                    "{}.{}".format(section_name, option), value, e) from None

            setattr(section, option, value)


def to_dict(config):
    """
    Return configuration as a dict of sections, using the option names from
    the ini files.
    """
    return {name: _section_to_dict(getattr(config, name))
            for name in _public_names(config)}


def _option_name(option):
    option = option.lower()
    if keyword.iskeyword(option):
        option = KEYWORD_PREFIX + option
    return option


def _public_names(obj):
    return [name for name in dir(obj) if not name.startswith("_")]


def _section_to_dict(section):
    d = {}
    for option in _public_names(section):
        value = getattr(section, option)
        if option.startswith(KEYWORD_PREFIX):
            option = option[len(KEYWORD_PREFIX):]
        d[option] = value
    return d


def _parse_bool(s):
    # Same values accepted by configparser.getboolean().
    value = s.strip().lower()
    if value in ("true", "yes", "1", "on"):
        return True
    if value in ("false", "no", "0", "off"):
        return False
    raise ValueError("not a boolean")


def _parse_int(s):
    # Allow block counts like 0x100 or 1_000.
    return int(s.strip(), 0)


_converters = {
    str: str,
    int: _parse_int,
    float: float,
    bool: _parse_bool,
}
