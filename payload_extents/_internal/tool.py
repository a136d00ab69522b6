# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later

"""
Inspect and transform extent lists
"""

import argparse
import configparser
import glob
import json
import logging
import logging.config
import os
import sys

from . import config
from . import errors
from . import extentutil
from .constants import NOT_FOUND, SPARSE_HOLE
from .extent import Extent, contains_block, format_extents

DEFAULT_CONF_DIR = "/etc/payload-extents"

OUTPUT_FORMATS = ("json", "text")

log = logging.getLogger("tool")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="payload-extents",
        description="Inspect and transform extent lists. Extents are "
                    "specified as START:COUNT, or hole:COUNT for a sparse "
                    "hole.")

    commands = parser.add_subparsers(title="commands")

    add_command(
        commands,
        name="expand",
        help="Show the blocks referenced by extents.",
        command=expand)

    add_command(
        commands,
        name="normalize",
        help="Merge consecutive and overlapping extents. Extents must be "
             "sorted.",
        command=normalize)

    add_command(
        commands,
        name="dedup",
        help="Sort extents and remove duplicates.",
        command=dedup)

    sublist_cmd = add_command(
        commands,
        name="sublist",
        help="Show extents covering a range of blocks.",
        command=sublist)

    sublist_cmd.add_argument(
        "--offset",
        type=int,
        default=0,
        help="Number of blocks to skip (default 0).")

    sublist_cmd.add_argument(
        "--count",
        type=int,
        required=True,
        help="Number of blocks to include.")

    nth_cmd = add_command(
        commands,
        name="nth-block",
        help="Show the block at position N.",
        command=nth_block)

    nth_cmd.add_argument(
        "--index",
        type=int,
        required=True,
        help="Block position, starting at 0.")

    contains_cmd = add_command(
        commands,
        name="contains",
        help="Show the extents containing a block.",
        command=contains)

    contains_cmd.add_argument(
        "--block",
        type=int,
        required=True,
        help="Block number.")

    show_cmd = commands.add_parser(
        "show-config",
        help="Print actual configuration in json format.")
    show_cmd.set_defaults(command=show_config)
    add_conf_dir(show_cmd)

    args = parser.parse_args(argv)
    if not hasattr(args, "command"):
        parser.error("command is required")

    try:
        cfg = load_config(args.conf_dir)
        configure_logger(cfg)
        args.command(args, cfg)
    except errors.Error as e:
        # Expected error, log a clean error.
        sys.stderr.write(f"payload-extents: {e}\n")
        sys.exit(1)


def add_command(commands, name, help, command):
    cmd = commands.add_parser(name, help=help)
    cmd.set_defaults(command=command)
    add_conf_dir(cmd)
    cmd.add_argument(
        "extents",
        nargs="*",
        default=[],
        type=parse_extent,
        help="Extents in START:COUNT or hole:COUNT format.")
    return cmd


def add_conf_dir(cmd):
    cmd.add_argument(
        "-c", "--conf-dir",
        default=DEFAULT_CONF_DIR,
        help=f"Configuration directory (default {DEFAULT_CONF_DIR}).")


def parse_extent(s):
    start, sep, count = s.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(
            str(errors.InvalidExtent(s, "expecting START:COUNT")))
    try:
        if start == "hole":
            start = SPARSE_HOLE
        else:
            start = int(start)
        count = int(count)
    except ValueError:
        raise argparse.ArgumentTypeError(
            str(errors.InvalidExtent(s, "expecting integer values"))) from None
    if start < 0 or count < 0:
        raise argparse.ArgumentTypeError(
            str(errors.InvalidExtent(s, "negative values are not allowed")))
    return Extent(start, count)


def load_config(conf_dir):
    # Unlike a daemon, the tool is usable without any configuration.
    pattern = os.path.join(conf_dir, "conf.d", "*.conf")
    files = sorted(glob.glob(pattern), key=os.path.basename)
    cfg = config.load(files)

    if cfg.tool.output not in OUTPUT_FORMATS:
        raise errors.InvalidConfig(
            "tool.output", cfg.tool.output,
            "expecting one of {}".format(", ".join(OUTPUT_FORMATS)))

    return cfg


def configure_logger(cfg):
    parser = configparser.RawConfigParser()
    parser.read_dict(config.to_dict(cfg))
    logging.config.fileConfig(parser, disable_existing_loggers=False)


def expand(args, cfg):
    blocks = extentutil.expand(args.extents)
    log.debug("Expanded %d extents to %d blocks",
              len(args.extents), len(blocks))
    write_blocks(blocks, cfg)


def normalize(args, cfg):
    extents = args.extents
    extentutil.normalize(extents, merge_holes=cfg.extents.merge_holes)
    write_extents(extents, cfg)


def dedup(args, cfg):
    extents = args.extents
    extentutil.dedup(extents)
    write_extents(extents, cfg)


def sublist(args, cfg):
    if args.offset < 0 or args.count < 0:
        raise errors.InvalidExtent(
            f"{args.offset}:{args.count}", "negative window")
    extents = extentutil.sublist(args.extents, args.offset, args.count)
    write_extents(extents, cfg)


def nth_block(args, cfg):
    block = extentutil.get_nth_block(args.extents, args.index)
    write_blocks([block], cfg)


def contains(args, cfg):
    extents = [e for e in args.extents if contains_block(e, args.block)]
    write_extents(extents, cfg)


def show_config(args, cfg):
    print(json.dumps(config.to_dict(cfg), indent=4))


def write_extents(extents, cfg):
    if cfg.tool.output == "text":
        print(format_extents(extents))
    else:
        print(json.dumps([e.to_dict() for e in extents]))


def write_blocks(blocks, cfg):
    if cfg.tool.output == "text":
        print(" ".join(_format_block(b) for b in blocks))
    else:
        print(json.dumps(blocks))


def _format_block(block):
    if block is NOT_FOUND:
        return "not-found"
    if block == SPARSE_HOLE:
        return "hole"
    return str(block)
