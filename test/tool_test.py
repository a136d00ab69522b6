# SPDX-FileCopyrightText: Red Hat, Inc.
# SPDX-License-Identifier: GPL-2.0-or-later

import argparse
import json
import os

import pytest

from payload_extents._internal import tool
from payload_extents._internal.constants import SPARSE_HOLE
from payload_extents._internal.extent import Extent


@pytest.fixture
def run(conf_dir, root_logger, capsys):
    """
    Run payload-extents command, returning the output.
    """
    def run(command, *args):
        tool.main([command, "-c", conf_dir] + list(args))
        return capsys.readouterr().out
    return run


def add_conf(conf_dir, data, name="50-test.conf"):
    with open(os.path.join(conf_dir, "conf.d", name), "w") as f:
        f.write(data)


@pytest.mark.parametrize("arg,extent", [
    ("1:2", Extent(1, 2)),
    ("0:0", Extent(0, 0)),
    ("hole:3", Extent(SPARSE_HOLE, 3)),
])
def test_parse_extent(arg, extent):
    assert tool.parse_extent(arg) == extent


@pytest.mark.parametrize("arg", ["1", "1-2", "x:2", "1:y", "-1:2", "1:-2"])
def test_parse_extent_invalid(arg):
    with pytest.raises(argparse.ArgumentTypeError):
        tool.parse_extent(arg)


def test_expand(run):
    out = run("expand", "1:2", "hole:2", "10:1")
    assert json.loads(out) == [1, 2, SPARSE_HOLE, SPARSE_HOLE, 10]


def test_expand_text(run, conf_dir):
    add_conf(conf_dir, "[tool]\noutput = text\n")
    out = run("expand", "1:2", "hole:2", "10:1")
    assert out == "1 2 hole hole 10\n"


def test_normalize(run):
    out = run("normalize", "1:2", "3:5", "10:2")
    assert json.loads(out) == [
        {"start_block": 1, "num_blocks": 7},
        {"start_block": 10, "num_blocks": 2},
    ]


def test_normalize_text(run, conf_dir):
    add_conf(conf_dir, "[tool]\noutput = text\n")
    out = run("normalize", "1:2", "3:5", "10:2")
    assert out == "[(1, 7), (10, 2)]\n"


def test_normalize_holes(run, conf_dir):
    add_conf(conf_dir, "[tool]\noutput = text\n")
    out = run("normalize", "1:2", "hole:2", "hole:3")
    assert out == "[(1, 2), (hole, 5)]\n"


def test_normalize_keep_holes(run, conf_dir):
    add_conf(conf_dir, "[extents]\nmerge_holes = false\n"
                       "[tool]\noutput = text\n")
    out = run("normalize", "1:2", "hole:2", "hole:3")
    assert out == "[(1, 2), (hole, 2), (hole, 3)]\n"


def test_dedup(run):
    out = run("dedup", "10:2", "1:5", "10:2")
    assert json.loads(out) == [
        {"start_block": 1, "num_blocks": 5},
        {"start_block": 10, "num_blocks": 2},
    ]


def test_sublist(run):
    out = run("sublist", "--offset", "2", "--count", "4", "1:2", "3:5", "10:2")
    assert json.loads(out) == [{"start_block": 3, "num_blocks": 4}]


def test_sublist_past_end(run):
    out = run("sublist", "--offset", "20", "--count", "4", "1:2")
    assert json.loads(out) == []


def test_sublist_negative(run, capsys):
    with pytest.raises(SystemExit) as e:
        run("sublist", "--offset", "-1", "--count", "4", "1:2")
    assert e.value.code == 1
    assert "negative window" in capsys.readouterr().err


@pytest.mark.parametrize("index,block", [
    (0, 5),
    (2, 7),
    (3, None),
    (5, None),
])
def test_nth_block(run, index, block):
    out = run("nth-block", "--index", str(index), "5:3")
    assert json.loads(out) == [block]


def test_nth_block_text(run, conf_dir):
    add_conf(conf_dir, "[tool]\noutput = text\n")
    assert run("nth-block", "--index", "1", "5:3") == "6\n"
    assert run("nth-block", "--index", "5", "5:3") == "not-found\n"


def test_nth_block_large_block(run):
    start = 2**63 - 2
    out = run("nth-block", "--index", "1", f"{start}:3")
    assert json.loads(out) == [2**63 - 1]


def test_contains(run):
    out = run("contains", "--block", "11", "1:2", "10:2", "5:10", "hole:4")
    assert json.loads(out) == [
        {"start_block": 10, "num_blocks": 2},
        {"start_block": 5, "num_blocks": 10},
    ]


def test_show_config(run, conf_dir):
    add_conf(conf_dir, "[extents]\nmerge_holes = false\n")
    out = run("show-config")
    cfg = json.loads(out)
    assert cfg["extents"] == {"merge_holes": False}
    assert cfg["tool"] == {"output": "json"}


def test_invalid_output(run, conf_dir, capsys):
    add_conf(conf_dir, "[tool]\noutput = xml\n")
    with pytest.raises(SystemExit) as e:
        run("expand", "1:2")
    assert e.value.code == 1
    err = capsys.readouterr().err
    assert err == ("payload-extents: Invalid configuration: tool.output = "
                   "'xml': expecting one of json, text\n")


def test_invalid_config_value(run, conf_dir, capsys):
    add_conf(conf_dir, "[extents]\nmerge_holes = maybe\n")
    with pytest.raises(SystemExit) as e:
        run("normalize", "1:2")
    assert e.value.code == 1
    assert "extents.merge_holes" in capsys.readouterr().err


def test_invalid_extent(run, capsys):
    with pytest.raises(SystemExit) as e:
        run("expand", "1-2")
    assert e.value.code == 2
    assert "Invalid extent '1-2'" in capsys.readouterr().err


def test_config_files_order(run, conf_dir):
    add_conf(conf_dir, "[tool]\noutput = text\n", name="50-a.conf")
    add_conf(conf_dir, "[tool]\noutput = json\n", name="99-b.conf")
    out = run("normalize", "1:2")
    assert json.loads(out) == [{"start_block": 1, "num_blocks": 2}]


def test_missing_conf_dir(tmpdir, root_logger, capsys):
    tool.main(["expand", "-c", str(tmpdir.join("missing")), "1:2"])
    assert json.loads(capsys.readouterr().out) == [1, 2]


def test_no_command(capsys):
    with pytest.raises(SystemExit) as e:
        tool.main([])
    assert e.value.code == 2
