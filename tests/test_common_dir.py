from pathlib import Path

import pytest

from sic.common_dir import CommonDir, find_common_dir, unroot


def test_unroot_file_only():
    assert unroot(Path("/my/common"), Path("/my/common/a.png")) == Path("a.png")


def test_unroot_with_similar_dir():
    assert unroot(Path("/my"), Path("/my/common/a.png")) == Path("common/a.png")


def test_uncommon_dir():
    common = find_common_dir(
        [
            "/my/common/path/a.png",
            "/my/common/path/b.png",
            "/my/uncommon/path/c.png",
        ]
    )
    assert common.common_root == Path("/my")
    stem = common.path_branches()
    assert stem[0] == Path("common/path/a.png")
    assert stem[1] == Path("common/path/b.png")
    assert stem[2] == Path("uncommon/path/c.png")


def test_common_dir():
    common = find_common_dir(
        [
            "/my/common/path/a.png",
            "/my/common/path/b.png",
            "/my/common/path/c.png",
        ]
    )
    assert common.common_root == Path("/my/common/path/")
    stem = common.path_branches()
    assert stem == [Path("a.png"), Path("b.png"), Path("c.png")]


def test_no_path_before_file():
    common = find_common_dir(["a.png", "b.png", "c.png"])
    assert common.common_root == Path("")
    assert common.path_branches() == [Path("a.png"), Path("b.png"), Path("c.png")]


def test_empty_common_dir():
    with pytest.raises(ValueError):
        find_common_dir([])


def test_root_without_parent_is_error():
    with pytest.raises(ValueError):
        find_common_dir(["/"])


def test_input_paths_are_preserved_in_order():
    inputs = ["/x/y/b.png", "/x/y/a.png", "/x/z.png"]
    common = find_common_dir(inputs)
    assert common.input_paths() == [Path(p) for p in inputs]


def test_combinations_rejoin_to_inputs():
    inputs = ["/data/one/a.png", "/data/two/deep/b.png", "/data/c.png"]
    common = find_common_dir(inputs)
    for original, branch in common.path_combinations():
        assert common.common_root / branch == original


def test_combinations_pair_inputs_and_branches():
    common = find_common_dir(["/q/r/a.png", "/q/s/b.png"])
    assert common.path_combinations() == list(
        zip(common.input_paths(), common.path_branches())
    )


def test_no_shared_ancestor_falls_back_to_file_names():
    common = find_common_dir(["/abs/dir/x.png", "rel/y.png"])
    assert common.common_root == Path("/abs/dir")
    assert common.path_branches() == [Path("x.png"), Path("y.png")]


def test_common_dir_is_value_object():
    first = find_common_dir(["/m/a.png", "/m/b.png"])
    second = find_common_dir(["/m/a.png", "/m/b.png"])
    assert first == second
    assert isinstance(first, CommonDir)