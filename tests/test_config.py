from argparse import Namespace
from pathlib import Path

import pytest

from sic.config import (
    BatchMode,
    Config,
    ConfigError,
    FrameIndex,
    InputOutputModeType,
    PathVariant,
    SingleMode,
    filter_unsupported_paths,
    input_output_mode_from_args,
    is_supported_extension,
    lookup_paths,
    mode_type_from_args,
    validate_jpeg_quality,
)


def _ns(**kwargs):
    defaults = dict(
        input=None,
        output=None,
        glob_input=None,
        glob_output=None,
        no_skip_unsupported_extensions=False,
        enable_output_format_decider_fallback=False,
    )
    defaults.update(kwargs)
    return Namespace(**defaults)


def _failing_paths():
    yield "a.png"
    raise OSError("boom")


def test_jpeg_in_quality_range_lower_bound_inside():
    assert validate_jpeg_quality(int("1")) == 1


def test_jpeg_in_quality_range_lower_bound_outside():
    with pytest.raises(ConfigError):
        validate_jpeg_quality(int("0"))


def test_jpeg_in_quality_range_upper_bound_inside():
    assert validate_jpeg_quality(int("100")) == 100


def test_jpeg_in_quality_range_upper_bound_outside():
    with pytest.raises(ConfigError):
        validate_jpeg_quality(int("101"))


def test_config_override_defaults():
    config = Config(image_operations_program=[("blur", 1.0)])
    assert config.image_operations_program == [("blur", 1.0)]
    assert Config().image_operations_program == []


def test_config_defaults():
    config = Config()
    assert config.encoding_settings.jpeg_quality == 80
    assert config.encoding_settings.pnm_use_ascii_format is False
    assert config.mode is InputOutputModeType.SIMPLE
    assert config.forced_output_format is None


def test_skip_unsupported_paths():
    paths = [
        "/scope/0.png",
        "/scope/1.jpg",
        "/scope/2.jpeg",
        "/scope/2.unsupported",
        "/scope/2",
    ]
    assert filter_unsupported_paths(paths, False) == [Path(p) for p in paths[:3]]


@pytest.mark.parametrize(
    "paths_in, paths_expected, fallback",
    [
        (
            ["/test/0.png", "/test/1.jpg", "/test/2.jpeg", "/test/2.unsupported", "/test/2"],
            ["/test/0.png", "/test/1.jpg", "/test/2.jpeg"],
            False,
        ),
        ([], [], False),
        (["a.farbfeld", "a.ff"], ["a.farbfeld", "a.ff"], True),
        (["a.farbfeld", "a.ff"], ["a.farbfeld"], False),
    ],
)
def test_are_unsupported_paths_getting_filtered(paths_in, paths_expected, fallback):
    assert filter_unsupported_paths(paths_in, fallback) == [Path(p) for p in paths_expected]


@pytest.mark.parametrize(
    "path, expected",
    [("x.png", True), ("x.PNG", True), ("x.tiff", True), ("x.ff", False), ("x", False)],
)
def test_is_supported_extension(path, expected):
    assert is_supported_extension(path) is expected


def test_lookup_paths_without_filter_keeps_all():
    assert lookup_paths(["a.png", "b.docx"], False, False) == [Path("a.png"), Path("b.docx")]


def test_lookup_paths_with_filter():
    assert lookup_paths(["a.png", "b.docx"], True, False) == [Path("a.png")]


def test_lookup_paths_wraps_os_errors():
    with pytest.raises(ConfigError):
        lookup_paths(_failing_paths(), True, False)


def test_path_variant():
    assert PathVariant().is_std_stream() is True
    assert PathVariant(Path("a.png")).is_std_stream() is False


def test_frame_index_nth_rejects_negative():
    assert FrameIndex.nth(3).index == 3
    with pytest.raises(ConfigError):
        FrameIndex.nth(-1)


def test_mode_type_from_args():
    assert mode_type_from_args(_ns()) is InputOutputModeType.SIMPLE
    assert mode_type_from_args(_ns(glob_input="*.png")) is InputOutputModeType.BATCH


def test_single_mode_from_args():
    mode = input_output_mode_from_args(_ns(input="in.png"))
    assert mode == SingleMode(input=PathVariant(Path("in.png")), output=PathVariant())


def test_batch_mode_mirrors_common_dir(tmp_path):
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "a.png").write_bytes(b"")
    (sub / "b.png").write_bytes(b"")
    (tmp_path / "c.txt").write_bytes(b"")
    out = tmp_path / "out"

    mode = input_output_mode_from_args(
        _ns(glob_input=str(tmp_path / "**" / "*.png"), glob_output=str(out))
    )

    assert isinstance(mode, BatchMode)
    assert mode.output_root_folder == out
    assert mode.inputs.common_root == sub
    assert mode.inputs.path_branches() == [Path("a.png"), Path("b.png")]


def test_batch_mode_skips_unsupported(tmp_path):
    (tmp_path / "a.png").write_bytes(b"")
    (tmp_path / "b.unsupported").write_bytes(b"")

    skipped = input_output_mode_from_args(
        _ns(glob_input=str(tmp_path / "*"), glob_output="out")
    )
    kept = input_output_mode_from_args(
        _ns(
            glob_input=str(tmp_path / "*"),
            glob_output="out",
            no_skip_unsupported_extensions=True,
        )
    )

    assert skipped.inputs.input_paths() == [tmp_path / "a.png"]
    assert kept.inputs.input_paths() == [tmp_path / "a.png", tmp_path / "b.unsupported"]


def test_batch_mode_requires_output_folder(tmp_path):
    with pytest.raises(ConfigError):
        input_output_mode_from_args(_ns(glob_input=str(tmp_path / "*.png")))


def test_batch_mode_invalid_pattern(tmp_path):
    with pytest.raises(ConfigError):
        input_output_mode_from_args(
            _ns(glob_input=str(tmp_path / "{a.png"), glob_output="out")
        )


def test_batch_mode_no_matches(tmp_path):
    with pytest.raises(ConfigError):
        input_output_mode_from_args(
            _ns(glob_input=str(tmp_path / "*.png"), glob_output="out")
        )