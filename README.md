# sic

`sic` holds the command-line side of an image conversion tool: it parses
arguments into a run configuration, expands glob patterns into batches of
input files, works out how to mirror those files under a new output folder,
and decides which image format an output file name points to.

It has no dependencies outside the standard library.

## Modules

- `sic.app`
  - `create_parser(version, about, help_ops)` returns an `argparse` parser
    with the tool's options: `--input/-i`, `--output/-o`, `--glob-input`,
    `--glob-output`, `--license`, `--dep-licenses`, `--select-frame`,
    `--output-format/-f`, `--jpeg-encoding-quality`, `--pnm-encoding-ascii`,
    `--gif-repeat`, `--enable-output-format-decider-fallback`,
    `--apply-operations/-x`, `--operations-script` and the image operation
    options (`--blur`, `--crop`, `--resize`, `--rotate90`, ...). Operation
    values are type checked and collected in command-line order as
    `(name, values)` pairs. Conflicting options (for example `--input` with
    `--glob-input`, or `--apply-operations` with an operation option) are
    rejected.
  - `build_app_config(args)` turns the parsed arguments into a `Config`.
    A script given with `--apply-operations`, or read from the file named by
    `--operations-script`, is stored as `("script", text)`.
  - `parse_frame_index(value)` accepts `first`, `last` or a non-negative
    number.
- `sic.config`
  - Configuration types: `Config`, `FormatEncodingSettings` (JPEG quality
    defaults to 80), `PathVariant`, `InputOutputModeType`,
    `SelectedLicenses`, `FrameIndex`, `SingleMode`, `BatchMode`.
  - `validate_jpeg_quality(quality)` accepts 1 to 100 inclusive and raises
    `ConfigError` otherwise.
  - `filter_unsupported_paths(paths, fallback_enabled)` keeps paths whose
    extension is a known output format; with the fallback enabled, the
    extensions known to `sic.fallback` are kept as well (such as `.ff`).
  - `input_output_mode_from_args(args)` returns a `SingleMode`, or, for
    `--glob-input`, walks the file system and returns a `BatchMode`.
- `sic.common_dir`: `find_common_dir(paths)` finds the deepest directory
  shared by all paths and returns a `CommonDir`; `unroot(root, path)`
  strips a root from a path.
- `sic.glob_base_dir`: `glob_base_unrooted(pattern)` splits an absolute
  pattern into its fixed base and its globbing part; `walk_glob(pattern)`
  yields the matching files, supporting `*`, `**`, `?`, `[...]` and
  `{a,b}`.
- `sic.fallback`: `guess_output_by_path(path)` and
  `guess_output_by_identifier(identifier)` return an `ImageOutputFormat`,
  or raise `UnsupportedFormatError`.
- `sic.combinators`: `fallback_if(primary, predicate, fallback, alternative)`
  calls `fallback(alternative)` only when `primary()` raised and the
  predicate is true.
- `sic.license`: `print_license(selection, texts, ...)` prints the tool's
  license text, or asks whether to open the dependency licenses and, on
  `yes`/`y`, passes `LicenseTexts.dependencies_location` to the opener
  (by default `webbrowser.open`).

## Examples

Mirror a batch of files under a new output folder:

```python
from pathlib import Path
from sic.common_dir import find_common_dir

common = find_common_dir([
    "/my/common/path/a.png",
    "/my/common/path/b.png",
    "/my/uncommon/path/c.png",
])

for source, branch in common.path_combinations():
    print(source, "->", Path("/out") / branch)
# /my/common/path/a.png -> /out/common/path/a.png
# ...
```

Keep only the files that can be written in a known format:

```python
from sic.config import filter_unsupported_paths

filter_unsupported_paths(
    ["/test/0.png", "/test/1.jpg", "/test/2.unsupported", "/test/2"],
    False,
)
# [PosixPath('/test/0.png'), PosixPath('/test/1.jpg')]
```

Parse a command line into a configuration:

```python
from sic.app import build_app_config, create_parser

parser = create_parser("0.1.0", "Convert images", "Image operations script")
args = parser.parse_args(["-i", "in.png", "-o", "out.jpg", "--crop", "0", "0", "2", "2"])
config = build_app_config(args)
config.image_operations_program   # [('crop', (0, 0, 2, 2))]
```

## What the package does not do

The package stops at configuration. It does not load, transform or encode
images, does not parse or run operation scripts, and provides no command to
run: decoding, the image operations themselves and writing output files are
left to the code that uses the `Config` and input/output mode it builds.

## Running the tests

Install the package with its `test` extra and run `pytest` from the
project root.