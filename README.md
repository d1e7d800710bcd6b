# rustrules

Small tools that support building Rust code with Bazel.

## Installation

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Library

### Labels

```python
from rustrules.label import analyze, LabelError

label = analyze("@repo//foo/bar:baz")
label.repository_name   # "repo"
label.package_name      # "foo/bar"
label.name              # "baz"
label.packages()        # ["foo", "bar"]

try:
    analyze("//bar/:baz")
except LabelError as err:
    print(err)  # //bar/:baz must be a legal label; package names may not end with '/'.
```

`LabelError` is a subclass of `ValueError`.

### Runfiles

```python
from rustrules.runfiles import Runfiles

runfiles = Runfiles.create()          # or Runfiles.create("path/to/binary")
path = runfiles.rlocation("my_workspace/path/to/data.txt")
```

`find_runfiles_dir(argv0=None)` locates the `.runfiles` directory next to
(or above) the binary, following symlinks; it raises `OSError` when none is
found. `rlocation` returns absolute paths unchanged and does not check that
the path exists.

### rustfmt manifests

`rustrules.rustfmt_lib.parse_rustfmt_manifest` reads a manifest written by
the rustfmt aspect (extension `RUSTFMT_MANIFEST_EXTENSION`, `"rustfmt"`):
source files one per line, the edition on the last line. It returns a
`RustfmtManifest` and raises `ValueError` for an empty manifest or a
non-numeric edition. `parse_rustfmt_config(environ=None)` resolves the
`RUSTFMT` and `RUSTFMT_CONFIG` paths into a `RustfmtConfig`, raising if a
variable is missing or a path does not exist.

### Examples

`rustrules.examples` holds `fibonacci(n)` (raises `ValueError` for a
negative `n`) and `Greeter`, whose `greeting(thing)` returns
`"<greeting> <thing>"` and whose `greet(thing)` prints it.

## Commands

| Command | Purpose |
| --- | --- |
| `rustrules-rustfmt [target...]` | Query the workspace for Rust targets (or use the given targets directly), build their rustfmt manifests and format the sources. Needs `BUILD_WORKSPACE_DIRECTORY`, `RUSTFMT` and `RUSTFMT_CONFIG`; uses `BAZEL_REAL` or `bazel`. Exits with the status of a failing `bazel` or rustfmt run. |
| `rustrules-rust-analyzer` | Build `//:rust_analyzer` and write `rust-project.json` to the workspace root, replacing `__EXEC_ROOT__` with the execution root. Options: `--workspace`, `--execution-root`, `--bazel`, `--bazel-analyzer-target`. Missing roots are taken from `BUILD_WORKSPACE_DIRECTORY` and `bazel info`; failures raise an error. |
| `rustrules-launcher [arg...]` | Load the environment file at `<launcher path>.launchfiles/env` and run the executable whose path is the launcher's with `.launcher` removed. On POSIX the process is replaced; elsewhere the executable's exit status is returned. |
| `rustrules-dir-zipper <zipper> <output> <root-dir> [<file>...]` | Run the zipper to create an uncompressed archive, stripping `root-dir` from every entry name. Prints usage and exits 1 with too few arguments or a file outside `root-dir`; otherwise exits with the zipper's status. |
| `rustrules-optional-outputs [out...] -- program [arg...]` | Run a program and, when it succeeds, create any listed outputs it did not produce. Exits with the program's status, or -1 after printing usage on misuse. |

## Limitations

Runfiles lookup is directory based only; runfiles manifest files are not read.

## Tests

```
pytest
```