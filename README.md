# winfs-injector

Injects the Windows root file system release into a Windows runtime tile.

`winfs-injector` performs these steps:

1. It unpacks the input tile into `extracted-tile/` inside a working directory.
2. It reads the embedded release under `embed/windowsfs-release`. It takes the version from `VERSION`, the release name from `config/final.yml`, and the image tag from a `windows*fs/windows*fs-X.Y.Z.tgz` key in `config/blobs.yml`.
3. It builds `releases/<name>-<version>.tgz` from the `cloudfoundry/windows2016fs` image.
4. It appends the release to the tile's single `metadata/*.yml` file.
5. It removes the embedded release sources.
6. It packs the directory into the output tile.

The tool prints a message and skips injection in two cases:

- the tile already holds a `releases/windows*fs*` file;
- the tile has no embedded release.

On Windows it first runs `git config core.filemode false`, in the embedded release and in each of its submodules.

## Installation

```
pip install .
```

## Usage

```
winfs-injector --input-tile /path/to/input.pivotal --output-tile /path/to/output.pivotal
```

| Option | Meaning |
| --- | --- |
| `--input-tile`, `-i` | path to the input tile (required) |
| `--output-tile`, `-o` | path to the output tile (required) |
| `--preserve-extracted`, `-p` | keep the temporary extraction directory and print its path |
| `--registry`, `-r` | docker registry to fetch the image from (default `https://registry.hub.docker.com`) |
| `--help`, `-h` | print usage information |

If an error occurs, the tool writes it to standard error and exits with status 1. This covers bad options as well as errors during injection.

## Library use

```python
from winfs_injector.application import Application
from winfs_injector.release_creator import ReleaseCreator
from winfs_injector.tile_injector import TileInjector
from winfs_injector.zipper import Zipper

app = Application(ReleaseCreator(), TileInjector(), Zipper())
app.run("input.pivotal", "output.pivotal", "https://registry.hub.docker.com", "/tmp/work")
```

### `winfs_injector.application`

`Application(release_creator, injector, zipper, read_file=None, remove_all=None)` runs the steps above.

- `read_file` and `remove_all` replace file reading and directory removal. They are useful in tests.
- `run` raises `InjectionError` in these cases:
  - a required argument is missing;
  - the embedded YAML is malformed;
  - no image tag can be found in `config/blobs.yml`;
  - on Windows, a git command fails.
- Errors raised by the collaborators pass through unchanged.

### `winfs_injector.tile_injector`

`TileInjector.add_release_to_metadata(release_path, release_name, release_version, tile_dir)` appends a `Release` entry to the single YAML file in `tile_dir/metadata`. The entry's file field is the base name of `release_path`. The method raises `MetadataError` in these cases:

- there is no metadata file;
- there is more than one metadata file;
- the YAML is malformed.

`Metadata.from_yaml` and `Metadata.to_yaml` parse and render the document. Keys other than `releases` are kept in `Metadata.other`.

### `winfs_injector.zipper`

`Zipper` creates and extracts tile archives.

- `zip(zip_dir, output_file)` archives every file and directory under `zip_dir`. It writes to `output_file + ".zip"` first and then renames that file to `output_file`.
- `unzip(zip_file, output_dir)` extracts entries and keeps their permission bits. It refuses entries that point outside `output_dir`.

### `winfs_injector.release_creator`

`ReleaseCreator.create_release(...)` does not fetch images or build releases itself. It runs two external commands, which must be on `PATH`:

- `hydrate download --image ... --tag ... --outputDir <release_dir>/blobs/<name> --registry ...`
- `bosh create-release --dir ... --version ... [--tarball ...]`

`bosh` runs with `HOME` set to a temporary directory, which is removed afterwards. You can change the command names with `hydrate_command` and `bosh_command`. You can replace how commands are run with `runner`.

The method raises `ReleaseCreationError` when a command is missing or fails. It raises `ValueError` for a malformed version.

### `winfs_injector.fakes`

Recording test doubles for the collaborators and related interfaces:

- `fakes.injector.Injector`
- `fakes.release_creator.ReleaseCreator`
- `fakes.zipper.Zipper`
- `fakes.file_info.FileInfo`
- `fakes.extractor.Extractor`

Each fake records its calls and reports them through `invocations()`. Each can be set to return a value or raise an error on every call or on a given call.

## Development

```
pip install -e ".[test]"
pytest
```