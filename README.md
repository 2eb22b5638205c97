# packagespec

Tools for loading versioned package specifications. A specification is a tree of
`spec.yml` files. Each one describes the files and folders a package may contain
and the limits that apply to them. It can also list JSON patches that rewrite the
spec for older versions.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Loading a specification

```python
import semver

from packagespec.folder_spec import FolderSpecLoader, SpecLoadError
from packagespec.fspath import DirFS

loader = FolderSpecLoader(DirFS("spec"), None, semver.Version.parse("2.0.0"))
try:
    spec = loader.load("integration")
except SpecLoadError as exc:
    print(f"cannot load spec: {exc}")
else:
    print(spec.name, spec.is_dir(), spec.additional_contents)
    for item in spec.contents:
        print(item.name, item.item_type, item.required)
```

`FolderSpecLoader(fsys, file_schema_loader, version)` takes three arguments:

- `fsys` is any object with an `open(name)` method that returns a binary file.
  `DirFS` is one such object.
- `file_schema_loader` is an optional `packagespec.item.FileSchemaLoader`. It is
  called for file items that refer to a schema with `$ref`. With `None`, those
  references are left unresolved.
- `version` is the version the spec is resolved for. It may be a
  `semver.Version`, a version string, or `None`, which means `0.0.0`.

`load(spec_path)` reads `<spec_path>/spec.yml` and returns a
`packagespec.folder_item_spec.FolderItemSpec`. During loading it does the
following:

- Patches listed under `versions` are applied when the target version is lower
  than their `before` version.
- Folder items with `$ref` are loaded from the referenced `spec.yml`.
- Everything below a development folder is marked as a development folder.
- `visibility` defaults to `public`. Any value other than `public` or `private`
  is rejected.
- Limits such as `sizeLimit`, `totalSizeLimit` or `totalContentsLimit` pass from
  a folder down to its contents wherever a child sets none of its own.

Failures raise `SpecLoadError`.

## Version patches

`packagespec.specpatch` provides the functions used for version patches:

- `patch_for_version(target, versions)` collects the RFC 6902 operations of
  every `VersionPatch` whose `before` is greater than `target`.
- `apply_patch(document, operations)` applies the operations to a copy of a
  JSON-like document. It supports `add`, `remove`, `replace`, `move`, `copy` and
  `test`.
- `resolve_patch(spec, operations)` does the same to a spec's dictionary form.

Bad operations raise `PatchError`.

## File sizes and content types

```python
from packagespec.contenttype import parse_content_type
from packagespec.filesize import file_size_from_json, parse_file_size

size = parse_file_size("10MB")
print(int(size), size.to_json())         # 10485760 "10MB"
print(file_size_from_json("1024"))       # 1KB

ct = parse_content_type("application/x-yaml; require-document-dashes=true")
print(ct.media_type, ct.params)
```

`FileSize` accepts plain numbers and the units `B`, `KB` and `MB`. Sizes must be
below 2**63. `file_size_from_yaml`, `content_type_from_json` and
`content_type_from_yaml` decode the JSON and YAML forms, and `to_json()` and
`to_yaml()` write them back. Invalid values raise `ValueError`.

## Reading values from package files

```python
from packagespec.fspath import DirFS
from packagespec.pkgpath import find_files

for f in find_files(DirFS("my_package"), "data_stream/*/manifest.yml"):
    print(f.path, f.values("$.title"))
```

`find_files` raises `FilesError` when some matching files cannot be inspected.
The error's `errors` and `files` attributes hold the failures and the files that
could be read.

`values` works on `.yaml`, `.yml` and `.json` files only and takes a JSONPath
expression, which is evaluated by `packagespec.jpath.get`:

- A path made only of names and indices returns the single value it reaches.
  Such a path raises `JSONPathError` when the value is missing.
- Paths with `*`, slices, unions or `..` return a list of matches.
- Filter and script expressions are not supported.

## Linked files

A file ending in `.link` holds the relative path to a target file, optionally
followed by the target's SHA-256 checksum. `packagespec.linkedfiles.read_link`
reads such a file and returns a `Link` whose `up_to_date` field tells whether the
checksum still matches the target. `checksum(data)` computes the digest to write
into a link file.

The file system wrappers in `packagespec.linkedfs` handle link files as follows:

- `LinkedFS(work_dir, inner)` opens link targets in place of the links. It
  raises `LinkNotUpToDateError` when a link's checksum no longer matches.
- `BlockFS(inner)` refuses link files with `UnsupportedLinkFileError`.

## What is not included

The package loads and resolves specifications but does not validate packages
against them:

- There is no command-line tool.
- No specification files are bundled.
- No concrete `FileSchemaLoader` is provided. File items with a `$ref` only get
  a schema if you pass in your own loader, and `FolderItemSpec.validate_schema`
  returns an empty list for items without one.