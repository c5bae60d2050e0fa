"""Shared pytest fixtures for srcmapper tests."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from srcmapper import diagnostics
from srcmapper.file import File, Streamed

HELLO_WORLD = "'use strict';\n\nfunction helloWorld() {\n    console.log('Hello world!');\n}\n"
TEST_CSS = "body {\n  color: red;\n}\n"

EXTERNAL_MAPS = {
    "helloworld2.js.map": {
        "version": 3,
        "file": "helloworld2.js",
        "sources": ["helloworld2.js"],
        "sourcesContent": ["source content from source map"],
        "names": [],
        "mappings": "",
    },
    "helloworld3.js.map": {
        "version": 3,
        "file": "helloworld.js",
        "sources": ["helloworld.js", "test1.js"],
        "names": [],
        "mappings": "",
    },
    "helloworld4.js.map": {
        "version": 3,
        "file": "helloworld.js",
        "sources": ["helloworld.js", "missingfile"],
        "names": [],
        "mappings": "",
    },
    "helloworld5.js.map": {
        "version": 3,
        "file": "helloworld.js",
        "sourceRoot": "test",
        "sources": ["../helloworld.js", "../test1.js"],
        "names": [],
        "mappings": "",
    },
    "helloworld6.js.map": {
        "version": 3,
        "file": "helloworld.js",
        "sourceRoot": "http://example.com/",
        "sources": ["helloworld.js", "http://example2.com/test1.js"],
        "names": [],
        "mappings": "",
    },
}


@pytest.fixture(autouse=True)
def reset_diagnostics() -> None:
    """Keep the process-wide debug namespaces from leaking between tests."""
    diagnostics.disable()


@pytest.fixture
def assets(tmp_path: Path) -> Path:
    """Return a directory holding the sources and maps the tests refer to."""
    directory = tmp_path / "assets"
    directory.mkdir()
    (directory / "helloworld.js").write_text(HELLO_WORLD)
    (directory / "test1.js").write_text("test1\n")
    (directory / "test.css").write_text(TEST_CSS)
    for name, source_map in EXTERNAL_MAPS.items():
        (directory / name).write_text(json.dumps(source_map))
    return directory


@pytest.fixture
def make_file(assets: Path) -> Callable[..., File]:
    """Return a factory for files rooted in the assets directory."""

    def factory(name: str = "helloworld.js", contents: bytes | Streamed | None = None) -> File:
        path = assets / name
        if contents is None and path.exists():
            contents = path.read_bytes()
        return File(cwd=assets.parent, base=assets, path=path, contents=contents)

    return factory
