import os
from pathlib import Path

import pytest

from srcmapper.config import InitOptions, WriteOptions, resolve_value
from srcmapper.file import File, Streamed
from srcmapper.utils.paths import is_url, relative_to, resolve, rooted, unix_style_path


@pytest.mark.parametrize(("value", "expected"), [
    ("http://example.com/a.js", True),
    ("https://example.com/a.js", True),
    ("webpack:///src/a.js", True),
    ("a.js", False),
    ("../a.js", False),
    ("/abs/a.js", False),
    ("", False),
    (None, False),
])
def test_is_url(value, expected: bool) -> None:
    assert is_url(value) is expected


def test_unix_style_path_uses_forward_slashes() -> None:
    assert unix_style_path(os.path.join("a", "b", "c.js")) == "a/b/c.js"


def test_resolve_and_relative() -> None:
    base = Path("/project/assets")
    assert resolve(base, "test", "../helloworld.js") == Path("/project/assets/helloworld.js")
    assert resolve(base, "/elsewhere/x.js") == Path("/elsewhere/x.js")
    assert relative_to(base, Path("/project/maps/a.js.map")) == "../maps/a.js.map"
    assert rooted("../maps/a.js.map") == "/maps/a.js.map"


def test_file_helpers() -> None:
    file = File(path=Path("/p/assets/js/app.js"), base=Path("/p/assets"), cwd=Path("/p"), contents=b"x")
    assert file.unix_relative == "js/app.js"
    assert file.dirname == Path("/p/assets/js")
    assert file.basename == "app.js"
    assert file.extname == ".js"
    assert file.is_buffer() and not file.is_stream() and not file.is_null()
    assert File(contents=Streamed()).is_stream()
    assert File().base == File().cwd


def test_clone_copies_the_map() -> None:
    file = File(path=Path("/p/a.js"), contents=b"x", source_map={"version": 3, "sources": [], "names": [], "mappings": ""})
    copy = file.clone()
    copy.source_map["sources"].append("b.js")
    assert file.source_map["sources"] == []


def test_options_accept_camel_case() -> None:
    assert InitOptions.from_mapping({"loadMaps": True, "identityMap": True}) == InitOptions(
        load_maps=True, identity_map=True
    )
    options = WriteOptions.from_mapping({"includeContent": False, "sourceMappingURLPrefix": "https://x"})
    assert options.include_content is False
    assert options.source_mapping_url_prefix == "https://x"
    assert options.inline


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown option"):
        InitOptions.from_mapping({"loadmaps": True})


def test_resolve_value() -> None:
    file = File(path=Path("/p/a.js"))
    assert resolve_value(None, file) is None
    assert resolve_value("/root", file) == "/root"
    assert resolve_value(lambda f: f.basename, file) == "a.js"
