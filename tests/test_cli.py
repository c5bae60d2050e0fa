import json
from pathlib import Path

from typer.testing import CliRunner

from conftest import HELLO_WORLD
from srcmapper.main import app

runner = CliRunner()


def test_build_inline(assets: Path, tmp_path: Path) -> None:
    out = tmp_path / "dist"
    result = runner.invoke(app, ["build", str(assets / "helloworld.js"), "--out", str(out)])
    assert result.exit_code == 0, result.output
    written = (out / "helloworld.js").read_text()
    assert written.startswith(f"{HELLO_WORLD}\n//# sourceMappingURL=data:application/json;base64,")


def test_build_directory_with_external_maps(assets: Path, tmp_path: Path) -> None:
    (assets / ".gitignore").write_text("ignored.js\n")
    (assets / "ignored.js").write_text("var ignored;\n")
    out = tmp_path / "dist"
    result = runner.invoke(app, ["build", str(assets), "--out", str(out), "--maps", ".", "--identity-map"])
    assert result.exit_code == 0, result.output

    assert not (out / "ignored.js").exists()
    assert (out / "test.css").read_text().endswith("/*# sourceMappingURL=test.css.map */")
    source_map = json.loads((out / "helloworld.js.map").read_text())
    assert source_map["names"] == ["helloWorld", "console", "log"]
    assert source_map["file"] == "helloworld.js"


def test_build_missing_path_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["build", str(tmp_path / "nope.js"), "--out", str(tmp_path / "dist")])
    assert result.exit_code == 1
    assert "does not exist" in " ".join(result.output.split())


def test_inspect_json(assets: Path) -> None:
    (assets / "app.js").write_text(f"{HELLO_WORLD}\n//# sourceMappingURL=helloworld4.js.map")
    result = runner.invoke(app, ["inspect", str(assets / "app.js"), "--json"])
    assert result.exit_code == 0, result.output
    source_map = json.loads(result.output)
    assert source_map["sources"] == ["helloworld.js", "missingfile"]
    assert source_map["sourcesContent"][1] is None


def test_inspect_table(assets: Path) -> None:
    result = runner.invoke(app, ["inspect", str(assets / "helloworld.js"), "--no-load-maps"])
    assert result.exit_code == 0, result.output
    assert "helloworld.js" in result.output
    assert "Sources" in result.output
