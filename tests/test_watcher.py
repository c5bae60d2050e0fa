from pathlib import Path

from watchdog.events import DirModifiedEvent, FileCreatedEvent, FileModifiedEvent, FileMovedEvent

from srcmapper.utils.gitignore import GitignoreSpec
from srcmapper.watcher import SourceEventHandler, SourceWatcher


def test_handler_filters_events(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_text("vendor/\n")
    changed: list[Path] = []
    handler = SourceEventHandler(GitignoreSpec(tmp_path), {".js", ".css"}, changed.append)

    handler.on_modified(FileModifiedEvent(str(tmp_path / "app.js")))
    handler.on_created(FileCreatedEvent(str(tmp_path / "style.css")))
    handler.on_moved(FileMovedEvent(str(tmp_path / ".app.js.swp"), str(tmp_path / "main.js")))
    handler.on_modified(FileModifiedEvent(str(tmp_path / "notes.txt")))
    handler.on_modified(FileModifiedEvent(str(tmp_path / "vendor" / "lib.js")))
    handler.on_modified(DirModifiedEvent(str(tmp_path / "src")))

    assert changed == [tmp_path / "app.js", tmp_path / "style.css", tmp_path / "main.js"]


def test_watcher_starts_on_given_root(tmp_path: Path) -> None:
    watcher = SourceWatcher(GitignoreSpec(tmp_path), {".js"}, lambda path: None)
    watcher.start(tmp_path)
    try:
        assert watcher.is_alive()
    finally:
        watcher.stop()
    assert not watcher.is_alive()
