from pathlib import Path
from typing import Callable

from watchdog.events import FileCreatedEvent, FileModifiedEvent, FileMovedEvent, FileSystemEventHandler
from watchdog.observers import Observer

from srcmapper.utils.gitignore import GitignoreSpec


class SourceEventHandler(FileSystemEventHandler):
    def __init__(
        self,
        gitignore: GitignoreSpec,
        extensions: set[str],
        on_change: Callable[[Path], None],
    ) -> None:
        self._gitignore = gitignore
        self._extensions = extensions
        self._on_change = on_change

    def on_modified(self, event: FileModifiedEvent) -> None:  # type: ignore[override]
        if event.is_directory:
            return
        self._handle_event(Path(str(event.src_path)))

    def on_created(self, event: FileCreatedEvent) -> None:  # type: ignore[override]
        if event.is_directory:
            return
        self._handle_event(Path(str(event.src_path)))

    def on_moved(self, event: FileMovedEvent) -> None:  # type: ignore[override]
        # Editors that save through a temp file show up as a move onto the source.
        if event.is_directory:
            return
        self._handle_event(Path(str(event.dest_path)))

    def _handle_event(self, path: Path) -> None:
        if path.suffix not in self._extensions:
            return
        if self._gitignore.matches(path):
            return
        self._on_change(path)


class SourceWatcher:
    def __init__(self, gitignore: GitignoreSpec, extensions: set[str], on_change: Callable[[Path], None]) -> None:
        self._handler = SourceEventHandler(gitignore, extensions, on_change)
        self._observer = Observer()

    def start(self, root: Path) -> None:
        self._observer.schedule(self._handler, str(root), recursive=True)
        self._observer.start()

    def stop(self) -> None:
        self._observer.stop()
        self._observer.join()

    def is_alive(self) -> bool:
        return self._observer.is_alive()
