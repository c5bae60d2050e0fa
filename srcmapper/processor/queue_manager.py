import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field

from srcmapper.file import File
from srcmapper.pipeline import Outcome, Pipeline


@dataclass
class WorkItem:
    file: File
    order: int = 0
    outcomes: list[Outcome] = field(default_factory=list)


class WorkQueue:
    """Runs a pipeline over many files on worker threads.

    Every file is processed start to finish by a single worker, so no per-file
    state is ever shared. Outcomes are returned in input order.
    """

    def __init__(self, pipeline: Pipeline, concurrency: int = 4) -> None:
        self._pipeline = pipeline
        self._queue: asyncio.Queue[WorkItem] = asyncio.Queue()
        self._items: list[WorkItem] = []
        self._concurrency = concurrency

    def add(self, file: File) -> None:
        item = WorkItem(file=file, order=len(self._items))
        self._items.append(item)
        self._queue.put_nowait(item)

    def extend(self, files: Iterable[File]) -> None:
        for file in files:
            self.add(file)

    async def process(self) -> list[Outcome]:
        async def worker() -> None:
            while True:
                try:
                    item = self._queue.get_nowait()
                except asyncio.QueueEmpty:
                    break
                try:
                    item.outcomes = await asyncio.to_thread(self._run_one, item.file)
                finally:
                    self._queue.task_done()

        tasks = [asyncio.create_task(worker()) for _ in range(max(1, self._concurrency))]
        await asyncio.gather(*tasks)

        items, self._items = self._items, []
        return [outcome for item in sorted(items, key=lambda i: i.order) for outcome in item.outcomes]

    def _run_one(self, file: File) -> list[Outcome]:
        return list(self._pipeline.run([file]))

    def size(self) -> int:
        return self._queue.qsize()

    def is_empty(self) -> bool:
        return self._queue.empty()
