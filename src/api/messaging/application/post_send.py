"""Post-send processing queue and worker.

Sending a message must not wait for tag processing. MessageService offers a
PostSendJob snapshot to a bounded in-process queue; a PostSendWorker owns a
single background task that drains the queue and hands each job to the
tag processor. The worker runs outside any request, so a cancelled or
timed-out request never affects jobs it already enqueued.
"""

from __future__ import annotations

import asyncio

from messaging.application.observability import DefaultPostSendProbe, PostSendProbe
from messaging.ports.tags import ITagProcessor, PostSendJob


class PostSendQueue:
    """Bounded queue of post-send jobs.

    offer() never blocks: when the queue is full the job is dropped and the
    drop is reported through the probe.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        probe: PostSendProbe | None = None,
    ) -> None:
        self._queue: asyncio.Queue[PostSendJob] = asyncio.Queue(maxsize=maxsize)
        self._probe = probe or DefaultPostSendProbe()

    def offer(self, job: PostSendJob) -> bool:
        """Enqueue a job without waiting.

        Returns:
            True if the job was enqueued, False if it was dropped
        """
        try:
            self._queue.put_nowait(job)
        except asyncio.QueueFull:
            self._probe.job_dropped(
                message_id=job.message_id, queue_size=self._queue.qsize()
            )
            return False
        return True

    async def get(self) -> PostSendJob:
        return await self._queue.get()

    def task_done(self) -> None:
        self._queue.task_done()

    async def join(self) -> None:
        """Wait until every enqueued job has been processed."""
        await self._queue.join()

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    def qsize(self) -> int:
        return self._queue.qsize()


class PostSendWorker:
    """Background worker that feeds queued jobs to the tag processor.

    Jobs are processed one at a time in enqueue order. Processor failures
    are reported through the probe and the job is discarded.
    """

    def __init__(
        self,
        queue: PostSendQueue,
        processor: ITagProcessor,
        probe: PostSendProbe | None = None,
    ) -> None:
        self._queue = queue
        self._processor = processor
        self._probe = probe or DefaultPostSendProbe()
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the processing loop. Calling start() twice is a no-op."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name="post-send-worker")
        self._probe.worker_started()

    async def stop(self) -> None:
        """Stop the processing loop. Jobs still queued are left in the queue."""
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass

        self._task = None
        self._probe.worker_stopped()

    async def _run(self) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self._processor.process(job)
            except Exception as e:
                self._probe.job_failed(message_id=job.message_id, error=str(e))
            else:
                self._probe.job_processed(message_id=job.message_id)
            finally:
                self._queue.task_done()
