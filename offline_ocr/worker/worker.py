import threading
from concurrent.futures import Future, ThreadPoolExecutor

from offline_ocr.config.settings import Settings
from offline_ocr.jobs.repository import JobRepository
from offline_ocr.logging.logger import Log
from offline_ocr.worker.job_runner import JobRunner


class Worker:
    """Admission loop: discover pending jobs -> dispatch to a bounded pool.

    Every pending job is dispatched as soon as it is seen; at most
    max_concurrent_jobs of them run at once, the rest stay pending.
    """

    def __init__(
        self,
        job_repo: JobRepository,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._job_repo = job_repo
        self._job_runner = job_runner
        self._settings = settings
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._dispatched: dict[str, Future[None]] = {}
        self._thread: threading.Thread | None = None

    def run(self, stop_when_idle: bool = False) -> None:
        """Main admission loop. Runs until stopped or interrupted.

        If stop_when_idle is set, return once no job is pending or running.
        """
        Log.info(
            f"Worker started, watching for jobs "
            f"(max {self._settings.max_concurrent_jobs} concurrent)"
        )
        with ThreadPoolExecutor(
            max_workers=self._settings.max_concurrent_jobs,
            thread_name_prefix="ocr-job",
        ) as pool:
            try:
                while not self._stop.is_set():
                    dispatched = self._dispatch_pending(pool)
                    if stop_when_idle and not dispatched and self.is_idle():
                        break
                    if not dispatched:
                        self._stop.wait(self._settings.job_poll_interval_seconds)
            except KeyboardInterrupt:
                Log.info("Worker shutting down gracefully")
                self._stop.set()
        Log.info("Worker stopped")

    def start(self) -> None:
        """Run the admission loop on a background thread."""
        if self._thread is not None and self._thread.is_alive():
            if self._stop.is_set():
                Log.warning("Worker is still draining after stop, not restarting")
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name="ocr-admission", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Stop admitting jobs and wait for running ones to finish."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                Log.warning("Worker still draining running jobs after stop timeout")
                return
            self._thread = None

    def is_idle(self) -> bool:
        with self._lock:
            running = bool(self._dispatched)
        return not running and not self._job_repo.pending_ids()

    def _dispatch_pending(self, pool: ThreadPoolExecutor) -> int:
        count = 0
        for job_id in self._job_repo.pending_ids():
            with self._lock:
                if job_id in self._dispatched:
                    continue
                future = pool.submit(self._run_job, job_id)
                self._dispatched[job_id] = future
            future.add_done_callback(lambda _f, jid=job_id: self._forget(jid))
            Log.debug(f"Dispatched job {job_id}")
            count += 1
        return count

    def _run_job(self, job_id: str) -> None:
        try:
            self._job_runner.run(job_id)
        except Exception as exc:
            Log.error(f"Unexpected error while running job {job_id}: {exc}")

    def _forget(self, job_id: str) -> None:
        with self._lock:
            self._dispatched.pop(job_id, None)
