import logging
import concurrent.futures
from pathlib import Path
from typing import Optional, List
from ibc.config.models import AppConfig
from ibc.infrastructure.event_bus import EventBus
from ibc.infrastructure.file_scanner import FileScanner, validate_directory
from ibc.infrastructure.optipng import OptipngAdapter
from ibc.pipeline.preflight import PreflightValidator
from ibc.pipeline.timeout import estimate_timeout
from ibc.domain.errors import ConfigurationError, BatchTimeoutError, BatchInterruptedError
from ibc.domain.models import BatchPhase, BatchReport, CompressionTask, ImageFile, TaskOutcome
from ibc.domain.events import (
    PhaseChanged, DiscoveryStarted, DiscoveryFinished, TaskCompleted, TaskFailed, BatchFinished
)

logger = logging.getLogger(__name__)

class Orchestrator:
    """Runs one batch: validate, scan, submit one task per image, wait within the budget.

    Every image gets its own worker thread; there is no admission control.
    The pool belongs to a single run() call and is shut down before it returns.
    """

    def __init__(
        self,
        config: AppConfig,
        event_bus: EventBus,
        file_scanner: FileScanner,
        optipng_adapter: OptipngAdapter,
        preflight: Optional[PreflightValidator] = None
    ):
        self.config = config
        self.event_bus = event_bus
        self.file_scanner = file_scanner
        self.optipng_adapter = optipng_adapter
        self.preflight = preflight or PreflightValidator(optipng_adapter)
        self.phase = BatchPhase.VALIDATING

    def _set_phase(self, phase: BatchPhase):
        self.phase = phase
        logger.debug(f"Batch phase: {phase.value}")
        self.event_bus.publish(PhaseChanged(phase=phase))

    def _fail(self, message: str, submitted: int = 0, budget: int = 0):
        self._set_phase(BatchPhase.FAILED)
        self.event_bus.publish(BatchFinished(
            phase=BatchPhase.FAILED,
            submitted=submitted,
            budget_seconds=budget,
            error_message=message
        ))

    def _abandon_running(self, pending: int):
        """Deals with tasks still running after the aggregate wait gave up."""
        if self.config.general.terminate_on_timeout:
            terminated = self.optipng_adapter.terminate_running()
            logger.warning(f"Terminated {terminated} optipng process(es) still running")
        else:
            logger.warning(f"{pending} task(s) still running; their optipng processes are left to finish")

    def _process_file(self, image: ImageFile) -> CompressionTask:
        """Compresses a single image; failures stay inside the returned task."""
        task = CompressionTask(image=image, level=self.config.general.level)
        path = image.path
        try:
            task.pre_size = path.stat().st_size
            self.optipng_adapter.compress(task)

            if task.outcome == TaskOutcome.SUCCESS:
                task.post_size = path.stat().st_size
                logger.info(f"Optimized {path} by {task.saved_kb:.2f} kb ({task.saved_percent:.2f}%)")
                self.event_bus.publish(TaskCompleted(task=task))

        except Exception as e:
            # Log exception but don't crash the worker
            logger.error(f"Exception processing {path}: {e}")
            task.outcome = TaskOutcome.FAILED
            task.error_message = f"Exception: {e}"
            self.event_bus.publish(TaskFailed(task=task, error_message=task.error_message))
        return task

    def _validate(self, directories: List[Path], level: int):
        self.preflight.run(level)
        if not directories:
            raise ConfigurationError("No directories configured.")
        # All directories are checked before anything is scanned or submitted
        for directory in directories:
            validate_directory(directory)

    def _discover(self, directories: List[Path]) -> List[ImageFile]:
        images: List[ImageFile] = []
        for directory in directories:
            self.event_bus.publish(DiscoveryStarted(directory=directory))
            images.extend(self.file_scanner.scan(directory))
        self.event_bus.publish(DiscoveryFinished(files_found=len(images), directories=directories))
        return images

    def run(self, directories: Optional[List[Path]] = None) -> BatchReport:
        general = self.config.general
        if directories is None:
            directories = general.directories
        directories = [Path(d) for d in directories]
        level = general.level

        self._set_phase(BatchPhase.VALIDATING)
        try:
            self._validate(directories, level)
            self._set_phase(BatchPhase.SCANNING)
            images = self._discover(directories)
        except ConfigurationError as e:
            self._fail(str(e))
            raise

        budget = estimate_timeout(
            len(images),
            level,
            base_per_task=self.config.timeout.base_per_task,
            per_level_factor=self.config.timeout.per_level_factor
        )

        self._set_phase(BatchPhase.EXECUTING)
        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max(1, len(images)),
            thread_name_prefix="ibc-task"
        )
        futures = []
        try:
            for image in images:
                futures.append(executor.submit(self._process_file, image))
        finally:
            # No new submissions; does not wait for the workers
            executor.shutdown(wait=False)

        self._set_phase(BatchPhase.AWAITING)
        logger.info(f"Submitted {len(futures)} task(s) at level {level}, waiting up to {budget}s")

        try:
            done, not_done = concurrent.futures.wait(futures, timeout=budget)
        except KeyboardInterrupt as e:
            pending = sum(1 for f in futures if not f.done())
            self._abandon_running(pending)
            message = "Waiting for process termination was interrupted."
            self._fail(message, len(futures), budget)
            raise BatchInterruptedError(message) from e

        if not_done:
            self._abandon_running(len(not_done))
            error = BatchTimeoutError(budget, len(not_done))
            self._fail(str(error), len(futures), budget)
            raise error

        tasks = [f.result() for f in futures]
        self._set_phase(BatchPhase.COMPLETED)
        report = BatchReport(
            phase=BatchPhase.COMPLETED,
            submitted=len(futures),
            budget_seconds=budget,
            tasks=tasks
        )
        self.event_bus.publish(BatchFinished(
            phase=BatchPhase.COMPLETED,
            submitted=report.submitted,
            budget_seconds=budget
        ))
        return report
