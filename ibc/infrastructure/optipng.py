import subprocess
import logging
import threading
import time
from typing import List, Set
from ibc.domain.models import CompressionTask, TaskOutcome
from ibc.infrastructure.event_bus import EventBus
from ibc.domain.events import TaskStarted, TaskFailed

class OptipngAdapter:
    """Wrapper around the optipng executable."""

    def __init__(self, event_bus: EventBus, executable: str = "optipng", level_flag: str = "-o"):
        self.event_bus = event_bus
        self.executable = executable
        self.level_flag = level_flag
        self.logger = logging.getLogger(__name__)
        self._running: Set[subprocess.Popen] = set()
        self._running_lock = threading.Lock()

    def _build_command(self, task: CompressionTask) -> List[str]:
        """Constructs the optipng command line arguments."""
        return [
            self.executable,
            self.level_flag, str(task.level),
            str(task.image.path),
        ]

    def probe(self) -> int:
        """Runs the bare executable and returns its exit code.

        Raises OSError when the executable cannot be started.
        """
        result = subprocess.run([self.executable], capture_output=True, text=True)
        self.logger.debug(f"Probe {self.executable} exited with code {result.returncode}")
        return result.returncode

    def _fail(self, task: CompressionTask, outcome: TaskOutcome, message: str):
        task.outcome = outcome
        task.error_message = message
        self.logger.error(message)
        self.event_bus.publish(TaskFailed(task=task, error_message=message))

    def compress(self, task: CompressionTask):
        """Runs optipng on the task's file and blocks until the process exits.

        Sets task.outcome to SUCCESS on normal termination regardless of the
        exit code, SPAWN_FAILED or WAIT_FAILED otherwise.
        """
        path = task.image.path
        cmd = self._build_command(task)
        start_time = time.monotonic()

        try:
            process = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                universal_newlines=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            self._fail(task, TaskOutcome.SPAWN_FAILED, f"Failed to start a process for {path}: {e}")
            return

        with self._running_lock:
            self._running.add(process)
        self.event_bus.publish(TaskStarted(task=task))

        try:
            output, _ = process.communicate()
        except (OSError, subprocess.SubprocessError) as e:
            self._fail(task, TaskOutcome.WAIT_FAILED, f"Failed to wait for the process to finish for {path}: {e}")
            return
        finally:
            with self._running_lock:
                self._running.discard(process)

        task.return_code = process.returncode
        task.outcome = TaskOutcome.SUCCESS
        elapsed = time.monotonic() - start_time
        self.logger.debug(f"OPTIPNG_END: {path} code={process.returncode} elapsed={elapsed:.2f}s")
        if output:
            self.logger.debug(f"OPTIPNG_OUTPUT: {path}: {output.strip()}")

    def terminate_running(self) -> int:
        """Sends SIGTERM to every optipng process still alive; returns how many."""
        with self._running_lock:
            processes = list(self._running)
        terminated = 0
        for process in processes:
            if process.poll() is None:
                try:
                    process.terminate()
                    terminated += 1
                except OSError as e:
                    self.logger.warning(f"Could not terminate optipng (pid={process.pid}): {e}")
        return terminated
