import threading
from typing import List, Optional
from ibc.domain.models import BatchPhase, CompressionTask

class RunState:
    """Thread-safe counters for one batch, fed by UIManager."""

    def __init__(self):
        self._lock = threading.RLock()

        # Counters
        self.files_found = 0
        self.submitted_count = 0
        self.completed_count = 0
        self.failed_count = 0

        # Bytes tracking (completed tasks only)
        self.total_input_bytes = 0
        self.total_output_bytes = 0

        # Tasks started but not finished yet, plus failures
        self.active_tasks: List[CompressionTask] = []
        self.failed_tasks: List[CompressionTask] = []

        # Global status
        self.phase = BatchPhase.VALIDATING
        self.budget_seconds = 0
        self.error_message: Optional[str] = None

    @property
    def saved_bytes(self) -> int:
        with self._lock:
            return self.total_input_bytes - self.total_output_bytes

    @property
    def saved_percent(self) -> float:
        with self._lock:
            if self.total_input_bytes == 0:
                return 0.0
            return self.saved_bytes / self.total_input_bytes * 100

    def add_active_task(self, task: CompressionTask):
        with self._lock:
            if task not in self.active_tasks:
                self.active_tasks.append(task)

    def remove_active_task(self, task: CompressionTask):
        with self._lock:
            if task in self.active_tasks:
                self.active_tasks.remove(task)

    def add_completed_task(self, task: CompressionTask):
        with self._lock:
            self.completed_count += 1
            self.total_input_bytes += task.pre_size or 0
            self.total_output_bytes += task.post_size or 0
            self.remove_active_task(task)

    def add_failed_task(self, task: CompressionTask):
        with self._lock:
            self.failed_count += 1
            self.failed_tasks.append(task)
            self.remove_active_task(task)
