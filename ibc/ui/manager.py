import logging
from ibc.infrastructure.event_bus import EventBus
from ibc.ui.state import RunState
from ibc.domain.events import (
    PhaseChanged, DiscoveryFinished, TaskStarted, TaskCompleted, TaskFailed, BatchFinished
)

logger = logging.getLogger(__name__)

class UIManager:
    """Subscribes to EventBus and updates RunState."""

    def __init__(self, bus: EventBus, state: RunState):
        self.bus = bus
        self.state = state
        self._setup_subscriptions()

    def _setup_subscriptions(self):
        self.bus.subscribe(PhaseChanged, self.on_phase_changed)
        self.bus.subscribe(DiscoveryFinished, self.on_discovery_finished)
        self.bus.subscribe(TaskStarted, self.on_task_started)
        self.bus.subscribe(TaskCompleted, self.on_task_completed)
        self.bus.subscribe(TaskFailed, self.on_task_failed)
        self.bus.subscribe(BatchFinished, self.on_batch_finished)

    def on_phase_changed(self, event: PhaseChanged):
        with self.state._lock:
            self.state.phase = event.phase

    def on_discovery_finished(self, event: DiscoveryFinished):
        logger.debug(f"UI: discovery finished, {event.files_found} file(s) in {len(event.directories)} dir(s)")
        with self.state._lock:
            self.state.files_found = event.files_found

    def on_task_started(self, event: TaskStarted):
        self.state.add_active_task(event.task)

    def on_task_completed(self, event: TaskCompleted):
        self.state.add_completed_task(event.task)

    def on_task_failed(self, event: TaskFailed):
        self.state.add_failed_task(event.task)

    def on_batch_finished(self, event: BatchFinished):
        with self.state._lock:
            self.state.phase = event.phase
            self.state.submitted_count = event.submitted
            self.state.budget_seconds = event.budget_seconds
            self.state.error_message = event.error_message or None
