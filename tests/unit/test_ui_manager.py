import io
from pathlib import Path
from rich.console import Console
from ibc.infrastructure.event_bus import EventBus
from ibc.ui.state import RunState
from ibc.ui.manager import UIManager
from ibc.ui.summary import Summary, format_size
from ibc.domain.events import DiscoveryFinished, TaskStarted, TaskCompleted, TaskFailed, BatchFinished
from ibc.domain.models import ImageFile, CompressionTask, TaskOutcome, BatchPhase

def make_task(name="a.png"):
    return CompressionTask(image=ImageFile(path=Path(name)), level=2)

def test_ui_manager_updates_state_on_event():
    bus = EventBus()
    state = RunState()
    UIManager(bus, state)

    task = make_task()
    bus.publish(DiscoveryFinished(files_found=2))
    bus.publish(TaskStarted(task=task))
    assert state.files_found == 2
    assert len(state.active_tasks) == 1

    task.pre_size, task.post_size = 1024, 768
    task.outcome = TaskOutcome.SUCCESS
    bus.publish(TaskCompleted(task=task))

    assert state.active_tasks == []
    assert state.completed_count == 1
    assert state.saved_bytes == 256
    assert state.saved_percent == 25.0

def test_ui_manager_counts_failures():
    bus = EventBus()
    state = RunState()
    UIManager(bus, state)

    task = make_task("broken.png")
    task.outcome = TaskOutcome.SPAWN_FAILED
    bus.publish(TaskFailed(task=task, error_message="Failed to start a process"))
    bus.publish(BatchFinished(phase=BatchPhase.COMPLETED, submitted=1, budget_seconds=20))

    assert state.failed_count == 1
    assert state.failed_tasks == [task]
    assert state.phase == BatchPhase.COMPLETED
    assert state.submitted_count == 1
    assert state.budget_seconds == 20
    assert state.error_message is None

def test_format_size():
    assert format_size(0) == "0B"
    assert format_size(512) == "512.0B"
    assert format_size(1024) == "1.0KB"
    assert format_size(-2048) == "-2.0KB"

def test_summary_renders_counts_and_failures():
    state = RunState()
    state.files_found = 3
    state.submitted_count = 3
    state.phase = BatchPhase.COMPLETED
    failed = make_task("broken.png")
    failed.outcome = TaskOutcome.WAIT_FAILED
    state.add_failed_task(failed)

    buffer = io.StringIO()
    Summary(state, console=Console(file=buffer, width=80)).print()
    output = buffer.getvalue()

    assert "COMPLETED" in output
    assert "Files found" in output
    assert "broken.png" in output
    assert "WAIT_FAILED" in output

def test_summary_lists_tasks_still_running():
    bus = EventBus()
    state = RunState()
    UIManager(bus, state)

    bus.publish(TaskStarted(task=make_task("slow.png")))
    bus.publish(BatchFinished(phase=BatchPhase.FAILED, submitted=1, budget_seconds=10,
                              error_message="Batch did not finish within 10s (1 task(s) still running)"))

    buffer = io.StringIO()
    Summary(state, console=Console(file=buffer, width=80)).print()
    output = buffer.getvalue()

    assert "FAILED" in output
    assert "Still running" in output
    assert "slow.png" in output
    assert "RUNNING" in output
