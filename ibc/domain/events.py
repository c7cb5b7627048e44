from typing import List
from pathlib import Path
from pydantic import BaseModel, Field
from .models import BatchPhase, CompressionTask

class Event(BaseModel):
    """Base class for all domain events."""
    pass

class PhaseChanged(Event):
    phase: BatchPhase

class TaskEvent(Event):
    task: CompressionTask

class TaskStarted(TaskEvent):
    pass

class TaskCompleted(TaskEvent):
    pass

class TaskFailed(TaskEvent):
    error_message: str

class DiscoveryStarted(Event):
    directory: Path

class DiscoveryFinished(Event):
    files_found: int
    directories: List[Path] = Field(default_factory=list)

class BatchFinished(Event):
    phase: BatchPhase
    submitted: int = 0
    budget_seconds: int = 0
    error_message: str = ""
