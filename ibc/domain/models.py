from enum import Enum
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class TaskOutcome(str, Enum):
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    SPAWN_FAILED = "SPAWN_FAILED"
    WAIT_FAILED = "WAIT_FAILED"
    FAILED = "FAILED"

class BatchPhase(str, Enum):
    VALIDATING = "VALIDATING"
    SCANNING = "SCANNING"
    EXECUTING = "EXECUTING"
    AWAITING = "AWAITING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

class ImageFile(BaseModel):
    """An image candidate found by the scanner; immutable once listed."""
    model_config = ConfigDict(frozen=True)

    path: Path

class CompressionTask(BaseModel):
    image: ImageFile
    level: int
    outcome: TaskOutcome = TaskOutcome.PENDING
    pre_size: Optional[int] = None
    post_size: Optional[int] = None
    return_code: Optional[int] = None
    error_message: Optional[str] = None

    @property
    def saved_kb(self) -> float:
        if self.pre_size is None or self.post_size is None:
            return 0.0
        return (self.pre_size - self.post_size) / 1024

    @property
    def saved_percent(self) -> float:
        # Empty input files have nothing to save
        if not self.pre_size or self.post_size is None:
            return 0.0
        return self.saved_kb / (self.pre_size / 1024) * 100

class BatchReport(BaseModel):
    phase: BatchPhase
    submitted: int
    budget_seconds: int
    tasks: List[CompressionTask] = Field(default_factory=list)

    @property
    def succeeded(self) -> List[CompressionTask]:
        return [t for t in self.tasks if t.outcome == TaskOutcome.SUCCESS]

    @property
    def failed(self) -> List[CompressionTask]:
        return [t for t in self.tasks if t.outcome != TaskOutcome.SUCCESS]
