from pathlib import Path
from typing import List
from pydantic import BaseModel, Field, field_validator

class GeneralConfig(BaseModel):
    directories: List[Path] = Field(default_factory=list)
    # Range 0-7 is enforced by the preflight check, not here
    level: int = 2
    suffix: str = ".png"
    terminate_on_timeout: bool = False
    debug: bool = False

    @field_validator('suffix')
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        if not v:
            raise ValueError("Suffix must not be empty.")
        return v

class ToolConfig(BaseModel):
    executable: str = "optipng"
    level_flag: str = "-o"

class TimeoutConfig(BaseModel):
    base_per_task: int = Field(default=10, ge=0)
    per_level_factor: int = Field(default=5, ge=0)

class AppConfig(BaseModel):
    general: GeneralConfig = Field(default_factory=GeneralConfig)
    tool: ToolConfig = Field(default_factory=ToolConfig)
    timeout: TimeoutConfig = Field(default_factory=TimeoutConfig)
