import logging
import subprocess
from ibc.domain.errors import ConfigurationError
from ibc.infrastructure.optipng import OptipngAdapter

LEVEL_LOWER_BOUND = 0
LEVEL_UPPER_BOUND = 7

class PreflightValidator:
    """Checks that must pass before any directory is scanned."""

    def __init__(
        self,
        optipng_adapter: OptipngAdapter,
        lower_bound: int = LEVEL_LOWER_BOUND,
        upper_bound: int = LEVEL_UPPER_BOUND,
    ):
        self.optipng_adapter = optipng_adapter
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self.logger = logging.getLogger(__name__)

    def check_tool(self):
        """Probes the executable once; a non-zero exit means it is not installed."""
        executable = self.optipng_adapter.executable
        try:
            return_code = self.optipng_adapter.probe()
        except (OSError, subprocess.SubprocessError) as e:
            raise ConfigurationError(f"Failed to verify {executable} installation: {e}") from e
        if return_code != 0:
            raise ConfigurationError(f"Could not find {executable} on this system")

    def check_level(self, level: int):
        if not self.lower_bound <= level <= self.upper_bound:
            raise ConfigurationError(
                f"Invalid level {level}. Must be >= {self.lower_bound} and <= {self.upper_bound}"
            )

    def run(self, level: int):
        self.check_tool()
        self.check_level(level)
        self.logger.debug(f"Preflight passed: {self.optipng_adapter.executable} available, level={level}")
