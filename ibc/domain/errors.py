class IbcError(Exception):
    """Base class for all errors raised by IBC."""


class ConfigurationError(IbcError):
    """Raised when the run cannot start: bad directory, bad level, missing tool or bad config."""


class BatchError(IbcError):
    """Raised when the batch as a whole fails after tasks were submitted."""


class BatchTimeoutError(BatchError):
    def __init__(self, budget_seconds: int, pending: int):
        self.budget_seconds = budget_seconds
        self.pending = pending
        super().__init__(
            f"Batch did not finish within {budget_seconds}s ({pending} task(s) still running)"
        )


class BatchInterruptedError(BatchError):
    pass
