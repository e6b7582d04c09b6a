"""
Exception types raised by the contentgraph build.
"""


class BuildError(Exception):
    """Base class for errors that abort a build."""
    pass


class ContractViolation(BuildError):
    """Raised when a caller breaks the contract of a core operation.

    These are programmer errors: they abort the whole build and are never
    retried or recovered.
    """
    pass


class StageOrderError(BuildError):
    """Raised when a stage queue runs a stage before one it requires."""
    pass


class BuildAborted(BuildError):
    """Raised by callers that want an aborted build surfaced as an exception."""

    def __init__(self, stage_name: str, cause: BaseException):
        super().__init__(f"Build aborted at stage '{stage_name}': {cause}")
        self.stage_name = stage_name
        self.cause = cause
