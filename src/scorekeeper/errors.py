"""Exception types shared across scorekeeper."""


class ScorekeeperError(Exception):
    """Base class for scorekeeper errors."""


class ConfigError(ScorekeeperError):
    """Configuration error."""


class SubmissionTimeoutError(ScorekeeperError):
    """A submitted extrinsic did not finalize within the allowed time."""
