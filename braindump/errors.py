"""Error taxonomy for canvas resolution and idea capture.

Every Slack failure that crosses the CanvasStore boundary is re-raised as one
of these, with the original SlackApiError chained as ``__cause__``.
"""

from typing import Optional


class BrainDumpError(Exception):
    """Base class for all brain dump errors."""

    @property
    def slack_error(self) -> Optional[str]:
        """Slack error code (e.g. 'canvas_not_found') if caused by a Slack API error."""
        cause = self.__cause__
        if isinstance(cause, BrainDumpError):
            return cause.slack_error
        response = getattr(cause, "response", None)
        if response is None:
            return None
        try:
            return response.get("error")
        except AttributeError:
            return None


class ProbeFailure(BrainDumpError):
    """The cached canvas could not be confirmed to exist.

    Treated as "does not exist": the cache is cleared and a new canvas is created.
    """


class CreationFailure(BrainDumpError):
    """A canvas acquisition tier failed."""

    def __init__(self, message: str, tier: Optional[str] = None):
        super().__init__(message)
        self.tier = tier


class ShareFailure(BrainDumpError):
    """Granting the channel access to a standalone canvas failed (advisory)."""


class DeliveryFailure(BrainDumpError):
    """A chat message (announcement or ephemeral acknowledgment) was not posted."""


class AppendFailure(BrainDumpError):
    """Appending an idea fragment to the canvas failed."""


class ResolutionError(BrainDumpError):
    """Every acquisition tier failed.

    Attributes:
        original: The first tier's error, the most informative root cause
    """

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.original = original
