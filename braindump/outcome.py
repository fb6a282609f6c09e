"""Result type separating fatal failures from advisory ones."""

from typing import Any, List, Optional


class Outcome:
    """Result of a canvas tier or a best-effort Slack call.

    An outcome either succeeded (``ok`` is True and ``value`` holds the result)
    or failed (``error`` holds the fatal exception). Independently of that it
    may carry advisory errors: failures that were logged but must not change
    the logical result, such as a canvas share or an ephemeral acknowledgment.

    Example:
        outcome = Outcome.success("F123", advisories=[share_error])
        if outcome.ok:
            cache(outcome.value)
    """

    def __init__(
        self,
        value: Any = None,
        error: Optional[BaseException] = None,
        advisories: Optional[List[BaseException]] = None,
    ):
        self.value = value
        self.error = error
        self.advisories = list(advisories or [])

    @classmethod
    def success(cls, value: Any = None, advisories: Optional[List[BaseException]] = None) -> "Outcome":
        return cls(value=value, advisories=advisories)

    @classmethod
    def failure(cls, error: BaseException, advisories: Optional[List[BaseException]] = None) -> "Outcome":
        return cls(error=error, advisories=advisories)

    @property
    def ok(self) -> bool:
        """True if no fatal error occurred."""
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def __repr__(self) -> str:
        if self.ok:
            return f"Outcome.success({self.value!r}, advisories={len(self.advisories)})"
        return f"Outcome.failure({self.error!r}, advisories={len(self.advisories)})"
