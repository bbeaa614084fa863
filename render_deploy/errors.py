# render_deploy/errors.py
"""Errors raised while triggering or watching a deploy.

Every error is fatal to the run. The controller turns them into a single
failure signal on the pipeline reporter.
"""
from typing import Optional

EXCERPT_LENGTH = 200


def excerpt(text: Optional[str], length: int = EXCERPT_LENGTH) -> str:
    return (text or "")[:length]


class DeployError(Exception):
    """Base class for everything the deploy run reports as a failure."""


class ConfigurationError(DeployError):
    pass


class AuthError(DeployError):
    def __init__(self, message: str = "Render Deploy Action: Unauthorized. Please check your API key."):
        super().__init__(message)


class HttpError(DeployError):
    def __init__(self, status_code: int, body: str, prefix: str = "Deploy error"):
        self.status_code = status_code
        self.body = excerpt(body)
        super().__init__(f"{prefix} (HTTP {status_code}): {self.body}")


class MalformedResponseError(DeployError):
    def __init__(
        self,
        status_code: Optional[int],
        body: str,
        reason: str = "non-JSON response",
    ):
        self.status_code = status_code
        self.body = excerpt(body)
        if status_code is None:
            message = f"Render API returned {reason}: {self.body}"
        else:
            message = f"Render API returned {reason} (HTTP {status_code}): {self.body}"
        super().__init__(message)


class EmptyResultError(DeployError):
    def __init__(self, message: str = "No deploys found after triggering deploy"):
        super().__init__(message)


class TerminalFailure(DeployError):
    """The deploy reached a terminal status that is not ``live``."""

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Deploy status: {status}")


class PollLimitExceeded(DeployError):
    def __init__(self, attempts: int, status: Optional[str]):
        self.attempts = attempts
        self.status = status
        super().__init__(
            f"Deploy did not finish after {attempts} status checks (last status: {status})"
        )


class PollCancelled(DeployError):
    def __init__(self, status: Optional[str]):
        self.status = status
        super().__init__(f"Stopped waiting for deploy (last status: {status})")
