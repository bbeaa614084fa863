# render_deploy/controller.py
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from .client import RenderClient
from .config import Settings
from .errors import (
    DeployError,
    EmptyResultError,
    MalformedResponseError,
    PollCancelled,
    PollLimitExceeded,
    TerminalFailure,
)
from .metrics import (
    DEPLOY_LOOKUP_COUNTER,
    DEPLOY_OUTCOME_COUNTER,
    DEPLOY_TRIGGER_COUNTER,
    STATUS_POLL_COUNTER,
)
from .reporter import PipelineReporter
from .schemas import DeployRequestResult, is_live, is_terminal_failure
from .timer import PollTimer


class DeployController:
    """Trigger one deploy and, if asked to, wait until it is live."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[RenderClient] = None,
        reporter: Optional[PipelineReporter] = None,
        timer: Optional[PollTimer] = None,
    ):
        self.settings = settings
        self.client = client or RenderClient(
            settings.api_key,
            settings.service_id,
            base_url=settings.api_base_url,
            timeout=settings.request_timeout,
        )
        self.reporter = reporter or PipelineReporter()
        self.timer = timer or PollTimer()

    def _to_result(self, data) -> DeployRequestResult:
        try:
            result = DeployRequestResult.model_validate(data)
        except ValidationError:
            raise MalformedResponseError(None, str(data), reason="an unexpected deploy payload")
        if not result.id:
            raise MalformedResponseError(None, str(data), reason="a deploy without an id")
        return result

    def trigger_deploy(self) -> DeployRequestResult:
        data = self.client.trigger_deploy()
        DEPLOY_TRIGGER_COUNTER.inc()

        if data is None:
            logger.debug("Empty trigger response, looking up the latest deploy")
            result = self.resolve_latest_deploy()
        else:
            result = self._to_result(data)

        self.reporter.info(f"Deploy triggered for {result.source_description}")
        self.reporter.info(f"Status: {result.status}")
        return result

    def resolve_latest_deploy(self) -> DeployRequestResult:
        DEPLOY_LOOKUP_COUNTER.inc()
        deploys = self.client.list_deploys(limit=1)
        if not deploys:
            raise EmptyResultError()
        return self._to_result(deploys[0])

    def poll_until_terminal(self, deploy_id: str, initial_status: str) -> str:
        """Poll the deploy until it is live or has failed.

        Returns the final status on ``live``; raises TerminalFailure for
        failed, canceled and deactivated deploys.
        """
        self.reporter.info("Waiting for deploy to succeed")

        previous_status = initial_status
        attempts = 0
        while True:
            if self.settings.max_polls is not None and attempts >= self.settings.max_polls:
                raise PollLimitExceeded(attempts, previous_status)

            if not self.timer.wait(self.settings.poll_interval):
                raise PollCancelled(previous_status)

            data = self.client.get_deploy(deploy_id)
            attempts += 1
            STATUS_POLL_COUNTER.inc()
            status = data.get("status")
            if not status or not isinstance(status, str):
                raise MalformedResponseError(None, str(data), reason="a deploy without a status")

            if status != previous_status:
                self.reporter.info(f"Deploy status changed: {status}")
                previous_status = status

            if is_terminal_failure(status):
                raise TerminalFailure(status)

            if is_live(status):
                self.reporter.success("Deploy finished successfully")
                return status

    def run(self) -> int:
        """Run the whole cycle and return the process exit code."""
        try:
            result = self.trigger_deploy()
            if self.settings.wait_for_success:
                outcome = self.poll_until_terminal(result.id, result.status)
            else:
                outcome = "triggered"
        except TerminalFailure as e:
            outcome = e.status
            self.reporter.set_failed(str(e))
        except DeployError as e:
            outcome = "error"
            self.reporter.set_failed(str(e))
        except Exception as e:
            outcome = "error"
            logger.opt(exception=e).debug(f"Fatal error during deploy: {e}")
            self.reporter.set_failed(str(e))

        DEPLOY_OUTCOME_COUNTER.labels(outcome=outcome).inc()
        return self.reporter.exit_code
