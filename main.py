import argparse
import signal
import sys

from loguru import logger

from render_deploy.config import load_dotenv_file, load_settings
from render_deploy.controller import DeployController
from render_deploy.errors import ConfigurationError
from render_deploy.metrics import write_metrics
from render_deploy.reporter import PipelineReporter
from render_deploy.timer import PollTimer


def parse_args(argv=None) -> dict:
    parser = argparse.ArgumentParser(
        description="Trigger a Render deploy and optionally wait for it to go live"
    )
    parser.add_argument("--service-id", dest="service-id")
    parser.add_argument("--api-key", dest="api-key")
    parser.add_argument("--wait-for-success", dest="wait-for-success")
    parser.add_argument("--api-base-url", dest="api-base-url")
    parser.add_argument("--poll-interval", dest="poll-interval")
    parser.add_argument("--max-polls", dest="max-polls")
    parser.add_argument("--request-timeout", dest="request-timeout")
    return {k: v for k, v in vars(parser.parse_args(argv)).items() if v}


def configure_logging(level: str = "INFO"):
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format="{time:HH:mm:ss} | {level: <8} | {message}")


def main(argv=None) -> int:
    load_dotenv_file()
    configure_logging()
    reporter = PipelineReporter()

    try:
        settings = load_settings(parse_args(argv))
    except ConfigurationError as e:
        reporter.set_failed(str(e))
        return reporter.exit_code

    configure_logging(settings.log_level)

    timer = PollTimer()
    signal.signal(signal.SIGTERM, lambda signum, frame: timer.cancel())

    controller = DeployController(settings, reporter=reporter, timer=timer)
    try:
        exit_code = controller.run()
    finally:
        controller.client.close()

    if settings.metrics_file:
        try:
            write_metrics(settings.metrics_file)
        except OSError as e:
            logger.warning(f"Could not write metrics to {settings.metrics_file}: {e}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
