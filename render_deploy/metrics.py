from prometheus_client import CollectorRegistry, Counter, write_to_textfile

REGISTRY = CollectorRegistry()

DEPLOY_TRIGGER_COUNTER = Counter(
    'render_deploy_triggered_total',
    'Total number of deploys triggered',
    registry=REGISTRY,
)

DEPLOY_LOOKUP_COUNTER = Counter(
    'render_deploy_fallback_lookups_total',
    'Total number of latest-deploy lookups after an empty trigger response',
    registry=REGISTRY,
)

STATUS_POLL_COUNTER = Counter(
    'render_deploy_status_polls_total',
    'Total number of deploy status requests',
    registry=REGISTRY,
)

DEPLOY_OUTCOME_COUNTER = Counter(
    'render_deploy_outcomes_total',
    'Deploy runs by final outcome',
    ['outcome'],
    registry=REGISTRY,
)


def write_metrics(path: str) -> None:
    write_to_textfile(path, REGISTRY)
