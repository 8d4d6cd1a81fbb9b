"""Application entry point for the pod job tracker webhook server."""

from pod_job_tracker.app import App
from pod_job_tracker.config import Config
from pod_job_tracker.logging import setup_logging
from pod_job_tracker.web.runner import run_server


def main() -> None:
    config = Config(_cli_parse_args=True)
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
