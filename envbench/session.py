"""
One complete benchmark session: resources, header, cases, summary.
Shared by the CLI and the Flask app.
"""

import logging
from datetime import datetime
from typing import Optional, TextIO

from .benchmark.registry import BenchmarkRegistry
from .benchmark.reporter import Reporter
from .benchmark.runner import BenchmarkRunner, RunResult
from .benchmark.utils import get_environment_info
from .cases import build_registry
from .config import RunConfiguration
from .providers import ResourceSet

logger = logging.getLogger(__name__)


def run_benchmarks(
    config: RunConfiguration,
    stream: Optional[TextIO] = None,
    registry: Optional[BenchmarkRegistry] = None,
    resources: Optional[ResourceSet] = None,
    server: Optional[str] = None,
) -> RunResult:
    """
    Run a full session and write the report to ``stream``.

    Resources are acquired before the header is printed (it shows the
    database status) and released after the summary, also on error.

    Args:
        config: Resolved run configuration
        stream: Output sink (default: stdout)
        registry: Cases to run (default: the built-in catalog)
        resources: External resources (default: built from ``config``)
        server: Server description for the header (default: host name)

    Returns:
        RunResult
    """
    registry = registry if registry is not None else build_registry()
    resources = resources if resources is not None else ResourceSet.from_config(config)
    reporter = Reporter.from_config(config, stream)
    generated_at = datetime.now().astimezone()

    with resources:
        environment = get_environment_info(server)
        reporter.print_header(environment, config, resources.database, generated_at)

        runner = BenchmarkRunner(
            registry,
            reporter=reporter,
            multiplier=config.multiplier,
            resources=resources,
        )
        result = runner.run()
        result.started_at = generated_at
        result.environment = environment
        result.configuration = config.to_dict()

        reporter.print_summary(result)

    return result
