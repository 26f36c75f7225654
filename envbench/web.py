"""
Flask application serving the benchmark report over HTTP.

Settings come from ``MYSQLCONNSTR_*`` connection strings and the query
string, the query string taking precedence:

    GET /?multiplier=0.5&output_width=80

Run with ``python -m envbench.web`` or point any WSGI server at
``envbench.web:app``.
"""

import io
import logging
import os
from typing import Any, Dict, Mapping

from flask import Flask, Response, request

from .config import ConfigurationError, connection_string_settings, resolve_configuration
from .session import run_benchmarks

logger = logging.getLogger(__name__)

app = Flask(__name__)


def query_settings(args) -> Dict[str, str]:
    """Query parameters as settings; the last value of a repeated key wins."""
    return {key: args.getlist(key)[-1] for key in args.keys()}


def request_settings(environ: Mapping[str, Any], args) -> Dict[str, str]:
    """
    Merge the request's settings sources.

    Later sources win: connection strings from the process environment,
    then connection strings from the request environ, then the query string.
    """
    settings: Dict[str, str] = {}
    settings.update(connection_string_settings(os.environ))
    settings.update(connection_string_settings(environ))
    settings.update(query_settings(args))
    return settings


def server_description(environ: Mapping[str, Any]) -> str:
    name = environ.get("SERVER_NAME") or "null"
    addr = environ.get("SERVER_ADDR") or "null"
    return f"{name}@{addr}"


@app.route("/", methods=["GET"])
def report() -> Response:
    """Run the benchmarks and return the report as text/plain."""
    try:
        config = resolve_configuration(request_settings(request.environ, request.args))
    except ConfigurationError as e:
        logger.warning(f"Rejected request: {e}")
        return Response(f"Error: {e}\n", status=400, mimetype="text/plain")

    buffer = io.StringIO()
    run_benchmarks(config, stream=buffer, server=server_description(request.environ))
    return Response(buffer.getvalue(), mimetype="text/plain")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    host = os.getenv("ENVBENCH_HOST", "127.0.0.1")
    port = int(os.getenv("ENVBENCH_PORT", "8000"))
    logger.info(f"Starting envbench at http://{host}:{port}/")
    app.run(host=host, port=port, use_reloader=False)
