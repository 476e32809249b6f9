#
# Application factory and command line entry point
#
# Deployment shapes:
# - file backed: create_app(db_file="db.json"), the file is re-read when it changes
# - stateless: create_app(state={...}), or no arguments for the packaged sample data
#
import argparse
import logging
import sys
from typing import Any, Optional
from flask import Flask
import mockrest
from .api import MockAPI
from .api_init import MockRest
from .config import get_config, get_int_config
from .snapshot import FileSnapshot, Snapshot, StaticSnapshot, sample_snapshot
from .mockrest_types import State


def create_app(state: Optional[State] = None, db_file: Optional[str] = None, snapshot: Optional[Snapshot] = None, **config: Any) -> Flask:
    """
    :param state: embedded state
    :param db_file: JSON or YAML file holding the state
    :param snapshot: custom Snapshot, takes precedence over `state` and `db_file`
    :param config: Flask configuration (API_TITLE, MAX_PAGE_LIMIT, ...)
    :return: Flask app
    """
    app = Flask("mockrest", static_folder=None)
    app.config.update(config)

    with app.app_context():
        if snapshot is None:
            db_file = db_file or get_config("DB_FILE")
            if state is not None:
                snapshot = StaticSnapshot(state)
            elif db_file:
                snapshot = FileSnapshot(db_file)
            else:
                snapshot = sample_snapshot()
        mockrest.log.info(f"Serving {snapshot}")
        MockAPI(app, snapshot)

    return app


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="Serve the collections of a JSON document as a REST API")
    parser.add_argument("db_file", nargs="?", default=get_config("DB_FILE"), help="JSON or YAML file (default: packaged sample data)")
    parser.add_argument("--host", default=get_config("HOST", MockRest.HOST), help="hostname to bind to")
    parser.add_argument("--port", type=int, default=get_int_config("PORT", MockRest.PORT), help="port to listen on")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    if args.debug:
        mockrest.log.setLevel(logging.DEBUG)

    app = create_app(db_file=args.db_file)
    print(f"Mock API running on http://{args.host}:{args.port}", file=sys.stderr)
    print(f"Docs: http://{args.host}:{args.port}{app.extensions['mockrest'].docs_url}", file=sys.stderr)
    app.run(host=args.host, port=args.port, threaded=True)
