"""
Mailing List Server
===================

Builds the Flask app around one Database handle and serves the JSON API.

Run with:
    mailinglist --db-path list.db --bind-json :8080

Or configure through MAILINGLIST_DB and MAILINGLIST_BIND_JSON
(a .env file in the working directory is loaded too).
"""

import argparse
import logging

from flask import Flask, Response, request
from flask_cors import CORS

from .core.config import Config, parse_bind
from .core.database import Database
from .core.errors import InvalidArgument, MethodNotAllowed, StorageFailure
from .core.logging_service import configure_logging, log_api_call
from .modules.jsonapi import create_jsonapi_bp
from .modules.ops import create_health_bp

logger = logging.getLogger(__name__)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def create_app(db, cors_origins=None):
    """
    Create the Flask app. Routes are registered on blueprints built for
    this app only, every handler receives ``db`` explicitly.
    """
    app = Flask(__name__)
    app.config['MAILINGLIST_DB'] = db.path
    app.config['CORS_ORIGINS'] = Config.CORS_ORIGINS if cors_origins is None else cors_origins
    # Keep record fields in Id, Email, ConfirmedAt, OptOut order
    app.json.sort_keys = False

    # OPTIONS is only answered when CORS preflight needs it
    app.register_blueprint(create_jsonapi_bp(db, allow_options=bool(app.config['CORS_ORIGINS'])))
    app.register_blueprint(create_health_bp(db))

    if app.config['CORS_ORIGINS']:
        CORS(app, resources={r"/email/*": {"origins": app.config['CORS_ORIGINS']}})

    @app.errorhandler(405)
    def method_not_allowed(e):
        err = MethodNotAllowed(f"{request.method} not allowed on {request.path}")
        logger.warning(str(err))
        allowed = getattr(e, 'valid_methods', None) or []
        return Response(status=err.status_code, headers={'Allow': ', '.join(allowed)})

    @app.after_request
    def log_request(response):
        log_api_call('mailinglist.api', request.path, request.method, response.status_code)
        return response

    return app


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog='mailinglist',
        description='Mailing list subscriber registry with a JSON API',
    )
    parser.add_argument('--db-path', default=Config.DB_PATH,
                        help='SQLite database file (env: MAILINGLIST_DB, default: list.db)')
    parser.add_argument('--bind-json', default=Config.BIND_JSON,
                        help='JSON API bind address (env: MAILINGLIST_BIND_JSON, default: :8080)')
    parser.add_argument('--log-level', default=Config.LOG_LEVEL, type=str.upper, choices=LOG_LEVELS,
                        help='Logging level (env: MAILINGLIST_LOG_LEVEL, default: INFO)')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        host, port = parse_bind(args.bind_json)
    except InvalidArgument as e:
        logger.critical(f"JSON server failure to bind: {e}")
        raise SystemExit(2)

    logger.info(f"Server running in db path: {args.db_path}")
    try:
        db = Database(args.db_path)
        db.ensure_schema()
    except StorageFailure as e:
        logger.critical(f"Could not prepare database {args.db_path}: {e}")
        raise SystemExit(1)

    app = create_app(db)
    try:
        logger.info(f"Starting JSON API on {args.bind_json}")
        app.run(host=host, port=port, threaded=True)
    finally:
        db.close()


if __name__ == '__main__':
    main()
