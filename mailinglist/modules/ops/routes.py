"""
Ops Routes
==========

Public health endpoint.
"""

import time
from datetime import datetime, timezone

from flask import Blueprint, jsonify

from mailinglist.core.errors import StorageFailure


def _build_health_response(db, started_at):
    """Collect health checks. Returns (data, overall_status)."""
    checks = {}
    status = 'ok'

    try:
        db.ping()
        checks['database'] = {'status': 'ok', 'path': db.path}
    except StorageFailure as e:
        checks['database'] = {'status': 'critical', 'path': db.path, 'error': str(e)}
        status = 'critical'

    checks['uptime'] = {'seconds': int(time.time() - started_at)}

    data = {
        'status': status,
        'checks': checks,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }
    return data, status


def create_health_bp(db):
    """Build the /health blueprint around a Database handle"""
    bp = Blueprint('ops_health', __name__, url_prefix='/health')
    started_at = time.time()

    @bp.route('/')
    @bp.route('')
    def health_check():
        """Public health endpoint for uptime monitors."""
        data, status = _build_health_response(db, started_at)
        code = 503 if status == 'critical' else 200
        return jsonify(data), code

    return bp
