"""
Logging setup for the mailing list server.
Adds request context (client address, method, path) to every record
emitted while a Flask request is being handled.
"""

import logging
import sys
from flask import request, has_request_context

LOG_FORMAT = '%(asctime)s [mailinglist] %(levelname)s %(name)s %(request_info)s%(message)s'


class RequestContextFilter(logging.Filter):
    """Attach request details to log records"""

    def filter(self, record):
        record.request_info = ''
        if not has_request_context():
            return True

        try:
            ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            if ip_address and ',' in ip_address:
                ip_address = ip_address.split(',')[0].strip()
            record.request_info = f"[{ip_address} {request.method} {request.path}] "
        except RuntimeError:
            pass
        return True


def configure_logging(level='INFO'):
    """
    Install a stream handler on the root logger.

    Safe to call more than once, the previous handler installed here is
    replaced rather than duplicated.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, '_mailinglist', False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler._mailinglist = True
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestContextFilter())
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def log_api_call(source, endpoint, method='GET', status_code=200):
    """Log an API call at a level derived from its status code"""
    message = f"API {method} {endpoint} - Status: {status_code}"
    if 200 <= status_code < 400:
        level = logging.INFO
    elif status_code < 500:
        level = logging.WARNING
    else:
        level = logging.ERROR
    logging.getLogger(source).log(level, message)
