"""
JSON API Routes
===============

Each handler is built by a constructor that receives the shared Database
handle, create_jsonapi_bp() wires them onto a new Blueprint.

Status codes:
- 400 -- malformed body, bad pagination, or the write itself failed
- 405 -- wrong HTTP method, HEAD and OPTIONS included (answered by the
         app, no body)
- 500 -- the read that builds the response failed, or it could not be
         serialized (no body)
"""

import logging
from flask import Blueprint, Response, current_app, request
from werkzeug.exceptions import BadRequest, MethodNotAllowed

from mailinglist.core.errors import (
    InvalidArgument,
    MailingListError,
    SerializationFailure,
    StorageFailure,
)
from mailinglist.core.models import BatchQuery, EmailEntry

logger = logging.getLogger(__name__)


# ===================
# JSON HELPERS
# ===================

def from_json():
    """Decode the request body. An empty body decodes to an empty object."""
    if not request.get_data().strip():
        return {}
    try:
        return request.get_json(force=True)
    except BadRequest:
        raise InvalidArgument("malformed JSON body") from None


def _encode(data):
    if isinstance(data, EmailEntry):
        return data.to_json()
    if isinstance(data, list):
        return [_encode(item) for item in data]
    return data


def json_response(data, status=200):
    try:
        body = current_app.json.dumps(_encode(data))
    except (TypeError, ValueError) as e:
        raise SerializationFailure(str(e)) from e
    return Response(body, status=status, mimetype='application/json')


def return_json(with_data):
    """Run a storage read and answer with its result, or 500 if it fails"""
    try:
        data = with_data()
    except StorageFailure as e:
        return return_err(e, 500)
    return json_response(data)


def return_err(err, code):
    return json_response({'Err': str(err)}, code)


# ===================
# HANDLERS
# ===================

def create_email(db):
    def handler():
        entry = EmailEntry.from_json(from_json())

        try:
            db.create_email(entry.email)
        except StorageFailure as e:
            logger.warning(f"Email create failed: {entry.email}")
            return return_err(e, 400)

        logger.info(f"Email created: {entry.email}")
        return return_json(lambda: db.get_email(entry.email))
    return handler


def get_email(db):
    def handler():
        entry = EmailEntry.from_json(from_json())

        logger.info(f"Get Email: {entry.email}")
        return return_json(lambda: db.get_email(entry.email))
    return handler


def update_email(db):
    def handler():
        entry = EmailEntry.from_json(from_json())

        try:
            db.update_email(entry)
        except StorageFailure as e:
            logger.warning(f"Email update failed: {entry.email}")
            return return_err(e, 400)

        logger.info(f"Email updated: {entry.email}")
        return return_json(lambda: db.get_email(entry.email))
    return handler


def delete_email(db):
    def handler():
        entry = EmailEntry.from_json(from_json())

        try:
            db.delete_email(entry.email)
        except StorageFailure as e:
            logger.warning(f"Email delete failed: {entry.email}")
            return return_err(e, 400)

        logger.info(f"Email deleted: {entry.email}")
        return return_json(lambda: db.get_email(entry.email))
    return handler


def get_email_batch(db):
    def handler():
        params = BatchQuery.from_json(from_json()).validate()

        logger.info(f"Get Email Batch: {params.page}, {params.count}")
        return return_json(lambda: db.get_email_batch(params.page, params.count))
    return handler


# ===================
# ERROR HANDLERS
# ===================

def handle_error(e):
    logger.warning(f"Request rejected: {e}")
    return return_err(e, e.status_code)


def handle_serialization_failure(e):
    logger.error(f"Error serializing response: {e}")
    return Response(status=e.status_code)


ROUTES = [
    ('/create', 'create', create_email, 'POST'),
    ('/get', 'get', get_email, 'GET'),
    ('/get_batch', 'get_batch', get_email_batch, 'GET'),
    ('/update', 'update', update_email, 'PUT'),
    ('/delete', 'delete', delete_email, 'POST'),
]


def create_jsonapi_bp(db, allow_options=False):
    """
    Build the /email blueprint around a Database handle.

    Every route answers exactly one method. Werkzeug adds HEAD to GET
    routes and Flask adds OPTIONS, both are turned away with 405 unless
    ``allow_options`` is set for CORS preflight.
    """
    bp = Blueprint('jsonapi', __name__, url_prefix='/email')
    bound_methods = {}

    for rule, endpoint, handler, method in ROUTES:
        bp.add_url_rule(rule, endpoint, handler(db), methods=[method],
                        provide_automatic_options=allow_options)
        bound_methods[f"{bp.name}.{endpoint}"] = method

    @bp.before_request
    def require_bound_method():
        method = bound_methods.get(request.endpoint)
        if method is None or request.method == method:
            return None
        if request.method == 'OPTIONS' and allow_options:
            return None
        raise MethodNotAllowed(valid_methods=[method])

    bp.register_error_handler(MailingListError, handle_error)
    bp.register_error_handler(SerializationFailure, handle_serialization_failure)
    return bp
