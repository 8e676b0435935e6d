"""
Error taxonomy shared by the storage layer and the JSON API.

Each error carries the HTTP status the JSON API answers with by default.
Storage failures are answered with 400 when the write itself fails and
with 500 when the read that builds the response fails.
"""


class MailingListError(Exception):
    """Base class for every error the registry raises on purpose"""
    status_code = 500


class MethodNotAllowed(MailingListError):
    """Request used an HTTP verb the route is not bound to"""
    status_code = 405


class InvalidArgument(MailingListError):
    """Malformed request body, wrong field types or bad pagination"""
    status_code = 400


class StorageFailure(MailingListError):
    """Constraint violation, connection error or query error from the store"""
    status_code = 400


class SerializationFailure(MailingListError):
    """Response data could not be encoded as JSON"""
    status_code = 500
