"""
Mailing List Core
=================

Core utilities shared by the JSON API and the server bootstrap.
"""

from .config import Config
from .database import Database
from .errors import (
    MailingListError,
    MethodNotAllowed,
    InvalidArgument,
    StorageFailure,
    SerializationFailure,
)
from .logging_service import configure_logging, log_api_call
from .models import EmailEntry, BatchQuery

__all__ = [
    'Config',
    'Database',
    'EmailEntry',
    'BatchQuery',
    'MailingListError',
    'MethodNotAllowed',
    'InvalidArgument',
    'StorageFailure',
    'SerializationFailure',
    'configure_logging',
    'log_api_call',
]
