import os
from dotenv import load_dotenv

from .errors import InvalidArgument

load_dotenv()


def _split_origins(value):
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    """
    Runtime configuration for the mailing list server.
    Values are read from the environment (or a .env file); command-line
    arguments given to the ``mailinglist`` script take precedence.
    """
    # Database path
    DB_PATH = os.getenv('MAILINGLIST_DB') or 'list.db'

    # JSON API bind address, ":8080" listens on every interface
    BIND_JSON = os.getenv('MAILINGLIST_BIND_JSON') or ':8080'

    LOG_LEVEL = os.getenv('MAILINGLIST_LOG_LEVEL') or 'INFO'

    # Comma separated list, empty disables CORS headers
    CORS_ORIGINS = _split_origins(os.getenv('MAILINGLIST_CORS_ORIGINS', ''))


def parse_bind(bind):
    """
    Split a bind address into (host, port).

    ":8080" binds every interface, "127.0.0.1:8080" and "[::1]:8080"
    bind a single one.
    """
    host, sep, port = (bind or '').strip().rpartition(':')
    if not sep or not port.isdigit() or int(port) > 65535:
        raise InvalidArgument(f"invalid bind address: {bind!r}")
    host = host.strip('[]') or '0.0.0.0'
    return host, int(port)
