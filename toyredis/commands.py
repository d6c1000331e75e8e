"""GET and SET commands and the dispatcher for request lines."""

import logging

logger = logging.getLogger(__name__)


class CommandError(ValueError):
    """A malformed request."""


def command_get(store, tokens, connection_counter):
    """Return the value stored under ``tokens[1]``."""
    if len(tokens) < 2:
        raise CommandError(f"GET query requires a key, got {len(tokens)} tokens")
    if len(tokens) > 2:
        raise CommandError(f"GET query can only specify keyname, got {len(tokens)} tokens")
    key = tokens[1].strip("\n")
    if not key:
        raise CommandError("GET query has no key specified")
    value = store.get(key)
    logger.info("[conn %d] GET %s -> %s", connection_counter, key, value)
    return value


def command_set(store, tokens, connection_counter):
    """Store ``tokens[2]`` under ``tokens[1]`` and return the value."""
    if len(tokens) > 3:
        raise CommandError(f"SET query can only specify key and value, got {len(tokens)} tokens")
    if len(tokens) < 3:
        raise CommandError(f"SET query has too few parameters, got {len(tokens)} tokens")
    value = tokens[2].strip("\n")
    store.set(tokens[1].strip("\n"), value)
    return value


def dispatch(store, message, connection_counter):
    """Run one request line; unknown or malformed requests give ""."""
    tokens = message.split(" ")
    handler = {"GET": command_get, "SET": command_set}.get(tokens[0])
    if handler is None:
        return ""
    try:
        return handler(store, tokens, connection_counter)
    except CommandError as exc:
        logger.error("[conn %d] %s", connection_counter, exc)
        return ""