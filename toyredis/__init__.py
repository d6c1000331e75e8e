"""An in-memory key-value server with a line-based GET/SET protocol, and a load-test client."""

__version__ = "0.1.0"