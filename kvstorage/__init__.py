"""In-memory key-value storage node: store, replication services, handlers and configuration."""

__version__ = "0.1.0"