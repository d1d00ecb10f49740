"""Service building blocks: consumer and API configuration, a task heap, a retrying executor and binlog position files."""

__version__ = "0.1.0"