"""
Exceptions raised across the techgraph boundary.

Recoverable data problems inside edge derivation (unknown ids, duplicate
pairs, self-references) are not errors and never surface here.
"""


class TechGraphError(Exception):
    """Base class for all techgraph errors."""


class DatasetError(TechGraphError):
    """The dataset file is missing, unreadable or has invalid records."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid dataset {path}: {reason}")


class ConfigError(TechGraphError):
    """The configuration file could not be parsed or validated."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration {path}: {reason}")


class NodeNotFoundError(TechGraphError):
    """An operation that requires an existing node was given an unknown id."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id}")
