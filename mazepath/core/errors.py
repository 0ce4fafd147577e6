# mazepath/core/errors.py
#!/usr/bin/env python3


class MazepathError(Exception):
    """Base class for every error raised by mazepath."""


class ConfigError(MazepathError, ValueError):
    """Bad configuration value (unknown heuristic, bad connectivity, ...)."""


class MapError(MazepathError, ValueError):
    """Map or image that cannot be turned into a searchable grid."""


class BrokenChainError(MazepathError, LookupError):
    """Predecessor chain does not lead back to the origin."""

    def __init__(self, cell, origin):
        super().__init__(f"no predecessor recorded for {cell} while walking back to {origin}")
        self.cell = cell
        self.origin = origin
