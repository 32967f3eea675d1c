"""
Exceptions raised by pyforestbuilder.
"""


class ForestBuildError(RuntimeError):
    """Raised when a forest build is misused or its result is incomplete."""
