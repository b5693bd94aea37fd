"""Browser tools server.

Relays screenshot commands from HTTP callers to connected browser extensions
and correlates their asynchronous replies.
"""

__version__ = "2.0.0"

__all__ = ["__version__"]
