"""Runtime package.

Settings loading, logging setup and dependency construction. Nothing here
opens sockets; the server module owns the event loop.
"""

__all__: list[str] = []
