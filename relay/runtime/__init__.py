"""Runtime package.

Keep this module dependency-light: importing `relay.runtime.*` from unit tests
should not open sockets or require provider credentials.
"""

__all__: list[str] = []
