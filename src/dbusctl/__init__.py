"""dbusctl — call D-Bus methods from the command line.

Arguments are supplied as ``type:value`` strings and encoded into a
typed message body before being sent over the bus.
"""

from dbusctl.version import __version__

__all__: list[str] = ["__version__"]
