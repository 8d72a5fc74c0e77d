"""
arduinokit - provision the arduino-cli binary on demand.

Resolves the release artifact matching the host, downloads it once into a
per-user cache, extracts the executable and hands back its path.
"""

try:
    from importlib.metadata import version

    __version__ = version("arduinokit")
except Exception:
    __version__ = "0.1.0"
