"""Test fixtures for arduinokit tests.

This package provides reusable helpers for testing arduinokit components:

- archives: Synthetic release archives (tar.gz and zip) built in memory

Import helpers in your tests using:
    from tests.fixtures.archives import make_tar_gz, tar_entry
"""

__all__ = [
    "archives",
]
