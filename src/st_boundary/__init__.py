"""
ST boundary mapper.

Converts a planning cycle's driving decisions and obstacle predictions into
forbidden regions of the station-time plane for the speed optimizer.
"""

__version__ = "0.1.0"
