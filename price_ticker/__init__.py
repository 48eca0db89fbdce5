"""
Price Ticker - Resilient single-metric polling console

Periodically fetches the bitcoin price from an HTTP/JSON endpoint, displays
it, and waits a fixed interval before polling again. Shutdown is cooperative:
an OS signal or a `q` typed on standard input stops the loop cleanly.
"""

__version__ = "0.1.0"
__author__ = "Price Ticker Team"
