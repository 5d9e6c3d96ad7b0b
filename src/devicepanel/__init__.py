"""devicepanel -- Operator console for a Wi-Fi companion device.

This package polls the companion board's HTTP API for status, counters
and the last-issued command, renders them as key/value tables, and lets
an operator send named commands or reset the counters.
"""

__version__ = "0.1.0"
