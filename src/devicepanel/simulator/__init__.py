"""In-process stand-in for the companion device's HTTP API."""
