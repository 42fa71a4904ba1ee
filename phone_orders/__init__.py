"""
                Phone Order Relay

Receives phone orders from a voice assistant webhook, stores them in
SQLite, prints kitchen tickets and serves the kitchen dashboard API.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
