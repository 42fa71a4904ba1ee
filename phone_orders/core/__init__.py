"""
Core module initialization.
Exports configuration and logging utilities.
"""

from phone_orders.core.config import get_settings, Settings, PrintMethod

__all__ = ["get_settings", "Settings", "PrintMethod"]
