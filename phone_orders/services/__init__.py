"""
                        Services Module

Business logic behind the HTTP endpoints.

Services:
    - order_store: SQLite persistence of orders
    - tickets: kitchen ticket formatting
    - printing: print channels (PrintNode, webhook, CloudPRNT) and dispatcher
"""

from phone_orders.services.order_store import OrderStore, UpdateResult
from phone_orders.services.tickets import format_kitchen_ticket

__all__ = ["OrderStore", "UpdateResult", "format_kitchen_ticket"]
