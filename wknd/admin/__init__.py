"""
Admin Dashboard Module

Back-office endpoints for the 234 WKND team, available to accounts flagged
as admins:

- Customer, ticket, payment and inbox listings
- Dashboard counters (customers, tickets, revenue, unanswered messages)
- Email replies to contact form messages
- CSV export of users, tickets and payments
"""

from . import router, schemas, admin_service

__all__ = [
    "router",
    "schemas",
    "admin_service",
]
