"""
Per-domain repository modules for database access.

Routes and services import these modules directly, e.g.
``from quickdesk.db.repositories import tickets as ticket_repo``.
"""
