"""
chirpy.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories for users and chirps.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories flush but never commit; the service layer owns the transaction.
