"""
chirpy.services

Service layer.

Responsibilities:
- Own transactions and business rules (signup/login, moderated chirp creation).
"""

# Package marker.
