"""
chirpy.auth

Authentication/authorization package.

Responsibilities:
- Password hashing and verification (bcrypt).
- JWT issuing and validation.
- Bearer header extraction and the FastAPI auth dependency (Principal).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here touches the database; the gate is a pure function of headers,
# signing config and the clock.
