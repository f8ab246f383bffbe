"""
chirpy.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation and the file-server hit counter.
"""

# Package marker.
