"""
freshcart.api

API package for the Fresh Cart service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + delegation to services.
# Authentication happens before routing, in `auth.middleware`.
