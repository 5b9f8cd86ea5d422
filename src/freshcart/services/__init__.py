"""
freshcart.services

Service layer (transaction owners).
"""

# Package marker.
