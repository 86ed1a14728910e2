"""Homelist — property-listing marketplace backend.

Users register, log in with email/password, and manage the property
listings they own. Bearer JWTs carry identity; every listing mutation
goes through a single ownership check.
"""

__version__ = "0.1.0"
