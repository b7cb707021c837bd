"""
Shared infrastructure: configuration-driven database access, logging,
exceptions, middleware and templating.
"""
