"""
Meeting ingestion from the webhook.

NOTE: keep this lightweight; importing models here maps the ORM at import time.
"""

__all__: list[str] = []
