"""
Survey email delivery.
"""
