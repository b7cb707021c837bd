"""
Per-participant survey invites.
"""
