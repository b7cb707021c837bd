"""
Public survey pages and the survey state machine.
"""
