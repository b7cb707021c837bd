"""
Admin response browser.
"""
