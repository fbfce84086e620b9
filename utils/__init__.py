"""
utils/ - Shared Helpers
=======================
Logging setup and the pure display/formatting helpers used by the screens.
"""
