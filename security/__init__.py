"""
security/ - Authentication
==========================
Password hashing and the guard that keeps menu actions behind a login.
"""
