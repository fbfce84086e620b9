"""
services/ - Business Layer
==========================
One entity service per table. Services translate screen input into
repository calls and turn storage errors into sentinel return values
unless the caller asks for them to propagate.
"""
