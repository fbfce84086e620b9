"""
screens/ - Presentation Layer
=============================
Interactive prompt sequences built with inquirer. Each screen collects and
lightly validates user input, then hands plain data back to system.py.
No persistence happens here beyond the lookups that fill choice lists.
"""
