# minicrm/cli/__init__.py
"""
Command-line layer.

Rule: no store logic here; commands parse input and call ContactStore.
"""
