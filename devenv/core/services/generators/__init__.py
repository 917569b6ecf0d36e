"""
Generators — produce files from the resolved install layout.

Each generator module exposes a ``generate()`` function that returns
a ``GeneratedFile``.
"""
