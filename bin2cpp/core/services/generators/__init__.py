"""
Generators: produce the C++ artifacts of an embedded-file registry.

Each generator module exposes a ``generate_*()`` function that returns
a ``GeneratedFile``.  Generators never touch the filesystem.
"""
