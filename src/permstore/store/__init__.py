"""Store layer.

Path resolution, permission enforcement and lazy value resolution for the
hierarchical store live here. Everything outside this package is ambient
support (configuration, errors, logging helpers).
"""
