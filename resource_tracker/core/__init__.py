"""
resource_tracker/core - Collection, rendering and publishing (no console I/O)
"""
