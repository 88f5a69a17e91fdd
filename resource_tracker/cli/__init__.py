"""
resource_tracker/cli - Command line interface
"""
