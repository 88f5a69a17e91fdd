"""python -m resource_tracker"""

from resource_tracker.cli.app import main

main()
