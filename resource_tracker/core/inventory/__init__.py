"""
resource_tracker/core/inventory - Resource collection

Classes:
    - InventoryCollector: builds the four report sections
    - EC2Instance, S3Bucket, LambdaFunction, IAMUser: row records

Usage:
    from resource_tracker.core.inventory import InventoryCollector

    collector = InventoryCollector(session, regions, owner_ids)
    results = collector.collect_all()
"""

from .collector import InventoryCollector, SectionResult
from .types import EC2Instance, IAMUser, LambdaFunction, S3Bucket

__all__ = [
    # Collector
    "InventoryCollector",
    "SectionResult",
    # Types
    "EC2Instance",
    "S3Bucket",
    "LambdaFunction",
    "IAMUser",
]
