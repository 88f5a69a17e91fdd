"""
resource_tracker/core/inventory/services - Per-service collection functions

Each function performs the AWS calls for one resource kind and returns a
CallResult; none of them raise on AWS errors.
"""

from .ec2 import collect_ec2_instances
from .iam import collect_iam_users
from .lambda_ import collect_lambda_functions
from .s3 import collect_s3_buckets
from .sts import UNKNOWN_CALLER, get_caller_identity

__all__: list[str] = [
    "collect_ec2_instances",
    "collect_s3_buckets",
    "collect_lambda_functions",
    "collect_iam_users",
    "get_caller_identity",
    "UNKNOWN_CALLER",
]
