"""
Variations services - Business logic layer.

This package contains all business operations for the variations app:
- Variation order CRUD and register queries
- Approval-stage document uploads
- Status statistics
"""

from .vo_management import (
    create_variation_order,
    get_variation_order_by_id,
    update_variation_order,
    delete_variation_order,
    attach_variation_order_file,
    list_variation_orders,
)
from .statistics import (
    get_variation_order_statistics,
    DASHBOARD_STATUS_LABELS,
)
from .exceptions import (
    VariationsServiceError,
    VariationOrderNotFoundError,
    InvalidVariationOrderError,
)

__all__ = [
    # Variation Order Management
    'create_variation_order',
    'get_variation_order_by_id',
    'update_variation_order',
    'delete_variation_order',
    'attach_variation_order_file',
    'list_variation_orders',
    # Statistics
    'get_variation_order_statistics',
    'DASHBOARD_STATUS_LABELS',
    # Exceptions
    'VariationsServiceError',
    'VariationOrderNotFoundError',
    'InvalidVariationOrderError',
]
