"""
Payments services - Business logic layer.

This package contains the payment register operations and the financial
derivation engine:
- Per-record derivation and manual override reconciliation
- Project rollups across the register
- Next payment number suggestion
- Payment CRUD
"""

# Financial derivation engine
from .financials import (
    RateScheme,
    DerivedAmounts,
    RATE_SCHEMES,
    DEFAULT_RATE_SCHEME,
    get_rate_scheme,
    round_money,
    to_amount,
    derive,
    reconcile,
    populate_record,
)

# Project rollups
from .rollups import (
    ProjectConstants,
    PaymentRollups,
    compute_rollups,
    is_advance_payment,
)

# Numbering
from .numbering import (
    PaymentSuggestion,
    next_payment_no,
    suggest_next_payment,
)

# Payment management
from .payment_management import (
    create_payment,
    get_payment_by_id,
    update_payment,
    update_payment_status,
    delete_payment,
    list_payments,
    get_latest_payment,
    get_next_payment_suggestion,
    preview_derivation,
    resolve_rate_scheme,
)

# Domain Exceptions
from .exceptions import (
    PaymentsServiceError,
    InvalidAmountError,
    InvalidRateSchemeError,
    PaymentNotFoundError,
    InvalidPaymentDataError,
    InvalidStatusError,
)

__all__ = [
    # Financial derivation
    'RateScheme',
    'DerivedAmounts',
    'RATE_SCHEMES',
    'DEFAULT_RATE_SCHEME',
    'get_rate_scheme',
    'round_money',
    'to_amount',
    'derive',
    'reconcile',
    'populate_record',
    # Rollups
    'ProjectConstants',
    'PaymentRollups',
    'compute_rollups',
    'is_advance_payment',
    # Numbering
    'PaymentSuggestion',
    'next_payment_no',
    'suggest_next_payment',
    # Payment management
    'create_payment',
    'get_payment_by_id',
    'update_payment',
    'update_payment_status',
    'delete_payment',
    'list_payments',
    'get_latest_payment',
    'get_next_payment_suggestion',
    'preview_derivation',
    'resolve_rate_scheme',
    # Exceptions
    'PaymentsServiceError',
    'InvalidAmountError',
    'InvalidRateSchemeError',
    'PaymentNotFoundError',
    'InvalidPaymentDataError',
    'InvalidStatusError',
]
