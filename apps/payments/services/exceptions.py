"""Domain exceptions for payments app."""


class PaymentsServiceError(Exception):
    """Base exception for all payments service errors."""
    pass


class InvalidAmountError(PaymentsServiceError):
    """Amount is negative, non-numeric or not finite."""
    pass


class InvalidRateSchemeError(PaymentsServiceError):
    """Rate scheme name is not one of the known schemes."""
    pass


class PaymentNotFoundError(PaymentsServiceError):
    """Payment application does not exist."""
    pass


class InvalidPaymentDataError(PaymentsServiceError):
    """Payment fields are missing or not recognised."""
    pass


class InvalidStatusError(PaymentsServiceError):
    """Payment or approval status is not a valid choice."""
    pass
