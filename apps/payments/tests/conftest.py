import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.payments.services import create_payment


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return a user with the admin role."""
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Register Admin',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def viewer_user(db):
    """Create and return a read-only user."""
    return User.objects.create_user(
        email='viewer@example.com',
        password='TestPass123!',
        display_name='Register Viewer',
        role=UserRole.VIEWER,
    )


@pytest.fixture
def admin_client(admin_user):
    """Return API client authenticated as admin."""
    return _client_for(admin_user)


@pytest.fixture
def viewer_client(viewer_user):
    """Return API client authenticated as viewer."""
    return _client_for(viewer_user)


@pytest.fixture
def payment(db):
    """IPA 24 derived under the revised scheme from a gross of 100,000."""
    return create_payment(
        payment_no='IPA 24',
        description='Payment Application for January 2025',
        gross_amount=Decimal('100000.00'),
        rate_scheme='revised',
        invoice_date=date(2025, 1, 31),
    )


@pytest.fixture
def advance_payment(db):
    """Advance payment drawdown entered by hand."""
    return create_payment(
        payment_no='AP 1',
        description='Advance Payment',
        gross_amount=Decimal('50000.00'),
        auto_calculate=False,
        advance_payment_recovery=Decimal('-10000.00'),
    )
