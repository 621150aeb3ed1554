import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.payments.services import create_payment
from apps.variations.models import VOStatus
from apps.variations.services import create_variation_order


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def export_admin_client(db):
    """Return API client authenticated as admin."""
    user = User.objects.create_user(
        email='export_admin@example.com',
        password='TestPass123!',
        role=UserRole.ADMIN,
    )
    return _client_for(user)


@pytest.fixture
def export_viewer_client(db):
    """Return API client authenticated as a viewer."""
    user = User.objects.create_user(
        email='export_viewer@example.com',
        password='TestPass123!',
    )
    return _client_for(user)


@pytest.fixture
def export_payments(db):
    return [
        create_payment(
            payment_no='IPA 1',
            description='Payment Application for January 2025',
            gross_amount=Decimal('100000.00'),
            invoice_date=date(2025, 1, 31),
            remarks='Certified by RSG',
        ),
        create_payment(
            payment_no='IPA 2',
            description='Payment Application for February 2025',
            gross_amount=Decimal('1000.00'),
        ),
    ]


@pytest.fixture
def export_variations(db):
    return [
        create_variation_order(
            subject='Pumps',
            submission_reference='VO-001',
            submission_date=date(2024, 3, 1),
            proposal_value=Decimal('1000.00'),
        ),
        create_variation_order(
            subject='Cladding',
            submission_reference='VO-002',
            submission_date=date(2024, 4, 1),
            proposal_value=Decimal('5000.00'),
            approved_amount=Decimal('4000.00'),
            status=VOStatus.DVO_RR_ISSUED,
        ),
    ]
