import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.payments.models import PaymentStatus
from apps.payments.services import create_payment
from apps.projects.services import upsert_project_details
from apps.variations.models import VOStatus
from apps.variations.services import create_variation_order


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def dashboard_user(db):
    return User.objects.create_user(
        email='dashboard_user@example.com',
        password='TestPass123!',
        display_name='Dashboard User',
        role=UserRole.VIEWER,
    )


@pytest.fixture
def dashboard_client(api_client, dashboard_user):
    """Return API client authenticated as dashboard user."""
    refresh = RefreshToken.for_user(dashboard_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def dashboard_project(db):
    """Contract worth 1,000,000 with 200,000 advance and 5% retention (cap 50,000)."""
    details, _ = upsert_project_details(
        project_code='DASH',
        original_contract_value=Decimal('900000.00'),
        revised_contract_value=Decimal('1000000.00'),
        advance_payment_total=Decimal('200000.00'),
        retention_percent=Decimal('5.00'),
    )
    return details


@pytest.fixture
def dashboard_payments(db):
    """Advance drawdown plus two interim payments under the revised rates."""
    return [
        create_payment(
            payment_no='AP 1',
            description='Advance Payment',
            gross_amount=Decimal('200000.00'),
            auto_calculate=False,
            payment_status=PaymentStatus.PAID,
        ),
        create_payment(
            payment_no='IPA 1',
            description='Payment Application for January 2025',
            gross_amount=Decimal('100000.00'),
            payment_status=PaymentStatus.PAID,
            invoice_date=date(2025, 1, 31),
        ),
        create_payment(
            payment_no='IPA 2',
            description='Payment Application for February 2025',
            gross_amount=Decimal('200000.00'),
            payment_status=PaymentStatus.SUBMITTED,
            invoice_date=date(2025, 2, 28),
        ),
    ]


@pytest.fixture
def dashboard_variations(db):
    return [
        create_variation_order(subject='Pumps', proposal_value=Decimal('1000.00')),
        create_variation_order(
            subject='Cladding',
            proposal_value=Decimal('5000.00'),
            approved_amount=Decimal('4000.00'),
            status=VOStatus.APPROVED_AWAITING_DVO,
        ),
    ]
