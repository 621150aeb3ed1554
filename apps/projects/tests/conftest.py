import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.projects.models import ProjectDetails


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
def project_admin(db):
    return User.objects.create_user(
        email='project_admin@example.com',
        password='TestPass123!',
        display_name='Project Admin',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def project_viewer(db):
    return User.objects.create_user(
        email='project_viewer@example.com',
        password='TestPass123!',
        display_name='Project Viewer',
    )


@pytest.fixture
def project_admin_client(project_admin):
    """Return API client authenticated as project admin."""
    return _client_for(project_admin)


@pytest.fixture
def project_viewer_client(project_viewer):
    """Return API client authenticated as a viewer."""
    return _client_for(project_viewer)


@pytest.fixture
def project(db):
    """Saved project record."""
    return ProjectDetails.objects.create(
        project_code='TWR-01',
        project_name='Tower One',
        contractor='Main Contractor LLC',
        contract_date=date(2023, 1, 15),
        original_contract_value=Decimal('900000.00'),
        revised_contract_value=Decimal('1000000.00'),
        advance_payment_total=Decimal('200000.00'),
        retention_percent=Decimal('5.00'),
    )
