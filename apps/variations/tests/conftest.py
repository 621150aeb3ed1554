import pytest
from datetime import date
from decimal import Decimal
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.variations.models import SubmissionType, VOStatus
from apps.variations.services import create_variation_order


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
def vo_admin(db):
    return User.objects.create_user(
        email='vo_admin@example.com',
        password='TestPass123!',
        display_name='VO Admin',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def vo_viewer(db):
    return User.objects.create_user(
        email='vo_viewer@example.com',
        password='TestPass123!',
        display_name='VO Viewer',
    )


@pytest.fixture
def vo_admin_client(vo_admin):
    """Return API client authenticated as admin."""
    return _client_for(vo_admin)


@pytest.fixture
def vo_viewer_client(vo_viewer):
    """Return API client authenticated as a viewer."""
    return _client_for(vo_viewer)


@pytest.fixture
def pending_vo(db):
    """VO waiting on the contractor."""
    return create_variation_order(
        subject='Additional fire-fighting pumps',
        submission_reference='VO-001',
        submission_date=date(2024, 3, 1),
        proposal_value=Decimal('1250000.00'),
        status=VOStatus.PENDING_WITH_FFC,
    )


@pytest.fixture
def rsg_vo(db):
    """VO waiting on the employer, submitted as correspondence."""
    return create_variation_order(
        subject='Revised facade cladding',
        submission_type=SubmissionType.GEN_CORR,
        submission_reference='GC-014',
        submission_date=date(2024, 5, 1),
        proposal_value=Decimal('3480000.00'),
        status=VOStatus.PENDING_WITH_RSG,
    )


@pytest.fixture
def approved_vo(db):
    """VO with a DVO issued."""
    return create_variation_order(
        subject='Substation relocation',
        submission_reference='VO-002',
        submission_date=date(2024, 4, 1),
        proposal_value=Decimal('2100000.00'),
        approved_amount=Decimal('1875000.00'),
        status=VOStatus.DVO_RR_ISSUED,
        dvo_reference='DVO-007',
        dvo_issued_date=date(2024, 8, 20),
    )


@pytest.fixture
def media_root(settings, tmp_path):
    """Send uploaded documents to a temporary directory."""
    settings.MEDIA_ROOT = tmp_path
    return tmp_path


@pytest.fixture
def pdf_upload():
    return SimpleUploadedFile('Assessment Letter.PDF', b'%PDF-1.4 assessment', content_type='application/pdf')
