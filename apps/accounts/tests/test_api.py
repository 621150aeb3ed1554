import pytest
from django.urls import reverse
from rest_framework import status


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Login returns the profile and a token pair."""
        url = reverse('users:login')
        data = {'email': 'testuser@example.com', 'password': 'TestPass123!'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['role'] == 'viewer'
        assert response.data['user']['is_admin_role'] is False

        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_email_case_insensitive(self, api_client, admin_user):
        url = reverse('users:login')
        data = {'email': 'ADMIN@example.com', 'password': 'TestPass123!'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['is_admin_role'] is True

    def test_login_wrong_password(self, api_client, user):
        url = reverse('users:login')
        data = {'email': user.email, 'password': 'WrongPassword!'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid email or password'

    def test_login_unknown_email(self, api_client):
        url = reverse('users:login')
        data = {'email': 'nobody@example.com', 'password': 'TestPass123!'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_user(self, api_client, user_inactive):
        url = reverse('users:login')
        data = {'email': user_inactive.email, 'password': 'TestPass123!'}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_missing_fields(self, api_client):
        url = reverse('users:login')
        response = api_client.post(url, {'email': 'testuser@example.com'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestTokenRefresh:
    """Tests for POST /api/auth/token/refresh/"""

    def test_refresh(self, api_client, user):
        login = api_client.post(
            reverse('users:login'), {'email': user.email, 'password': 'TestPass123!'}
        )
        response = api_client.post(reverse('token_refresh'), {'refresh': login.data['tokens']['refresh']})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, auth_client, user):
        response = auth_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['display_name'] == 'Test User'
        assert response.data['role'] == 'viewer'

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
