"""
Authentication against Supabase access tokens.

The frontend signs riders in with Supabase and sends the access token as
`Authorization: Bearer <token>`. The token is verified by asking the
Supabase auth server who it belongs to; the answer is mapped onto a local
Django user and UserProfile.
"""
import logging
import uuid
from typing import Dict, Optional, Tuple

import requests
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import authentication, exceptions

from .models import UserProfile

logger = logging.getLogger(__name__)

User = get_user_model()


class SupabaseAuthentication(authentication.BaseAuthentication):
    """
    DRF authentication class for Supabase JWTs.

    Returns None (anonymous) when no bearer token is sent or when Supabase
    is not configured, so other authentication classes still get a chance.
    """

    keyword = 'Bearer'

    def authenticate(self, request) -> Optional[Tuple]:
        supabase_url = getattr(settings, 'SUPABASE_URL', '')
        anon_key = getattr(settings, 'SUPABASE_ANON_KEY', '')
        if not supabase_url or not anon_key:
            return None

        header = authentication.get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None
        if len(header) != 2:
            raise exceptions.AuthenticationFailed('Invalid authorization header')

        token = header[1].decode()
        payload = self._fetch_supabase_user(supabase_url, anon_key, token)
        profile = self._get_or_create_profile(payload)
        return profile.user, token

    def authenticate_header(self, request):
        return self.keyword

    def _fetch_supabase_user(self, supabase_url: str, anon_key: str, token: str) -> Dict:
        """Asks Supabase who owns the token."""
        url = f"{supabase_url.rstrip('/')}/auth/v1/user"
        headers = {
            'Authorization': f"Bearer {token}",
            'apikey': anon_key,
        }

        try:
            response = requests.get(url, headers=headers, timeout=settings.SUPABASE_AUTH_TIMEOUT)
        except requests.RequestException as e:
            logger.error(f"Supabase auth request failed: {str(e)}")
            raise exceptions.AuthenticationFailed('Authentication service unavailable')

        if response.status_code != 200:
            logger.warning(f"Supabase rejected token with status {response.status_code}")
            raise exceptions.AuthenticationFailed('Invalid token')

        try:
            payload = response.json()
        except ValueError:
            logger.warning("Supabase returned a non JSON user payload")
            raise exceptions.AuthenticationFailed('Invalid token')

        if not isinstance(payload, dict) or not payload.get('id'):
            raise exceptions.AuthenticationFailed('Invalid token')
        return payload

    @transaction.atomic
    def _get_or_create_profile(self, payload: Dict) -> UserProfile:
        try:
            supabase_id = uuid.UUID(str(payload['id']))
        except ValueError:
            raise exceptions.AuthenticationFailed('Invalid token')

        profile = UserProfile.objects.select_related('user').filter(supabase_id=supabase_id).first()
        if profile is not None:
            return profile

        email = payload.get('email') or ''
        metadata = payload.get('user_metadata') or {}
        user, created = User.objects.get_or_create(
            username=str(supabase_id),
            defaults={'email': email},
        )
        if created:
            user.set_unusable_password()
            user.save(update_fields=['password'])
            logger.info(f"Created local user for Supabase account {supabase_id}")

        profile = UserProfile.for_user(user)
        profile.supabase_id = supabase_id
        if not profile.display_name:
            profile.display_name = metadata.get('full_name') or email.split('@')[0]
        if not profile.avatar_url and metadata.get('avatar_url'):
            profile.avatar_url = metadata['avatar_url']
        profile.save()
        return profile
