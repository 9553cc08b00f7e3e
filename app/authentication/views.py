"""
Authentication views.

- ProfileView: read and update the signed-in recipient's profile

Token issuance is provided by djangorestframework-simplejwt and wired
in urls.py.
"""

import logging

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import ProfileSerializer, ProfileUpdateSerializer
from authentication.services import ProfileService

logger = logging.getLogger(__name__)


class ProfileView(APIView):
    """
    API view for the current user's recipient profile.

    GET: Retrieve profile, configuration flags, tip and webhook URLs
    PUT/PATCH: Claim or change the username, set the Coinbase Commerce
        key and webhook secret

    URL: /api/v1/auth/profile/

    If the profile has no username, the username field is required.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        profile = ProfileService.get_or_create_profile(request.user)
        serializer = ProfileSerializer(profile, context={"request": request})
        return Response(serializer.data)

    def put(self, request):
        """
        Update the current user's profile.

        Request body:
            {
                "username": "alice",               // Required if not set
                "coinbase_commerce_key": "...",    // Optional, write-only
                "webhook_secret": "..."            // Optional, write-only
            }
        """
        return self._update_profile(request, partial=False)

    def patch(self, request):
        return self._update_profile(request, partial=True)

    def _update_profile(self, request, partial=False):
        profile = ProfileService.get_or_create_profile(request.user)
        serializer = ProfileUpdateSerializer(
            profile,
            data=request.data,
            partial=partial,
            context={"request": request, "user": request.user},
        )
        serializer.is_valid(raise_exception=True)
        updated_profile = serializer.save()

        return Response(
            ProfileSerializer(updated_profile, context={"request": request}).data
        )
