from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from accounts.models import User

import logging

logger = logging.getLogger(__name__)


# Token handling lives in the main platform; here the acting user is named by a header
class HeaderUserAuthentication(BaseAuthentication):
    header = "X-User-NAME"

    def authenticate(self, request):
        username = request.headers.get(self.header)
        if not username:
            return None
        logger.info(f"Header login for user: {username}")
        try:
            user = User.objects.get(username=username)
        except User.DoesNotExist:
            raise AuthenticationFailed("User not found or invalid credentials.")
        return (user, None)

    def authenticate_header(self, request):
        return self.header
