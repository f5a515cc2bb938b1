from dataclasses import dataclass

# Fixed keys in request.session
USER_SESSION_KEY = 'storefront_user'
TOKEN_SESSION_KEY = 'token'


@dataclass(frozen=True)
class ShopperSession:
    """The signed-in shopper as reported by the storefront API."""

    name: str
    email: str
    token: str
    is_admin: bool = False
    user_id: str = ''

    @classmethod
    def from_request(cls, request):
        """Return the current session or None when nobody is signed in."""
        user = request.session.get(USER_SESSION_KEY)
        token = request.session.get(TOKEN_SESSION_KEY)
        if not user or not token:
            return None
        return cls(
            name=user.get('name', ''),
            email=user.get('email', ''),
            token=token,
            is_admin=bool(user.get('isAdmin')),
            user_id=user.get('_id', ''),
        )

    @property
    def auth_headers(self):
        return {'Authorization': f'Bearer {self.token}'}


def sign_in(request, profile):
    """Persist a login response ({_id, name, email, isAdmin, token})."""
    request.session[USER_SESSION_KEY] = {
        '_id': str(profile.get('_id', '')),
        'name': profile.get('name', ''),
        'email': profile.get('email', ''),
        'isAdmin': bool(profile.get('isAdmin')),
    }
    request.session[TOKEN_SESSION_KEY] = profile.get('token', '')
    request.session.modified = True


def sign_out(request):
    for key in (USER_SESSION_KEY, TOKEN_SESSION_KEY):
        request.session.pop(key, None)
    request.session.modified = True
