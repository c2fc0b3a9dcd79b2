from accounts.models import Restaurant


class SessionContext:
    """
    Explicit per-request view of who is signed in and which storefront they own.
    Built by views from `request.user`; `username` is looked up once and cached.
    """

    _unset = object()

    def __init__(self, user):
        self._user = user
        self._username = self._unset

    @classmethod
    def from_request(cls, request):
        return cls(request.user)

    @property
    def user(self):
        return self._user if self.is_authenticated else None

    @property
    def is_authenticated(self):
        return bool(self._user is not None and self._user.is_authenticated)

    @property
    def username(self):
        if self._username is self._unset:
            self._username = self._lookup_username()
        return self._username

    def refresh(self):
        self._username = self._unset
        return self.username

    def _lookup_username(self):
        if not self.is_authenticated:
            return None
        return (
            Restaurant.objects.filter(owner_id=self._user.pk)
            .values_list("username", flat=True)
            .first()
        )

    def to_dict(self):
        user = self.user
        return {
            "is_authenticated": self.is_authenticated,
            "user": {"id": user.pk, "email": user.email, "email_confirmed": user.email_confirmed} if user else None,
            "username": self.username,
        }
