from django.utils.translation import gettext_lazy as _

# messages raised by the identity layer
EMAIL_NOT_CONFIRMED = "Email not confirmed"
INVALID_CREDENTIALS = "Invalid login credentials"
ALREADY_REGISTERED = "User already registered"


class AuthProviderError(Exception):
    """Raised by the identity service; `message` is the raw provider message."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field


SIGN_IN_MESSAGES = {
    EMAIL_NOT_CONFIRMED: _("Please confirm your email first"),
    INVALID_CREDENTIALS: _("Incorrect login credentials"),
}


def map_sign_in_error(message: str) -> str:
    return str(SIGN_IN_MESSAGES.get(message, _("Sign in failed, please try again")))


def map_sign_up_error(message: str) -> str:
    if "already registered" in message:
        return str(_("This email is already registered"))
    return str(_("Could not create the account, please try again"))
