from .email import is_email_enabled, send_email

__all__ = [
    "is_email_enabled",
    "send_email",
]
