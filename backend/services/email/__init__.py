from services.email.client import ResendEmailClient, get_email_client

__all__ = [
    "ResendEmailClient",
    "get_email_client",
]
