from urllib.parse import urlencode

import resend

from app.core.constants import JinjaCompiledEmailTemplatesEnv
from app.core.settings import get_settings


def _render_template(template_name: str, **context: str) -> str:
    """Render a pre-compiled email template.

    Templates are pre-compiled with CSS inlined and HTML minified.
    Run `python scripts/compile_emails.py` after modifying source templates.

    Args:
        template_name: Name of the template file
        **context: Template variables

    Returns:
        Rendered HTML
    """
    template = JinjaCompiledEmailTemplatesEnv.get_template(template_name)
    return template.render(**context)


def init_resend() -> None:
    """Initialize Resend with API key if available."""
    settings = get_settings()
    if not settings.resend_api_key:
        return
    resend.api_key = settings.resend_api_key


def build_invitation_url(email: str) -> str:
    """Client URL where an invited user signs in to claim a pending account."""
    settings = get_settings()
    query = urlencode({"email": email})
    return f"{settings.client_url}/auth/accept-invitation?{query}"


def send_invitation_email(to_email: str, *, name: str, role: str) -> None:
    """Send an account invitation email via Resend.

    Args:
        to_email: Address the pending account was provisioned for
        name: Display name of the invitee
        role: Role of the pending account (factory or admin)
    """
    settings = get_settings()

    # Email domain
    from_email = f"noreply@{settings.app_domain}"

    html_content = _render_template(
        "invitation.html",
        name=name,
        role=role,
        invitation_url=build_invitation_url(to_email),
    )

    resend.Emails.send(
        {
            "from": from_email,
            "to": to_email,
            "subject": "Labsy - You have been invited",
            "html": html_content,
        }
    )
