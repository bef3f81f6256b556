"""
Message bodies for verification and password reset emails.
"""

from dataclasses import dataclass
from html import escape
from urllib.parse import urlencode

_STYLE = """
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #1f2933; }
        .container { max-width: 600px; margin: 0 auto; padding: 40px 20px; }
        .button { display: inline-block; background: #4f46e5; color: white; padding: 12px 24px; border-radius: 8px; text-decoration: none; font-weight: 600; }
        .footer { margin-top: 40px; font-size: 12px; color: #5b6470; }
"""


@dataclass(frozen=True)
class EmailMessage:
    """A rendered email ready for a transport."""

    subject: str
    html_body: str
    text_body: str


def verification_url(app_url: str, token: str) -> str:
    return f"{app_url.rstrip('/')}/api/auth/verify-email?{urlencode({'token': token})}"


def password_reset_url(frontend_url: str, token: str) -> str:
    return f"{frontend_url.rstrip('/')}/reset-password?{urlencode({'token': token})}"


def _render(title: str, greeting: str, intro: str, url: str, button: str, outro: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>{title}</title>
    <style>{_STYLE}    </style>
</head>
<body>
    <div class="container">
        <h1>{title}</h1>
        <p>{greeting}</p>
        <p>{intro}</p>
        <p style="margin: 30px 0;">
            <a href="{escape(url)}" class="button">{button}</a>
        </p>
        <p>{outro}</p>
        <div class="footer">
            <p>If the button doesn't work, copy and paste this URL: {escape(url)}</p>
        </div>
    </div>
</body>
</html>
"""


def render_verification(
    first_name: str, url: str, app_name: str, valid_for: str = "24 hours"
) -> EmailMessage:
    """Email asking the user to confirm their address."""
    greeting = f"Hi {escape(first_name)},"
    intro = f"Thanks for signing up for {escape(app_name)}! Please verify your email address."
    outro = f"This link will expire in {valid_for}. If you didn't create an account, you can ignore this email."
    return EmailMessage(
        subject=f"Verify your {app_name} email",
        html_body=_render("Verify your email", greeting, intro, url, "Verify Email", outro),
        text_body=f"Hi {first_name},\n\n{intro}\n\n{url}\n\n{outro}\n",
    )


def render_password_reset(
    first_name: str, url: str, app_name: str, valid_for: str = "1 hour"
) -> EmailMessage:
    """Email carrying a password reset link."""
    greeting = f"Hi {escape(first_name)},"
    intro = "We received a request to reset your password. Use the link below to choose a new one."
    outro = f"This link will expire in {valid_for}. If you didn't request this, you can safely ignore this email."
    return EmailMessage(
        subject=f"Reset your {app_name} password",
        html_body=_render("Reset your password", greeting, intro, url, "Reset Password", outro),
        text_body=f"Hi {first_name},\n\n{intro}\n\n{url}\n\n{outro}\n",
    )
