"""Email bodies for teacher invitations."""

from dataclasses import dataclass
from datetime import datetime
from html import escape

from infrastructure.mail.provider import MailMessage

BRAND = "KlassMata"
BRAND_COLOR = "#024731"
ACCENT_COLOR = "#D4AF37"


@dataclass(frozen=True)
class TeacherInviteEmail:
    """Values rendered into the invitation email."""

    to: str
    teacher_name: str
    school_name: str
    invite_code: str
    invite_url: str
    expires_at: datetime


def build_invite_url(base_url: str, code: str) -> str:
    """Onboarding link for an invite code."""
    return f"{base_url.rstrip('/')}/onboard?code={code}"


def format_expiry(expires_at: datetime) -> str:
    """Long-form date, e.g. ``Monday, October 26, 2026``."""
    return f"{expires_at:%A}, {expires_at:%B} {expires_at.day}, {expires_at.year}"


def render_teacher_invite(data: TeacherInviteEmail) -> MailMessage:
    """Render subject, HTML and text bodies of a teacher invitation."""
    expiry = format_expiry(data.expires_at)
    year = datetime.utcnow().year

    name = escape(data.teacher_name)
    school = escape(data.school_name)
    code = escape(data.invite_code)
    url = escape(data.invite_url, quote=True)

    html = f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Teacher Invitation</title>
  </head>
  <body style="margin: 0; padding: 0; font-family: Arial, sans-serif; background-color: #f5f5f5;">
    <table role="presentation" style="width: 100%; border-collapse: collapse;">
      <tr>
        <td style="padding: 40px 0; text-align: center; background-color: {BRAND_COLOR};">
          <h1 style="color: #ffffff; margin: 0; font-size: 28px;">{BRAND}</h1>
          <p style="color: {ACCENT_COLOR}; margin: 5px 0 0 0; font-size: 14px;">School Management System</p>
        </td>
      </tr>
      <tr>
        <td style="padding: 40px 30px; max-width: 600px; background-color: #ffffff;">
          <h2 style="color: {BRAND_COLOR}; margin: 0 0 20px 0;">Welcome to the Team!</h2>
          <p>Hi <strong>{name}</strong>,</p>
          <p>You've been invited to join <strong>{school}</strong> as a teacher on {BRAND},
          our comprehensive school management platform.</p>
          <div style="background-color: #f8f9fa; border-left: 4px solid {BRAND_COLOR}; padding: 15px; margin: 20px 0;">
            <p style="margin: 0 0 10px 0; color: #666666; font-size: 14px;">Your invite code:</p>
            <p style="margin: 0; font-size: 24px; font-weight: bold; color: {BRAND_COLOR}; font-family: monospace; letter-spacing: 2px;">{code}</p>
          </div>
          <p>Click the button below to complete your registration:</p>
          <p><a href="{url}" style="display: inline-block; padding: 14px 30px; background-color: {BRAND_COLOR}; color: #ffffff; text-decoration: none; font-weight: bold; border-radius: 4px;">Complete Registration</a></p>
          <p style="color: #666666; font-size: 14px;">Or copy and paste this link into your browser:<br>
          <a href="{url}" style="color: {BRAND_COLOR}; word-break: break-all;">{url}</a></p>
          <p style="color: #999999; font-size: 12px; border-top: 1px solid #e0e0e0; padding-top: 20px;">
            <strong>Note:</strong> This invitation expires on <strong>{expiry}</strong>.
            If you did not expect this invitation, please ignore this email.
          </p>
        </td>
      </tr>
      <tr>
        <td style="padding: 20px; text-align: center; color: #999999; font-size: 12px;">
          &copy; {year} {BRAND}. All rights reserved.
        </td>
      </tr>
    </table>
  </body>
</html>
"""

    text = f"""Welcome to {data.school_name}!

Hi {data.teacher_name},

You've been invited to join {data.school_name} as a teacher on {BRAND}.

Your invite code: {data.invite_code}

Complete your registration by visiting:
{data.invite_url}

This invitation expires on {expiry}.

If you did not expect this invitation, please ignore this email.

(c) {year} {BRAND}"""

    return MailMessage(
        to=data.to,
        subject=f"You've been invited to join {data.school_name} on {BRAND}",
        html=html,
        text=text,
    )
