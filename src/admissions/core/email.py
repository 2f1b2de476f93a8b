"""
Email Service using Resend

Handles transactional email for accounts and application decisions.
Sending never fails a request: errors are logged and False is returned.
"""

import asyncio
import logging
from html import escape

import resend

from admissions.core.config import settings

logger = logging.getLogger(__name__)

resend.api_key = settings.resend_api_key

_STYLES = """
    body { font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }
    .container { max-width: 600px; margin: 0 auto; padding: 40px 20px; }
    .header { color: #1a365d; margin-bottom: 24px; }
    .button { display: inline-block; background-color: #1a365d; color: white; padding: 14px 28px; text-decoration: none; border-radius: 8px; margin: 24px 0; }
    .info-box { background-color: #f3f4f6; padding: 16px; border-radius: 8px; margin: 16px 0; }
    .footer { margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }
"""


def _render(title: str, body: str) -> str:
    """Wrap an HTML fragment in the shared email layout."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>{_STYLES}</style>
    </head>
    <body>
        <div class="container">
            <h1 class="header">{title}</h1>
            {body}
            <div class="footer">
                <p>Admissions Portal</p>
            </div>
        </div>
    </body>
    </html>
    """


async def send_email(
    to_email: str,
    subject: str,
    html_content: str,
) -> bool:
    """
    Send an email using Resend.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        html_content: HTML content of the email

    Returns:
        True if email was sent (or logged in place of sending)
    """
    if not resend.api_key:
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        logger.info(f"EMAIL TO: {to_email} | SUBJECT: {subject}")
        return True

    try:
        params: resend.Emails.SendParams = {
            "from": settings.email_from,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }

        # Resend's client is synchronous
        email = await asyncio.to_thread(resend.Emails.send, params)
        logger.info(f"Email sent successfully to {to_email}, id: {email['id']}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False


async def send_welcome_email(to_email: str, name: str) -> bool:
    """Send the welcome email after self-registration."""
    safe_name = escape(name)
    login_url = f"{settings.frontend_url}/login"
    body = f"""
            <p>Hi {safe_name},</p>
            <p>Thank you for registering! You can now log in using your registered email.</p>
            <a href="{login_url}" class="button">Log In</a>
    """
    return await send_email(
        to_email=to_email,
        subject="Welcome to the Admissions Portal",
        html_content=_render("Welcome!", body),
    )


async def send_account_created_email(
    to_email: str,
    name: str,
    role: str,
    course_title: str | None = None,
) -> bool:
    """Send a notice to a user whose account was created by an administrator."""
    safe_name = escape(name)
    safe_role = escape(role.replace("_", " "))
    course_line = f" for <strong>{escape(course_title)}</strong>" if course_title else ""
    body = f"""
            <p>Hi {safe_name},</p>
            <p>You have been registered as a <strong>{safe_role}</strong>{course_line}.</p>
            <p>Please log in using your email and the password provided to you, then change it.</p>
    """
    return await send_email(
        to_email=to_email,
        subject="Your Admissions Portal account",
        html_content=_render("Account Created", body),
    )


async def send_application_received(
    to_email: str,
    applicant_name: str,
    course_title: str,
) -> bool:
    """Confirm that a submitted application entered the review queue."""
    safe_name = escape(applicant_name)
    safe_course = escape(course_title)
    body = f"""
            <p>Hello {safe_name},</p>
            <p>We have received your application for <strong>{safe_course}</strong>.</p>
            <div class="info-box">
                <p>A verification officer will review your documents. Please complete the
                application fee payment so your application can be verified.</p>
            </div>
    """
    return await send_email(
        to_email=to_email,
        subject=f"Application received: {safe_course}",
        html_content=_render("Application Received", body),
    )


async def send_application_decision(
    to_email: str,
    applicant_name: str,
    course_title: str,
    verified: bool,
    comments: str | None = None,
) -> bool:
    """Tell the applicant the outcome of verification."""
    safe_name = escape(applicant_name)
    safe_course = escape(course_title)
    outcome = "verified" if verified else "rejected"
    comment_block = (
        f'<div class="info-box"><p><strong>Officer comments:</strong></p><p>{escape(comments)}</p></div>'
        if comments
        else ""
    )
    body = f"""
            <p>Hello {safe_name},</p>
            <p>Your application for <strong>{safe_course}</strong> has been <strong>{outcome}</strong>.</p>
            {comment_block}
            <a href="{settings.frontend_url}/notifications" class="button">View Details</a>
    """
    return await send_email(
        to_email=to_email,
        subject=f"Your application for {safe_course} was {outcome}",
        html_content=_render(f"Application {outcome.capitalize()}", body),
    )
