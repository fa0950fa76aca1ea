"""
Email delivery over SMTP.

One ``EmailSender`` is built per process (see ``create_app``) and handed to
handlers through the ``get_mailer`` dependency. smtplib is blocking, so each
send runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from japama.config import Settings

log = logging.getLogger(__name__)


class DeliveryError(Exception):
    """The SMTP transport failed to hand off a message."""


# ── Templates ───────────────────────────────────────────

VERIFICATION_LINK_SUBJECT = "Verificación de Cuenta - JAPAMA"
VERIFICATION_CODE_SUBJECT = "Tu código de verificación - JAPAMA"

_LINK_HTML = """
<div style="font-family: Arial, sans-serif; padding: 20px; max-width: 600px; margin: 0 auto; background-color: #f9f9f9;">
  <div style="background-color: white; padding: 30px; border-radius: 10px;">
    <h2 style="color: #2c3e50; margin-top: 0;">¡Bienvenido a JAPAMA, {name}!</h2>
    <p style="color: #555; line-height: 1.6;">
      Tu cuenta ha sido creada exitosamente. Para comenzar a usar el sistema,
      necesitas verificar tu dirección de correo electrónico.
    </p>
    <div style="text-align: center; margin: 30px 0;">
      <a href="{url}" style="background-color: #3498db; color: white; padding: 15px 40px;
         text-decoration: none; border-radius: 5px; display: inline-block; font-weight: bold;">
        Verificar mi cuenta
      </a>
    </div>
    <p style="color: #7f8c8d; font-size: 14px;">Si el botón no funciona, copia y pega este enlace en tu navegador:</p>
    <p style="color: #3498db; font-size: 12px; word-break: break-all;">{url}</p>
    <p style="color: #e74c3c; font-size: 13px;">Este enlace expirará en <strong>{hours} horas</strong>.</p>
  </div>
</div>
"""

_LINK_TEXT = """¡Bienvenido a JAPAMA, {name}!

Para verificar tu cuenta abre el siguiente enlace:
{url}

Este enlace expirará en {hours} horas.
"""

_CODE_HTML = """
<div style="font-family: Arial, sans-serif; padding: 20px; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #2c3e50;">Hola {name},</h2>
  <p style="color: #555;">Tu código de verificación es:</p>
  <p style="font-size: 32px; letter-spacing: 8px; font-weight: bold; text-align: center;">{code}</p>
  <p style="color: #e74c3c; font-size: 13px;">El código expira en {minutes} minutos.</p>
</div>
"""

_CODE_TEXT = """Hola {name},

Tu código de verificación es: {code}

El código expira en {minutes} minutos.
"""


def render_verification_link(name: str, url: str, hours: int) -> tuple[str, str]:
    """Return (html, text) bodies for a verification-link email."""
    return (
        _LINK_HTML.format(name=name, url=url, hours=hours),
        _LINK_TEXT.format(name=name, url=url, hours=hours),
    )


def render_verification_code(name: str, code: str, minutes: int) -> tuple[str, str]:
    """Return (html, text) bodies for a verification-code email."""
    return (
        _CODE_HTML.format(name=name, code=code, minutes=minutes),
        _CODE_TEXT.format(name=name, code=code, minutes=minutes),
    )


# ── Sender ──────────────────────────────────────────────

class EmailSender:
    """Send emails via SMTP; logs instead of sending when SMTP is unset."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        from_email: str = "",
        from_name: str = "JAPAMA",
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_email = from_email
        self.from_name = from_name
        self.use_tls = use_tls
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> EmailSender:
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME or None,
            password=settings.SMTP_PASSWORD or None,
            from_email=settings.SMTP_FROM_EMAIL,
            from_name=settings.SMTP_FROM_NAME,
            use_tls=settings.SMTP_USE_TLS,
            timeout=settings.SMTP_TIMEOUT_SECONDS,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.host and self.from_email)

    async def send(self, to: str, subject: str, html: str, text: str) -> None:
        """Deliver one message. Raises DeliveryError on transport failure."""
        if not self.enabled:
            log.warning("SMTP not configured — would send %r to %s", subject, to)
            log.info("Email body for %s:\n%s", to, text)
            return

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = f"{self.from_name} <{self.from_email}>"
        message["To"] = to
        message.set_content(text)
        message.add_alternative(html, subtype="html")

        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as exc:
            log.error("Error sending email to %s: %s", to, exc)
            raise DeliveryError(f"Failed to send email to {to}") from exc
        log.info("Email %r sent to %s", subject, to)

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(message)
