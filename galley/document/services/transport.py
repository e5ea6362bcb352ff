"""
Отправка писем.

MailTransport задает интерфейс отправки, DjangoMailTransport отправляет
письма через почтовый backend Django (settings.EMAIL_BACKEND). В тестах
используется locmem backend.
"""

import logging
import smtplib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from email.utils import make_msgid
from typing import List, Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from order.exceptions import DependencyUnavailable

from .renderer import RenderedDocument

logger = logging.getLogger(__name__)


@dataclass
class OutgoingEmail:
    """Письмо к отправке."""

    to: List[str]
    subject: str
    text_body: str
    html_body: Optional[str] = None
    cc: List[str] = field(default_factory=list)
    attachments: List[RenderedDocument] = field(default_factory=list)


class MailTransport(ABC):
    """Интерфейс отправки писем."""

    @abstractmethod
    def send(self, email: OutgoingEmail) -> str:
        """Отправить письмо и вернуть идентификатор сообщения."""


class DjangoMailTransport(MailTransport):
    """Отправка через почтовый backend Django."""

    def __init__(self, from_email=None, reply_to=None):
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL
        self.reply_to = reply_to or getattr(settings, "EMAIL_REPLY_TO", None)

    def send(self, email: OutgoingEmail) -> str:
        """
        Отправить письмо.

        Raises:
            DependencyUnavailable: Почтовый сервер недоступен
        """
        message_id = make_msgid(domain=self.from_email.rsplit("@", 1)[-1].strip(">"))
        message = EmailMultiAlternatives(
            subject=email.subject,
            body=email.text_body,
            from_email=self.from_email,
            to=email.to,
            cc=email.cc,
            reply_to=[self.reply_to] if self.reply_to else None,
            headers={"Message-ID": message_id},
        )
        if email.html_body:
            message.attach_alternative(email.html_body, "text/html")
        for document in email.attachments:
            message.attach(document.filename, document.content, document.mime_type)

        try:
            message.send(fail_silently=False)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "Ошибка отправки письма '%s' на %s: %s",
                email.subject,
                ", ".join(email.to),
                str(e),
                exc_info=True,
            )
            raise DependencyUnavailable(f"Почтовый сервер недоступен: {e}") from e

        logger.info(
            "Письмо отправлено: %s (копия: %s), тема '%s', id %s",
            ", ".join(email.to),
            ", ".join(email.cc) or "нет",
            email.subject,
            message_id,
        )
        return message_id
