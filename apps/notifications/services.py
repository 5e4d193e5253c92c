"""Notification services for email delivery and in-app notifications."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.template.loader import render_to_string  # type: ignore
from django.utils.html import strip_tags  # type: ignore

from .models import Notification

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking
    from apps.ratings.models import Rating
    from apps.users.models import CustomUser

logger = logging.getLogger(__name__)


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    template_name: str | None,
    context: dict,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Send an email through Django's mail framework.

    Args:
        recipient_email: Recipient address
        subject: Subject line
        template_name: Django template to render (optional)
        context: Template context; ``message`` is used as plain text when
            neither a template nor ``html_message`` is given
        html_message: HTML body (optional)

    Returns:
        bool: True if the message was handed to the mail backend
    """
    try:
        if html_message:
            text_message = strip_tags(html_message)
        elif template_name:
            html_message = render_to_string(template_name, context)
            text_message = strip_tags(html_message)
        else:
            text_message = context.get("message", "")
            html_message = None

        send_mail(
            subject=subject,
            message=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


# ============================================================================
# IN-APP NOTIFICATIONS
# ============================================================================

def create_in_app_notification(user: "CustomUser", title: str, message: str) -> Notification:
    notification = Notification.objects.create(user=user, title=title, message=message)
    logger.info(f"In-app notification created for user {user.pk}: {title}")
    return notification


def notify_user(user: "CustomUser", title: str, message: str) -> dict[str, bool]:
    """
    Notify a user in the app and by email.

    Returns:
        dict: Delivery result per channel
    """
    results = {"email": False, "in_app": False}
    if user.email:
        results["email"] = send_email_notification(
            recipient_email=user.email,
            subject=title,
            template_name=None,
            context={"message": message},
        )
    create_in_app_notification(user, title, message)
    results["in_app"] = True
    return results


# ============================================================================
# MARKETPLACE EVENTS
# ============================================================================

def notify_booking_created(booking: "Booking") -> dict[str, bool]:
    """Tell the owner that a customer booked their property."""
    customer = booking.customer.name or booking.customer.email
    return notify_user(
        booking.owner,
        f"New booking for {booking.property.title}",
        f"{customer} wants to {booking.booking_type} {booking.property.title}.",
    )


def notify_payment_received(booking: "Booking") -> dict[str, bool]:
    return notify_user(
        booking.owner,
        f"Payment received for {booking.property.title}",
        f"A payment of {booking.payment_amount} was received for booking #{booking.pk}.",
    )


def notify_booking_completed(booking: "Booking", actor: "CustomUser") -> dict[str, bool]:
    recipient = booking.owner if actor.pk == booking.customer_id else booking.customer
    return notify_user(
        recipient,
        f"Booking #{booking.pk} completed",
        f"The booking for {booking.property.title} was marked as completed. You can now rate it.",
    )


def notify_booking_cancelled(booking: "Booking", actor: "CustomUser") -> dict[str, bool]:
    recipient = booking.owner if actor.pk == booking.customer_id else booking.customer
    message = f"The booking for {booking.property.title} was cancelled."
    if booking.cancellation_reason:
        message = f"{message} Reason: {booking.cancellation_reason}"
    return notify_user(recipient, f"Booking #{booking.pk} cancelled", message)


def notify_rating_received(rating: "Rating") -> dict[str, bool]:
    return notify_user(
        rating.rated,
        "You received a new rating",
        f"You were rated {rating.rating}/5 for booking #{rating.booking_id}.",
    )
