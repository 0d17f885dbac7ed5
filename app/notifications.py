"""Reservation and order confirmation emails"""

import html
import smtplib
from datetime import date
from email.message import EmailMessage
from typing import Any, Dict, Iterable, Tuple

import structlog

from app.config import settings
from app.models.order import Order
from app.models.reservation import Reservation

logger = structlog.get_logger()


def confirmation_details(reservation: Reservation) -> Dict[str, Any]:
    """JSON-serializable snapshot of a reservation for the email task"""
    return {
        "reservation_id": str(reservation.id),
        "email": reservation.email,
        "first_name": reservation.first_name,
        "last_name": reservation.last_name,
        "phone": reservation.phone,
        "date": reservation.date.isoformat(),
        "time": reservation.time,
        "guests": reservation.guests,
        "seating": reservation.seating.value,
        "occasion": reservation.occasion,
        "special_requests": reservation.special_requests,
        "table_number": reservation.table.table_number if reservation.table else None,
    }


def order_details(order: Order) -> Dict[str, Any]:
    """JSON-serializable snapshot of an order for the email task"""
    return {
        "order_id": str(order.id),
        "email": order.customer_email,
        "name": order.customer_name,
        "phone": order.customer_phone,
        "address": order.address,
        "items": [
            {
                "name": item["name"],
                "quantity": item["quantity"],
                "price_cents": item["price_cents"],
                "line_total_cents": item["line_total_cents"],
            }
            for item in order.items_json
        ],
        "subtotal_cents": order.subtotal_cents,
        "tax_cents": order.tax_cents,
        "total_cents": order.total_cents,
    }


def format_cents(cents: int) -> str:
    return f"${cents / 100:.2f}"


def _html_rows(rows: Iterable[Tuple[str, Any]]) -> str:
    return "".join(
        f"<tr><td><strong>{html.escape(label)}</strong></td><td>{html.escape(str(value))}</td></tr>"
        for label, value in rows
    )


def _message(subject: str, to: str, text: str, body: str) -> EmailMessage:
    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = settings.email_from
    message["To"] = to
    message.set_content(text)
    message.add_alternative(body, subtype="html")
    return message


def build_confirmation_email(details: Dict[str, Any]) -> EmailMessage:
    """Plain-text and HTML confirmation for a reservation"""
    day = date.fromisoformat(details["date"]).strftime("%A, %B %d, %Y")
    rows = [
        ("Table Number", details.get("table_number")),
        ("Date", day),
        ("Time", details["time"]),
        ("Guests", details["guests"]),
        ("Seating", details["seating"]),
        ("Occasion", details.get("occasion") or "None"),
        ("Special Requests", details.get("special_requests") or "None"),
        ("Contact", f"{details['email']} | {details['phone']}"),
    ]
    guest_name = f"{details['first_name']} {details['last_name']}"

    text = f"Hi {guest_name},\n\n"
    text += "Your table has been reserved successfully! Here are the details:\n\n"
    text += "\n".join(f"{label}: {value}" for label, value in rows)
    text += f"\n\nWe look forward to welcoming you at {settings.restaurant_name}!\n"
    text += f"For modifications or cancellations, please call {settings.restaurant_phone}.\n"

    body = (
        f"<h1>Reservation Confirmed!</h1>"
        f"<p>Hi <strong>{html.escape(guest_name)}</strong>,</p>"
        f"<p>Your table has been reserved successfully! Here are the details:</p>"
        f"<table>{_html_rows(rows)}</table>"
        f"<p>We look forward to welcoming you at <strong>{html.escape(settings.restaurant_name)}</strong>!</p>"
    )

    return _message("Your Reservation Details", details["email"], text, body)


def build_order_email(details: Dict[str, Any]) -> EmailMessage:
    """Plain-text and HTML confirmation for an order"""
    rows = [
        ("Name", details["name"]),
        ("Phone", details["phone"]),
        ("Address", details.get("address") or "Pickup"),
    ]
    items = [
        (item["name"], item["quantity"], format_cents(item["price_cents"]), format_cents(item["line_total_cents"]))
        for item in details["items"]
    ]

    text = f"Hi {details['name']},\n\nThank you for your order! Here are the details:\n\n"
    text += "\n".join(f"{label}: {value}" for label, value in rows)
    text += "\n\nItems Ordered:\n"
    text += "\n".join(f"{quantity} x {name} @ {price} = {line_total}" for name, quantity, price, line_total in items)
    if details.get("tax_cents"):
        text += f"\n\nSubtotal: {format_cents(details['subtotal_cents'])}"
        text += f"\nTax: {format_cents(details['tax_cents'])}"
    text += f"\nTotal: {format_cents(details['total_cents'])}\n"
    text += f"\nThank you for choosing {settings.restaurant_name}!\n"

    item_rows = "".join(
        "<tr>" + "".join(f"<td>{html.escape(str(cell))}</td>" for cell in item) + "</tr>"
        for item in items
    )
    body = (
        f"<h1>Order Confirmed!</h1>"
        f"<p>Hi <strong>{html.escape(details['name'])}</strong>,</p>"
        f"<p>Thank you for your order! Here are the details:</p>"
        f"<table>{_html_rows(rows)}</table>"
        f"<h3>Items Ordered:</h3>"
        f"<table><tr><th>Item</th><th>Qty</th><th>Price</th><th>Total</th></tr>{item_rows}</table>"
        f"<p><strong>Total: {format_cents(details['total_cents'])}</strong></p>"
        f"<p>Thank you for choosing <strong>{html.escape(settings.restaurant_name)}</strong>!</p>"
    )

    return _message("Your Order Confirmation", details["email"], text, body)


def send_email(message: EmailMessage) -> None:
    """Deliver a message over SMTP"""
    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=10) as smtp:
        if settings.smtp_use_tls:
            smtp.starttls()
        if settings.smtp_username:
            smtp.login(settings.smtp_username, settings.smtp_password)
        smtp.send_message(message)


def _enqueue(task, details: Dict[str, Any], record_key: str) -> bool:
    """
    Queue a confirmation email. Best effort: a failure to enqueue is
    logged and never propagates to the caller.
    """
    if not settings.notifications_enabled:
        logger.info("Notifications disabled, skipping confirmation", **{record_key: details[record_key]})
        return False

    try:
        task.delay(details)
    except Exception as e:
        logger.warning(
            "Failed to queue confirmation",
            task=task.name,
            error=str(e),
            **{record_key: details[record_key]},
        )
        return False
    return True


def notify_reservation_confirmed(details: Dict[str, Any]) -> bool:
    from app.jobs.tasks import send_reservation_confirmation

    return _enqueue(send_reservation_confirmation, details, "reservation_id")


def notify_order_placed(details: Dict[str, Any]) -> bool:
    from app.jobs.tasks import send_order_confirmation

    return _enqueue(send_order_confirmation, details, "order_id")
