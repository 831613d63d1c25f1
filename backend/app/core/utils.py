import os
import smtplib
from email.message import EmailMessage


def send_activation_email(email: str, activation_url: str) -> bool:
    host = os.getenv("SMTP_HOST")
    user = os.getenv("SMTP_USER")
    password = os.getenv("SMTP_PASSWORD")
    sender = os.getenv("SMTP_FROM", user or "")
    port = int(os.getenv("SMTP_PORT", "587"))
    use_tls = os.getenv("SMTP_USE_TLS", "true").lower() == "true"

    if not host or not user or not password or not sender:
        return False

    msg = EmailMessage()
    msg["Subject"] = "Activate your account"
    msg["From"] = sender
    msg["To"] = email
    msg.set_content(
        "Welcome! Confirm your email address by opening the link below:\n"
        f"{activation_url}\n"
        "If you did not create an account you can ignore this message."
    )

    with smtplib.SMTP(host, port, timeout=10) as server:
        if use_tls:
            server.starttls()
        server.login(user, password)
        server.send_message(msg)

    return True
