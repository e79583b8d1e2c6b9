"""HTML bodies for the transactional e-mails."""


def _wrap(accent: str, heading: str, body: str, footer: str) -> str:
    return f"""
    <div style="font-family:sans-serif;color:#222;">
      <h2 style="color:{accent};">{heading}</h2>
      {body}
      <hr/>
      <small style="color:gray;">{footer}</small>
    </div>
    """


def booking_request_template(name: str, course_name: str, time: str, tutor_name: str) -> str:
    return _wrap(
        "#f4b400",
        "TutorMitra Booking Request",
        f"<p>Hello {name},</p>"
        f"<p>A booking for <strong>{course_name}</strong> with <strong>{tutor_name}</strong> "
        f"on <strong>{time}</strong> has been requested.</p>",
        "Thanks for choosing TutorMitra.",
    )


def booking_confirmation_template(name: str, course_name: str, time: str, tutor_name: str) -> str:
    return _wrap(
        "#f4b400",
        "TutorMitra Booking Confirmed",
        f"<p>Hello {name},</p>"
        f"<p>Your booking for <strong>{course_name}</strong> with <strong>{tutor_name}</strong> "
        f"on <strong>{time}</strong> is confirmed!</p>",
        "Thanks for choosing TutorMitra.",
    )


def booking_status_template(name: str, status: str, time: str, reason: str = None) -> str:
    reason_html = f"<p>Reason: {reason}</p>" if reason else ""
    return _wrap(
        "#7e57c2",
        "TutorMitra Booking Update",
        f"<p>Hello {name},</p>"
        f"<p>Your booking on <strong>{time}</strong> is now <strong>{status}</strong>.</p>"
        f"{reason_html}",
        "TutorMitra Team",
    )


def payment_notification_template(name: str, amount: float, status: str) -> str:
    return _wrap(
        "#26a69a",
        "TutorMitra Payment Status",
        f"<p>Hello {name},</p>"
        f"<p>Your payment of <strong>&#8377;{amount:g}</strong> is "
        f'<span style="color:#26a69a;font-weight:bold;">{status}</span>.</p>',
        "Need help? Reply to this email.",
    )


def payout_released_template(name: str, amount: int, session_date: str) -> str:
    return _wrap(
        "#26a69a",
        "TutorMitra Payment Released",
        f"<p>Hi {name}, your &#8377;{amount} payment for the session on {session_date} "
        f"has been released.</p>",
        "Thanks for being part of TutorMitra!",
    )


def kyc_decision_template(name: str, status: str, reason: str = None) -> str:
    reason_html = f"<p>Reason: {reason}</p>" if reason else ""
    return _wrap(
        "#2196f3",
        "TutorMitra KYC Update",
        f"<p>Hello {name},</p><p>Your KYC verification is <strong>{status}</strong>.</p>"
        f"{reason_html}",
        "TutorMitra Team",
    )
