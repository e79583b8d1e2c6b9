"""
Shared pytest configuration
"""
import hashlib
import hmac
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.models.user import User
from app.models.tutor import Tutor
from app.models.course import Course
from app.enums.tutor_profile import UserRole
from app.exceptions import PaymentGatewayError
from app.schemas.booking import BookingCreate
from app.services.auth import create_access_token, token_claims
from app.services.booking_service import BookingService
from app.services.notification_service import NotificationService
from app.services.payment_gateway import RazorpayGateway


# In-memory database for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

KEY_SECRET = "test_secret"
SESSION_DATE = date(2030, 1, 15)


def sign(order_id: str, payment_id: str) -> str:
    return hmac.new(
        KEY_SECRET.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256
    ).hexdigest()


def sign_body(body: bytes) -> str:
    return hmac.new(KEY_SECRET.encode(), body, hashlib.sha256).hexdigest()


class FakeMailer:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    def send(self, to, subject, html):
        if self.fail:
            raise RuntimeError("SMTP down")
        self.sent.append((to, subject))
        return True

    def subjects_to(self, address):
        return [subject for to, subject in self.sent if to == address]


class FakePush:
    def __init__(self):
        self.pushes = []

    def is_configured(self):
        return True

    def send_notification_to_multiple_tokens(self, tokens, title, body, data=None):
        self.pushes.append({"tokens": tokens, "title": title, "body": body, "data": data})
        return {"success": len(tokens), "failure": 0, "invalid_tokens": []}


class FakeGateway(RazorpayGateway):
    def __init__(self, fail: bool = False):
        super().__init__(key_id="rzp_test_key", key_secret=KEY_SECRET, currency="INR")
        self.fail = fail
        self.orders = []

    def create_order(self, amount, booking_id):
        if self.fail:
            raise PaymentGatewayError("Failed to create order")
        order = {
            "id": f"order_{booking_id}_{len(self.orders) + 1}",
            "amount": int(round(amount * 100)),
            "currency": self.currency,
            "receipt": f"tm-booking-{booking_id}",
        }
        self.orders.append(order)
        return order


@pytest.fixture
def db():
    """Fresh database per test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def push():
    return FakePush()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def notifications(mailer, push):
    return NotificationService(mailer=mailer, push=push)


@pytest.fixture
def service(notifications, gateway):
    return BookingService(
        notifications=notifications, gateway=gateway, enforce_order=True, commission=0.10
    )


def _user(db, name, email, role=UserRole.STUDENT.value, phone=None, is_admin=False):
    user = User(
        name=name,
        email=email,
        phone=phone,
        hashed_password="hashed",
        role=role,
        is_admin=is_admin,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _tutor(db, user, **fields):
    tutor = Tutor(
        user_id=user.id,
        name=user.name,
        phone=fields.pop("phone", "9000000002"),
        whatsapp=fields.pop("whatsapp", "9000000003"),
        city=fields.pop("city", "Pune"),
        subjects=fields.pop("subjects", ["Mathematics"]),
        **fields,
    )
    db.add(tutor)
    db.commit()
    db.refresh(tutor)
    return tutor


@pytest.fixture
def student(db):
    return _user(db, "Asha Student", "asha@example.com", phone="9000000001")


@pytest.fixture
def other_student(db):
    return _user(db, "Kiran Student", "kiran@example.com")


@pytest.fixture
def admin(db):
    return _user(db, "Admin", "admin@example.com", role=UserRole.ADMIN.value, is_admin=True)


@pytest.fixture
def tutor_user(db):
    return _user(db, "Ravi Tutor", "ravi@example.com", role=UserRole.TUTOR.value)


@pytest.fixture
def tutor(db, tutor_user):
    return _tutor(db, tutor_user, fee_per_hour=500)


@pytest.fixture
def other_tutor(db):
    user = _user(db, "Meena Tutor", "meena@example.com", role=UserRole.TUTOR.value)
    return _tutor(db, user, fee_per_hour=800, city="Mumbai", subjects=["Physics"])


@pytest.fixture
def course(db, tutor):
    course = Course(
        instructor_id=tutor.id,
        title="Algebra Basics",
        description="Linear equations and more",
        price=1200,
        category="mathematics",
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


@pytest.fixture
def booking(db, service, student, tutor):
    """A regular pending booking of `student` with `tutor`."""
    return service.create_booking(
        db,
        student,
        BookingCreate(tutor_id=tutor.id, session_date=SESSION_DATE, session_time="10:00"),
    )


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(data=token_claims(user))}"}


@pytest.fixture
def client(db, service, notifications, gateway, tmp_path):
    from fastapi.testclient import TestClient

    from app.main import app
    from app.routers.kyc import get_upload_dir
    from app.services.booking_service import get_booking_service
    from app.services.notification_service import get_notification_service
    from app.services.payment_gateway import get_payment_gateway

    def _get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_booking_service] = lambda: service
    app.dependency_overrides[get_notification_service] = lambda: notifications
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_upload_dir] = lambda: str(tmp_path)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_for():
    return auth_headers


@pytest.fixture
def payment_signature():
    return sign


@pytest.fixture
def webhook_signature():
    return sign_body
