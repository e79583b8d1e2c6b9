from app.database import Base  # noqa: F401  (must load before any model module)
from app.models.user import User
from app.models.tutor import Tutor
from app.models.course import Course
from app.models.booking import Booking
from app.models.review import Review
from app.models.kyc import KycDocument
from app.models.chat_message import ChatMessage
from app.models.notification import Notification
from app.models.fcm_token import FCMToken

# This makes the models directory a Python package and ensures all models are loaded
