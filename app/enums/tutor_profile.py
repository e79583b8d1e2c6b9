from enum import Enum


class UserRole(str, Enum):
    STUDENT = "student"
    TUTOR = "tutor"
    ADMIN = "admin"


class TeachingMode(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    BOTH = "both"


class KycStatus(str, Enum):
    NOT_STARTED = "not_started"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class CourseCategory(str, Enum):
    ACADEMIC = "academic"
    PROGRAMMING = "programming"
    LANGUAGE = "language"
    MUSIC = "music"
    ARTS = "arts"
    SPORTS = "sports"
    SCIENCE = "science"
    MATHEMATICS = "mathematics"
    OTHER = "other"
