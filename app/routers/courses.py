from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.crud import booking as booking_crud
from app.crud import course as course_crud
from app.crud import tutor as tutor_crud
from app.exceptions import NotFound, PermissionDenied, ValidationError
from app.models.user import User
from app.schemas.common import ActionResponse
from app.schemas.course import (
    CourseCreate,
    CourseUpdate,
    CourseResponse,
    CourseEnvelope,
    CourseListResponse,
)
from app.services.auth import get_current_user
from app.utils.pagination import page_bounds, pagination_meta

router = APIRouter()


def _owned_course(db: Session, course_id: int, user: User):
    course = course_crud.get_course(db, course_id)
    if not course:
        raise NotFound("Course not found")
    tutor = tutor_crud.get_tutor_by_user(db, user.id)
    if not tutor or course.instructor_id != tutor.id:
        raise PermissionDenied("Only the course's tutor can modify it")
    return course


@router.post("/", response_model=CourseEnvelope, status_code=status.HTTP_201_CREATED)
def create_course(
    course: CourseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tutor = tutor_crud.get_tutor_by_user(db, current_user.id)
    if not tutor:
        raise PermissionDenied("Only tutors can create courses")

    db_course = course_crud.create_course(db, tutor.id, course)
    return CourseEnvelope(
        data=CourseResponse.model_validate(db_course), message="Course created"
    )


@router.get("/", response_model=CourseListResponse)
def list_courses(
    category: Optional[str] = None,
    coaching_type: Optional[str] = None,
    tutor_id: Optional[int] = None,
    q: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    skip, limit = page_bounds(page, limit)
    courses, total = course_crud.get_courses(
        db,
        skip=skip,
        limit=limit,
        category=category,
        coaching_type=coaching_type,
        tutor_id=tutor_id,
        q=q,
    )
    return CourseListResponse(
        data=[CourseResponse.model_validate(c) for c in courses],
        pagination=pagination_meta(page, limit, total),
    )


@router.get("/{course_id}", response_model=CourseEnvelope)
def read_course(course_id: int, db: Session = Depends(get_db)):
    course = course_crud.get_course(db, course_id)
    if not course:
        raise NotFound("Course not found")
    return CourseEnvelope(data=CourseResponse.model_validate(course))


@router.put("/{course_id}", response_model=CourseEnvelope)
def update_course(
    course_id: int,
    course: CourseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_course = course_crud.update_course(
        db, _owned_course(db, course_id, current_user), course
    )
    return CourseEnvelope(
        data=CourseResponse.model_validate(db_course), message="Course updated"
    )


@router.delete("/{course_id}", response_model=ActionResponse)
def delete_course(
    course_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    db_course = _owned_course(db, course_id, current_user)
    if booking_crud.count_course_bookings(db, db_course.id):
        raise ValidationError("Course has bookings and cannot be deleted")

    course_crud.delete_course(db, db_course)
    return ActionResponse(message="Course deleted successfully")
