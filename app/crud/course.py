from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import List, Optional, Tuple

from app.models.course import Course
from app.schemas.course import CourseCreate, CourseUpdate


def get_course(db: Session, course_id: int) -> Optional[Course]:
    return db.query(Course).filter(Course.id == course_id).first()


def get_courses(
    db: Session,
    skip: int = 0,
    limit: int = 10,
    category: Optional[str] = None,
    coaching_type: Optional[str] = None,
    tutor_id: Optional[int] = None,
    q: Optional[str] = None,
) -> Tuple[List[Course], int]:
    query = db.query(Course)

    if category:
        query = query.filter(Course.category == category)
    if coaching_type:
        query = query.filter(
            or_(Course.coaching_type == coaching_type, Course.coaching_type == "both")
        )
    if tutor_id:
        query = query.filter(Course.instructor_id == tutor_id)
    if q:
        query = query.filter(
            or_(Course.title.ilike(f"%{q}%"), Course.description.ilike(f"%{q}%"))
        )

    total = query.count()
    courses = (
        query.order_by(Course.is_featured.desc(), Course.created_at.desc(), Course.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return courses, total


def create_course(db: Session, instructor_id: int, course: CourseCreate) -> Course:
    data = course.model_dump()
    data["category"] = course.category.value
    data["coaching_type"] = course.coaching_type.value
    db_course = Course(instructor_id=instructor_id, **data)
    db.add(db_course)
    db.commit()
    db.refresh(db_course)
    return db_course


def update_course(db: Session, db_course: Course, course: CourseUpdate) -> Course:
    update_data = course.model_dump(exclude_unset=True)
    for field in ("category", "coaching_type"):
        if update_data.get(field) is not None:
            update_data[field] = update_data[field].value
    for field, value in update_data.items():
        setattr(db_course, field, value)

    db.commit()
    db.refresh(db_course)
    return db_course


def delete_course(db: Session, db_course: Course) -> None:
    db.delete(db_course)
    db.commit()
