"""Reference data for the program → unit hierarchy and unit visibility."""
from __future__ import annotations

from typing import Sequence

from sqlalchemy.orm import Session

from stratizen_hub.models import (
    ClassInstance,
    Course,
    Group,
    Program,
    Semester,
    Unit,
    User,
    Year,
)
from stratizen_hub.schemas.catalog import ClassInstanceResponse, UnitCreate
from stratizen_hub.services.errors import NotFoundError, UnauthorizedError

__all__ = [
    "create_program",
    "create_course",
    "create_year",
    "create_semester",
    "create_group",
    "create_class_instance",
    "create_unit",
    "get_unit",
    "get_visible_unit",
    "list_units",
    "describe_class_instance",
    "ensure_unit_visible",
]


def create_program(db: Session, name: str) -> Program:
    program = Program(name=name)
    db.add(program)
    db.commit()
    db.refresh(program)
    return program


def create_course(db: Session, program: Program, name: str) -> Course:
    course = Course(name=name, program_id=program.id)
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


def create_year(db: Session, course: Course, name: str) -> Year:
    year = Year(name=name, course_id=course.id)
    db.add(year)
    db.commit()
    db.refresh(year)
    return year


def create_semester(db: Session, year: Year, name: str) -> Semester:
    semester = Semester(name=name, year_id=year.id)
    db.add(semester)
    db.commit()
    db.refresh(semester)
    return semester


def create_group(db: Session, semester: Semester, name: str) -> Group:
    group = Group(name=name, semester_id=semester.id)
    db.add(group)
    db.commit()
    db.refresh(group)
    return group


def create_class_instance(
    db: Session,
    *,
    program: Program,
    course: Course,
    year: Year,
    semester: Semester,
    group: Group,
    admin_id: str | None = None,
) -> ClassInstance:
    """Combine one row from each hierarchy level into a class instance."""
    instance = ClassInstance(
        program_id=program.id,
        course_id=course.id,
        year_id=year.id,
        semester_id=semester.id,
        group_id=group.id,
        admin_id=admin_id,
    )
    db.add(instance)
    db.commit()
    db.refresh(instance)
    return instance


def create_unit(db: Session, data: UnitCreate) -> Unit:
    """Add a unit to an existing class instance."""
    if db.get(ClassInstance, data.class_instance_id) is None:
        raise NotFoundError("Class instance not found")
    unit = Unit(
        name=data.name,
        code=data.code,
        lecturer=data.lecturer,
        class_instance_id=data.class_instance_id,
    )
    db.add(unit)
    db.commit()
    db.refresh(unit)
    return unit


def get_unit(db: Session, unit_id: int) -> Unit:
    """Return a unit or raise NotFoundError."""
    unit = db.get(Unit, unit_id)
    if unit is None:
        raise NotFoundError("Unit not found")
    return unit


def ensure_unit_visible(user: User, unit: Unit) -> None:
    """Reject users outside the unit's class instance unless they are admins."""
    if user.has_admin_rights:
        return
    if user.class_instance_id != unit.class_instance_id:
        raise UnauthorizedError("Unit is not part of your class")


def get_visible_unit(db: Session, user: User, unit_id: int) -> Unit:
    """Return a unit the user is allowed to see."""
    unit = get_unit(db, unit_id)
    ensure_unit_visible(user, unit)
    return unit


def list_units(db: Session, class_instance_id: int) -> Sequence[Unit]:
    """Return the units of a class instance ordered by name."""
    return (
        db.query(Unit)
        .filter(Unit.class_instance_id == class_instance_id)
        .order_by(Unit.name.asc())
        .all()
    )


def describe_class_instance(db: Session, class_instance_id: int) -> ClassInstanceResponse:
    """Return a class instance with the names of each hierarchy level."""
    instance = db.get(ClassInstance, class_instance_id)
    if instance is None:
        raise NotFoundError("Class instance not found")
    return ClassInstanceResponse(
        id=instance.id,
        program=instance.program.name,
        course=instance.course.name,
        year=instance.year.name,
        semester=instance.semester.name,
        group=instance.group.name,
        admin_id=instance.admin_id,
    )
