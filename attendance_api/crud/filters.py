"""
Compile the optional attendance query parameters into SQLAlchemy predicates.

Each builder looks at the raw option bag and returns either a predicate on
``Student`` or ``None``. Malformed optional values never raise: they are
logged and the filter is dropped.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from sqlalchemy import and_, true
from sqlalchemy.sql.elements import ColumnElement

from attendance_api.models.student import Student

logger = logging.getLogger(__name__)

ALL = "all"


@dataclass(frozen=True)
class FilterOptions:
    student_name: Optional[str] = None
    level: Optional[str] = None
    department_id: Optional[str] = None
    campus_id: Optional[str] = None
    month: Optional[str] = None
    year: Optional[str] = None


@dataclass(frozen=True)
class CompiledFilters:
    predicates: List[ColumnElement] = field(default_factory=list)
    month: Optional[int] = None
    year: Optional[int] = None

    @property
    def has_period(self) -> bool:
        return self.month is not None and self.year is not None

    @property
    def student_clause(self) -> ColumnElement:
        if not self.predicates:
            return true()
        return and_(*self.predicates)


def _is_set(value: Optional[str]) -> bool:
    return value is not None and str(value).strip() != "" and str(value).strip() != ALL


def parse_int(value, field_name: str) -> Optional[int]:
    """Parse an optional integer filter, returning None instead of raising."""
    if value is None or str(value).strip() == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        logger.warning(f"Invalid {field_name}: {value!r}, filter ignored")
        return None


def _name_filter(options: FilterOptions) -> Optional[ColumnElement]:
    if not options.student_name or not options.student_name.strip():
        return None
    return Student.name.icontains(options.student_name.strip(), autoescape=True)


def _level_filter(options: FilterOptions) -> Optional[ColumnElement]:
    if not _is_set(options.level):
        return None
    return Student.level == options.level


def _department_filter(options: FilterOptions) -> Optional[ColumnElement]:
    if not _is_set(options.department_id):
        return None
    department_id = parse_int(options.department_id, "departmentId")
    if department_id is None:
        return None
    return Student.department_id == department_id


def _campus_filter(options: FilterOptions) -> Optional[ColumnElement]:
    if not _is_set(options.campus_id):
        return None
    campus_id = parse_int(options.campus_id, "campusId")
    if campus_id is None:
        return None
    return Student.campus_id == campus_id


PREDICATE_BUILDERS: Tuple[Callable[[FilterOptions], Optional[ColumnElement]], ...] = (
    _name_filter,
    _level_filter,
    _department_filter,
    _campus_filter,
)


def compile_filters(options: FilterOptions) -> CompiledFilters:
    predicates = []
    for build in PREDICATE_BUILDERS:
        predicate = build(options)
        if predicate is not None:
            predicates.append(predicate)

    month = parse_int(options.month, "month")
    year = parse_int(options.year, "year")

    compiled = CompiledFilters(predicates=predicates, month=month, year=year)
    logger.debug(
        f"Compiled {len(predicates)} student predicate(s), "
        f"period: {(month, year) if compiled.has_period else None}"
    )
    return compiled
