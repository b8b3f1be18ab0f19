from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_email, require_in_range, require_non_empty
from ..core.constants import MAX_STUDENT_AGE, MIN_STUDENT_AGE
from ..core.exceptions import ConflictError
from ..store.predicates import Contains, Equals
from ..store.repository import RecordStore
from .model import Student


class StudentService:
    """Use case: maintain student records. Emails are unique (case-insensitive)."""

    def __init__(self, store: RecordStore):
        self._store = store

    @staticmethod
    def _build(*, name: str, email: str, age: object, course: str, student_id: Optional[int] = None) -> Student:
        return Student(
            name=require_non_empty(name, "name"),
            email=require_email(email).lower(),
            age=require_in_range(age, "age", MIN_STUDENT_AGE, MAX_STUDENT_AGE),
            course=require_non_empty(course, "course"),
            id=student_id,
        )

    def _ensure_email_free(self, store: RecordStore, email: str, student_id: Optional[int]) -> None:
        for other in store.find_where(Student, Equals("email", email, ignore_case=True)):
            if other.id != student_id:
                raise ConflictError("A student with this email already exists")

    def create_student(self, *, name: str, email: str, age: object, course: str) -> Student:
        student = self._build(name=name, email=email, age=age, course=course)
        with self._store.transaction() as store:
            self._ensure_email_free(store, student.email, None)
            return store.save(Student, student)

    def get_student(self, student_id: int) -> Student:
        return self._store.require(Student, student_id)

    def list_students(self) -> Sequence[Student]:
        return self._store.find_all(Student)

    def update_student(self, student_id: int, *, name: str, email: str, age: object, course: str) -> Student:
        student = self._build(name=name, email=email, age=age, course=course, student_id=int(student_id))
        with self._store.transaction() as store:
            self._ensure_email_free(store, student.email, student.id)
            return store.save(Student, student)

    def delete_student(self, student_id: int) -> None:
        self._store.delete(Student, student_id)

    def search_students(self, name: Optional[str]) -> Sequence[Student]:
        if not name or not name.strip():
            return self._store.find_all(Student)
        return self._store.find_where(Student, Contains("name", name.strip()))
