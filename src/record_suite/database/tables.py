from __future__ import annotations

from ..attendance.model import AttendanceRecord, Employee
from ..catalog.model import Product
from ..library.model import Book, Borrower, Loan
from ..store.mapping import EntityMapping
from ..students.model import Student

PRODUCTS = EntityMapping(Product, "products")
BOOKS = EntityMapping(Book, "books")
BORROWERS = EntityMapping(Borrower, "borrowers")
LOANS = EntityMapping(Loan, "loans")
STUDENTS = EntityMapping(Student, "students", unique=(("email",),))
EMPLOYEES = EntityMapping(Employee, "employees", unique=(("username",),))
ATTENDANCE = EntityMapping(AttendanceRecord, "attendance_records", unique=(("employee_id", "work_date"),))

ALL_MAPPINGS = (PRODUCTS, BOOKS, BORROWERS, LOANS, STUDENTS, EMPLOYEES, ATTENDANCE)
