"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

from record_suite.core.enums import AttendanceStatus
from record_suite.container import build_container, build_store


def main():
    store, conn = build_store(backend="memory")
    container = build_container(store=store, conn=conn)

    library = container.library_service
    book = library.add_book(title="Dune", author="Frank Herbert", category="Science Fiction")
    reader = library.add_borrower(name="Ada", email="ada@example.com")
    loan = library.lend(book.id, reader.id)
    print(loan)
    print(library.return_loan(loan.id))

    admin = container.employee_service.ensure_admin(username="admin", password="admin123")
    print(container.attendance_service.mark_attendance(admin.id, AttendanceStatus.PRESENT))


if __name__ == "__main__":
    main()
