from __future__ import annotations

import importlib

from loguru import logger

from record_suite.config import get_settings_module
from record_suite.container import build_container, build_store


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store, conn = build_store(backend=getattr(settings, "STORE_BACKEND", "mysql"), db_config=settings.DB_CONFIG)
    container = build_container(store=store, conn=conn)

    admin = container.employee_service.ensure_admin(
        username=settings.ADMIN_USERNAME,
        password=settings.ADMIN_PASSWORD,
    )
    library = container.library_service
    if not library.list_books():
        library.add_book(title="Dune", author="Frank Herbert", category="Science Fiction")
        library.add_book(title="The Hobbit", author="J. R. R. Tolkien", category="Fantasy")
        library.add_borrower(name="Demo Reader", email="reader@example.com")

    logger.info("OK: Seeded database (admin id={})", admin.id)


if __name__ == "__main__":
    main()
