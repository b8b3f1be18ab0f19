from __future__ import annotations

from http import HTTPStatus

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..web.guards import admin_required, login_required
from ..web.params import date_arg, int_arg, json_body
from ..web.serialize import to_json, to_json_list


def register(app: Flask, container: Container) -> None:
    library = container.library_service

    @app.route("/books", methods=["POST"], endpoint="add_book")
    @admin_required
    def add_book():
        data = json_body()
        book = library.add_book(title=data.get("title"), author=data.get("author"), category=data.get("category"))
        return jsonify(to_json(book)), HTTPStatus.CREATED

    @app.route("/books", methods=["GET"], endpoint="list_books")
    @login_required
    def list_books():
        return jsonify(to_json_list(library.list_books()))

    @app.route("/books/search", methods=["GET"], endpoint="search_books")
    @login_required
    def search_books():
        books = library.search_books(
            title=request.args.get("title"),
            author=request.args.get("author"),
            category=request.args.get("category"),
        )
        return jsonify(to_json_list(books))

    @app.route("/books/<int:book_id>", methods=["GET"], endpoint="get_book")
    @login_required
    def get_book(book_id: int):
        return jsonify(to_json(library.get_book(book_id)))

    @app.route("/books/<int:book_id>", methods=["DELETE"], endpoint="remove_book")
    @admin_required
    def remove_book(book_id: int):
        library.remove_book(book_id)
        return "", HTTPStatus.NO_CONTENT

    @app.route("/borrowers", methods=["POST"], endpoint="add_borrower")
    @login_required
    def add_borrower():
        data = json_body()
        membership = data.get("membershipDate")
        borrower = library.add_borrower(
            name=data.get("name"),
            email=data.get("email"),
            membership_date=parse_iso_date(membership) if membership else None,
        )
        return jsonify(to_json(borrower)), HTTPStatus.CREATED

    @app.route("/borrowers", methods=["GET"], endpoint="list_borrowers")
    @login_required
    def list_borrowers():
        return jsonify(to_json_list(library.list_borrowers()))

    @app.route("/borrowers/<int:borrower_id>", methods=["GET"], endpoint="get_borrower")
    @login_required
    def get_borrower(borrower_id: int):
        return jsonify(to_json(library.get_borrower(borrower_id)))

    @app.route("/lend", methods=["POST"], endpoint="lend_book")
    @login_required
    def lend_book():
        loan = library.lend(int_arg("bookId"), int_arg("borrowerId"))
        return jsonify(to_json(loan)), HTTPStatus.CREATED

    @app.route("/return", methods=["POST"], endpoint="return_book")
    @login_required
    def return_book():
        loan = library.return_loan(int_arg("loanId"))
        return jsonify(to_json(loan))

    @app.route("/loans/<int:loan_id>", methods=["GET"], endpoint="get_loan")
    @login_required
    def get_loan(loan_id: int):
        return jsonify(to_json(library.get_loan(loan_id)))

    @app.route("/reports/overdue", methods=["GET"], endpoint="overdue_report")
    @admin_required
    def overdue_report():
        return jsonify(to_json_list(library.overdue_loans(date_arg("asOf"))))

    @app.route("/reports/history/<int:borrower_id>", methods=["GET"], endpoint="borrower_history")
    @admin_required
    def borrower_history(borrower_id: int):
        return jsonify(to_json_list(library.borrower_history(borrower_id)))
