from __future__ import annotations

from http import HTTPStatus

from flask import Flask, jsonify, request

from ..container import Container
from ..web.guards import admin_required, login_required
from ..web.params import json_body
from ..web.serialize import to_json, to_json_list


def register(app: Flask, container: Container) -> None:
    products = container.product_service

    @app.route("/products", methods=["POST"], endpoint="create_product")
    @admin_required
    def create_product():
        data = json_body()
        product = products.create_product(
            name=data.get("name"),
            description=data.get("description"),
            price=data.get("price"),
            stock=data.get("stock", 0),
        )
        return jsonify(to_json(product)), HTTPStatus.CREATED

    @app.route("/products", methods=["GET"], endpoint="list_products")
    @login_required
    def list_products():
        return jsonify(to_json_list(products.list_products()))

    @app.route("/products/search", methods=["GET"], endpoint="search_products")
    @login_required
    def search_products():
        return jsonify(to_json_list(products.search_products(request.args.get("name"))))

    @app.route("/products/<int:product_id>", methods=["GET"], endpoint="get_product")
    @login_required
    def get_product(product_id: int):
        return jsonify(to_json(products.get_product(product_id)))

    @app.route("/products/<int:product_id>", methods=["PUT"], endpoint="update_product")
    @admin_required
    def update_product(product_id: int):
        data = json_body()
        product = products.update_product(
            product_id,
            name=data.get("name"),
            description=data.get("description"),
            price=data.get("price"),
            stock=data.get("stock"),
        )
        return jsonify(to_json(product))

    @app.route("/products/<int:product_id>", methods=["DELETE"], endpoint="delete_product")
    @admin_required
    def delete_product(product_id: int):
        products.delete_product(product_id)
        return "", HTTPStatus.NO_CONTENT
