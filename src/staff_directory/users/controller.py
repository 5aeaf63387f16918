from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..container import Container
from .query import UserQuery

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def json_body():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    def server_error(action: str):
        logger.exception("%s failed", action)
        return jsonify({"message": "Server error"}), 500

    @app.route("/users", methods=["GET"], endpoint="list_users")
    def list_users():
        try:
            users = container.user_service.list_users(UserQuery.from_args(request.args))
            return jsonify([u.public_dict() for u in users])
        except Exception:
            return server_error("List users")

    @app.route("/users/<user_id>", methods=["GET"], endpoint="get_user")
    def get_user(user_id: str):
        try:
            user = container.user_service.get_user(user_id)
            return jsonify(user.public_dict())
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        except Exception:
            return server_error("Get user")

    @app.route("/sign-in", methods=["POST"], endpoint="sign_in")
    def sign_in():
        try:
            data = json_body()
            s_user = container.auth_service.sign_in(
                email=data.get("email", ""),
                password=data.get("password", ""),
            )
            return jsonify({"message": "Authenticated", "user": s_user})
        except (AuthenticationError, ValidationError):
            # Same answer for a bad body, an unknown email and a wrong password.
            return jsonify({"error": "Invalid credentials"}), 401
        except Exception:
            return server_error("Sign-in")

    @app.route("/sign-up", methods=["POST"], endpoint="sign_up")
    def sign_up():
        try:
            data = json_body()
            user = container.auth_service.sign_up(
                first_name=data.get("first_name"),
                last_name=data.get("last_name"),
                email=data.get("email"),
                password=data.get("password"),
            )
            return jsonify({"message": "User created", "user": user.email})
        except (ValidationError, ConflictError) as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            return server_error("Sign-up")

    @app.route("/users/<user_id>/role", methods=["PATCH"], endpoint="update_role")
    def update_role(user_id: str):
        try:
            data = json_body()
            user = container.user_service.update_role(user_id=user_id, role=data.get("role"))
            return jsonify({"message": "Role updated", "user": user.public_dict()})
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        except Exception:
            return server_error("Role update")

    @app.route("/users/<user_id>", methods=["PATCH"], endpoint="update_user")
    def update_user(user_id: str):
        try:
            data = json_body()
            user = container.user_service.update_user(user_id=user_id, updates=data)
            return jsonify({"message": "User updated", "user": user.public_dict()})
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        except Exception:
            return server_error("User update")
