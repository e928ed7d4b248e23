from __future__ import annotations

from flask import Flask, g, request

from ..common.web import bearer_required, body_bool, json_body, ok
from ..container import Container
from .model import AdminUpdate


def register(app: Flask, container: Container) -> None:
    admin_required = bearer_required(container.auth_service.verify_token)

    @app.route("/auth/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        data = json_body()
        token = container.auth_service.authenticate(
            data.get("email", ""),
            data.get("password", ""),
            remember_me=bool(data.get("rememberMe", data.get("remember_me", False))),
        )
        return ok(token)

    @app.route("/auth/admin/register", methods=["POST"], endpoint="admin_register")
    @admin_required
    def admin_register():
        data = json_body()
        admin = container.admin_service.register_admin(
            name=data.get("name", ""),
            surname=data.get("surname", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
        )
        return ok(admin, 201)

    @app.route("/api/admins", methods=["GET"], endpoint="list_admins")
    @admin_required
    def list_admins():
        return ok(container.admin_service.list_admins())

    @app.route("/api/admins/me", methods=["GET"], endpoint="current_admin")
    @admin_required
    def current_admin():
        return ok(container.admin_service.get_admin(g.principal.user_id))

    @app.route("/api/admins/check-email", methods=["GET"], endpoint="admin_check_email")
    @admin_required
    def admin_check_email():
        return ok({"exists": container.admin_service.email_exists(request.args.get("email", ""))})

    @app.route("/api/admins/<int:admin_id>", methods=["GET"], endpoint="get_admin")
    @admin_required
    def get_admin(admin_id: int):
        return ok(container.admin_service.get_admin(admin_id))

    @app.route("/api/admins/<int:admin_id>", methods=["PUT"], endpoint="update_admin")
    @admin_required
    def update_admin(admin_id: int):
        data = json_body()
        update = AdminUpdate(
            name=data.get("name"),
            surname=data.get("surname"),
            email=data.get("email"),
            active=body_bool(data, "active"),
        )
        return ok(container.admin_service.update_admin(admin_id, update))

    @app.route("/api/admins/<int:admin_id>/change-password", methods=["POST"], endpoint="change_admin_password")
    @admin_required
    def change_admin_password(admin_id: int):
        data = json_body()
        container.admin_service.change_password(admin_id, data.get("oldPassword", ""), data.get("newPassword", ""))
        return ok({"message": "Password changed successfully"})

    @app.route("/api/admins/<int:admin_id>/deactivate", methods=["POST"], endpoint="deactivate_admin")
    @admin_required
    def deactivate_admin(admin_id: int):
        return ok(container.admin_service.deactivate_admin(admin_id))

    @app.route("/api/admins/<int:admin_id>/reactivate", methods=["POST"], endpoint="reactivate_admin")
    @admin_required
    def reactivate_admin(admin_id: int):
        return ok(container.admin_service.reactivate_admin(admin_id))

    @app.route("/api/admins/<int:admin_id>", methods=["DELETE"], endpoint="delete_admin")
    @admin_required
    def delete_admin(admin_id: int):
        container.admin_service.delete_admin(admin_id)
        return ok({"message": "Admin deleted successfully"})

    @app.route("/api/users/<int:user_id>/notifications", methods=["GET"], endpoint="list_notifications")
    @admin_required
    def list_notifications(user_id: int):
        return ok(container.notification_service.list_for_user(user_id))

    @app.route("/api/users/<int:user_id>/notifications", methods=["POST"], endpoint="send_notification")
    @admin_required
    def send_notification(user_id: int):
        data = json_body()
        return ok(container.notification_service.send(user_id, data.get("content", "")), 201)

    @app.route("/api/notifications/<int:notif_id>", methods=["DELETE"], endpoint="delete_notification")
    @admin_required
    def delete_notification(notif_id: int):
        container.notification_service.delete_notification(notif_id)
        return ok({"message": "Notification deleted successfully"})
