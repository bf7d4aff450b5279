from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .decorators import clear_auth, current_auth, store_auth
from .service import NewAccount

logger = logging.getLogger(__name__)


def home_endpoint(auth) -> str:
    return "admin_dashboard" if auth.is_admin_or_hr else "dashboard"


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        auth = current_auth()
        if auth is not None:
            return redirect(url_for(home_endpoint(auth)))

        if request.method == "POST":
            identifier = request.form.get("identifier", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                auth = container.auth_service.login(identifier, password)

                session.permanent = bool(remember)
                app.permanent_session_lifetime = timedelta(days=7)
                store_auth(auth)

                logger.info("login: %s (%s)", auth.employee_id, auth.role.value)
                flash(f"Welcome back, {auth.name}!", "success")
                return redirect(url_for(home_endpoint(auth)))
            except (AuthenticationError, ValidationError) as e:
                flash(str(e), "danger")

        return render_template("login.html")

    @app.route("/signup", methods=["GET", "POST"], endpoint="signup")
    def signup():
        if request.method == "POST":
            f = request.form
            try:
                try:
                    role = Role(f.get("role", Role.EMPLOYEE.value))
                except ValueError:
                    raise ValidationError("Invalid role")

                auth = container.auth_service.register(
                    NewAccount(
                        employee_id=f.get("employee_id", ""),
                        email=f.get("email", ""),
                        password=f.get("password", ""),
                        confirm_password=f.get("confirm_password", ""),
                        role=role,
                        first_name=f.get("first_name", ""),
                        last_name=f.get("last_name", ""),
                        gender=f.get("gender") or None,
                        company_name=f.get("company_name") or None,
                        company_code=f.get("company_code") or None,
                    )
                )
                store_auth(auth)
                flash("Account created successfully!", "success")
                return redirect(url_for(home_endpoint(auth)))
            except ValidationError as e:
                flash(str(e), "danger")

        return render_template("signup.html", roles=list(Role), form=request.form)

    @app.route("/logout", endpoint="logout")
    def logout():
        auth = current_auth()
        if auth is not None:
            container.end_session(auth)
        clear_auth()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))
