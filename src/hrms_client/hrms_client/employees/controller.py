from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..auth.decorators import admin_required, login_required, store_auth
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import DEDUCTION_FIELDS, EARNING_FIELDS
from .service import NewEmployee

PROFILE_FORM_FIELDS = (
    "first_name",
    "last_name",
    "phone",
    "address",
    "gender",
    "marital_status",
    "job_title",
    "designation",
    "department",
    "date_of_birth",
    "date_of_joining",
    "profile_picture_url",
    "bank_account_number",
    "pan_number",
    "aadhar_number",
)


def _profile_changes(form) -> dict:
    return {name: form.get(name, "").strip() for name in PROFILE_FORM_FIELDS if name in form}


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/employees", endpoint="admin_employees")
    @admin_required
    def admin_employees(auth):
        term = request.args.get("q") or ""
        employees = container.employee_service.search(container.employee_service.list_employees(auth), term)
        return render_template("admin/employees.html", employees=employees, q=term, active_page="admin_employees")

    @app.route("/admin/employees/new", methods=["GET", "POST"], endpoint="add_employee")
    @admin_required
    def add_employee(auth):
        if request.method == "POST":
            f = request.form
            try:
                try:
                    role = Role(f.get("role", Role.EMPLOYEE.value))
                except ValueError:
                    raise ValidationError("Invalid role")

                salary = None
                if any(f.get(name) for name in EARNING_FIELDS + DEDUCTION_FIELDS):
                    salary = container.employee_service.salary_from_form(f)

                emp = container.employee_service.create(
                    auth,
                    NewEmployee(
                        first_name=f.get("first_name", ""),
                        last_name=f.get("last_name", ""),
                        email=f.get("email", ""),
                        department=f.get("department", ""),
                        designation=f.get("designation", ""),
                        role=role,
                        phone=f.get("phone") or None,
                        gender=f.get("gender") or None,
                        date_of_joining=f.get("date_of_joining") or None,
                        team=f.get("team") or None,
                        salary_structure=salary,
                    ),
                )
                flash(f"Employee {emp.employee_id} created!", "success")
                return redirect(url_for("admin_employees"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")

        roles = [Role.EMPLOYEE, Role.HR_OFFICER] if auth.role == Role.ADMIN else [Role.EMPLOYEE]
        return render_template(
            "admin/add_employee.html",
            roles=roles,
            teams=container.team_service.list_teams(auth),
            earning_fields=EARNING_FIELDS,
            deduction_fields=DEDUCTION_FIELDS,
            form=request.form,
            active_page="add_employee",
        )

    @app.route("/admin/employees/<employee_id>", endpoint="employee_detail")
    @admin_required
    def employee_detail(auth, employee_id: str):
        try:
            emp = container.employee_service.resolve(auth, container.employee_service.parse_ref(employee_id))
        except (NotFoundError, ValidationError) as e:
            flash(str(e), "warning")
            return redirect(url_for("admin_employees"))
        return render_template(
            "admin/employee_detail.html",
            employee=emp,
            earning_fields=EARNING_FIELDS,
            deduction_fields=DEDUCTION_FIELDS,
            active_page="admin_employees",
        )

    @app.route("/admin/employees/<employee_id>/salary", methods=["POST"], endpoint="update_salary")
    @admin_required
    def update_salary(auth, employee_id: str):
        try:
            salary = container.employee_service.salary_from_form(request.form)
            container.employee_service.update_salary(auth, employee_id, salary)
            flash("Salary structure updated!", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        return redirect(url_for("employee_detail", employee_id=employee_id))

    @app.route("/admin/employees/<employee_id>/profile", methods=["POST"], endpoint="update_employee_profile")
    @admin_required
    def update_employee_profile(auth, employee_id: str):
        try:
            container.employee_service.update_profile(auth, employee_id, _profile_changes(request.form))
            flash("Profile updated!", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        return redirect(url_for("employee_detail", employee_id=employee_id))

    @app.route("/profile", methods=["GET", "POST"], endpoint="profile")
    @login_required
    def profile(auth):
        if request.method == "POST":
            try:
                _, new_auth = container.employee_service.update_own_profile(auth, _profile_changes(request.form))
                store_auth(new_auth)
                flash("Profile updated!", "success")
                return redirect(url_for("profile"))
            except ValidationError as e:
                flash(str(e), "danger")

        emp = container.employee_service.get_own_profile(auth)
        return render_template(
            "profile.html",
            employee=emp,
            can_edit_all=auth.role != Role.EMPLOYEE,
            active_page="profile",
        )
