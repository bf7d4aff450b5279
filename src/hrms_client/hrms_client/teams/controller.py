from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..auth.decorators import admin_required, login_required
from ..container import Container
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/teams", methods=["GET", "POST"], endpoint="teams")
    @login_required
    def teams(auth):
        if request.method == "POST":
            try:
                container.team_service.create(
                    auth,
                    team_name=request.form.get("team_name", ""),
                    description=request.form.get("description", ""),
                    member_ids=request.form.getlist("members"),
                    team_leader=request.form.get("team_leader") or None,
                )
                flash("Team created!", "success")
                return redirect(url_for("teams"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")

        items = container.team_service.list_teams(auth)
        employees = container.employee_service.list_employees(auth) if auth.is_admin_or_hr else []
        return render_template("teams/index.html", teams=items, employees=employees, active_page="teams")

    @app.route("/teams/<team_id>", methods=["GET", "POST"], endpoint="team_detail")
    @login_required
    def team_detail(auth, team_id: str):
        if request.method == "POST":
            try:
                container.team_service.update_members(
                    auth,
                    team_id=team_id,
                    member_ids=request.form.getlist("members"),
                    team_leader=request.form.get("team_leader") or None,
                )
                flash("Team members updated!", "success")
                return redirect(url_for("team_detail", team_id=team_id))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")

        try:
            team = container.team_service.get(auth, team_id)
        except NotFoundError as e:
            flash(str(e), "warning")
            return redirect(url_for("teams"))

        employees = container.employee_service.list_employees(auth) if auth.is_admin_or_hr else []
        return render_template(
            "teams/detail.html",
            team=team,
            member_ids=team.member_ids(),
            employees=employees,
            active_page="teams",
        )

    @app.route("/teams/<team_id>/delete", methods=["POST"], endpoint="delete_team")
    @admin_required
    def delete_team(auth, team_id: str):
        try:
            container.team_service.delete(auth, team_id)
            flash("Team deleted.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        return redirect(url_for("teams"))

    @app.route("/admin/teams/pending", endpoint="pending_teams")
    @admin_required
    def pending_teams(auth):
        items = container.team_service.pending(auth)
        return render_template("admin/pending_teams.html", teams=items, active_page="pending_teams")

    @app.route("/admin/teams/<team_id>/decide", methods=["POST"], endpoint="decide_team")
    @admin_required
    def decide_team(auth, team_id: str):
        status = request.form.get("status", "")
        try:
            container.team_service.decide(auth, team_id=team_id, status=status)
            flash(f"Team {status.lower()}.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        return redirect(url_for("pending_teams"))
