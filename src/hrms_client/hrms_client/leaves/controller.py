from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..auth.decorators import admin_required, login_required
from ..container import Container
from ..core.enums import LeaveType, RequestStatus
from ..core.exceptions import AuthorizationError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/leaves", methods=["GET", "POST"], endpoint="leaves")
    @login_required
    def leaves(auth):
        if request.method == "POST":
            f = request.form
            try:
                container.leave_service.apply(
                    auth,
                    leave_type=f.get("leave_type", ""),
                    start_date=f.get("start_date", ""),
                    end_date=f.get("end_date", ""),
                    reason=f.get("reason", ""),
                    attachment_url=f.get("attachment_url"),
                )
                flash("Leave request submitted!", "success")
                return redirect(url_for("leaves"))
            except ValidationError as e:
                flash(str(e), "danger")

        items = container.leave_service.my_leaves(auth)
        return render_template(
            "leaves/index.html",
            leaves=items,
            leave_types=list(LeaveType),
            form=request.form,
            active_page="leaves",
        )

    @app.route("/admin/leaves", endpoint="admin_leaves")
    @admin_required
    def admin_leaves(auth):
        status_s = request.args.get("status") or ""
        term = request.args.get("q") or ""
        try:
            status = RequestStatus(status_s) if status_s else None
        except ValueError:
            status = None

        items = container.leave_service.list_requests(auth, status=status)
        items = container.leave_service.search(items, term)
        return render_template(
            "admin/leaves.html",
            leaves=items,
            statuses=list(RequestStatus),
            status=status_s,
            q=term,
            active_page="admin_leaves",
        )

    @app.route("/admin/leaves/<leave_id>/decide", methods=["POST"], endpoint="decide_leave")
    @admin_required
    def decide_leave(auth, leave_id: str):
        status = request.form.get("status", "")
        try:
            container.leave_service.decide(
                auth,
                leave_id=leave_id,
                status=status,
                admin_remarks=request.form.get("admin_remarks", ""),
            )
            flash(f"Leave request {status.lower()}.", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        return redirect(url_for("admin_leaves", status=request.args.get("status")))
