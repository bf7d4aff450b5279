from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import flash, redirect, render_template, session, url_for

from .model import AuthSession

SESSION_KEY = "auth"


def current_auth() -> Optional[AuthSession]:
    data = session.get(SESSION_KEY)
    if not data:
        return None
    try:
        return AuthSession.from_dict(data)
    except (KeyError, TypeError, ValueError):
        session.pop(SESSION_KEY, None)
        return None


def store_auth(auth: AuthSession) -> None:
    session[SESSION_KEY] = auth.to_dict()


def clear_auth() -> None:
    session.pop(SESSION_KEY, None)


def render_forbidden(auth: Optional[AuthSession]):
    return render_template("403.html", current_user=auth), 403


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        auth = current_auth()
        if auth is None:
            flash("Please log in to continue", "warning")
            return redirect(url_for("login"))
        return view(auth, *args, **kwargs)

    return wrapper


def admin_required(view):
    """Allow Admin and HR Officer roles only."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        auth = current_auth()
        if auth is None:
            return redirect(url_for("login"))
        if not auth.is_admin_or_hr:
            return render_forbidden(auth)
        return view(auth, *args, **kwargs)

    return wrapper
