"""Login and home pages behind the route guard."""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from item_inventory.errors import CollaboratorError
from item_inventory.services.routing import (
    Allow,
    Placeholder,
    guard_route,
    safe_next_path,
)

if TYPE_CHECKING:
    from item_inventory.containers import AppContainer

router = APIRouter(tags=["pages"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/", response_class=HTMLResponse, response_model=None)
async def home(request: Request) -> HTMLResponse | RedirectResponse:
    """Protected home page."""
    container = _container(request)
    decision = guard_route(
        container.session_context.state,
        request.url.path,
        container.settings.login_path,
    )
    if isinstance(decision, Placeholder):
        return HTMLResponse(_PLACEHOLDER_HTML.format(text=html.escape(decision.text)))
    if isinstance(decision, Allow):
        email = decision.session.user.email or "unknown user"
        return HTMLResponse(_HOME_HTML.format(email=html.escape(email)))
    return RedirectResponse(decision.location, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/login", response_class=HTMLResponse, response_model=None)
async def login_form(
    request: Request, next: str | None = None  # noqa: A002
) -> HTMLResponse | RedirectResponse:
    """Render the login form, or continue if already signed in."""
    target = safe_next_path(next)
    if _container(request).session_context.is_authenticated:
        return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)
    return HTMLResponse(_login_html(target, error=None))


@router.post("/login", response_class=HTMLResponse, response_model=None)
async def login_submit(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    next: str = Form(default="/"),  # noqa: A002
) -> HTMLResponse | RedirectResponse:
    """Sign in and continue to the originally requested page."""
    target = safe_next_path(next)
    try:
        await _container(request).session_context.sign_in(email, password)
    except CollaboratorError as exc:
        return HTMLResponse(
            _login_html(target, error=exc.reason),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/logout")
async def logout(request: Request) -> RedirectResponse:
    """Sign out and return to the login page."""
    container = _container(request)
    await container.session_context.sign_out()
    return RedirectResponse(
        container.settings.login_path, status_code=status.HTTP_303_SEE_OTHER
    )


def _login_html(next_path: str, error: str | None) -> str:
    error_html = f'<p role="alert">{html.escape(error)}</p>' if error else ""
    return _LOGIN_HTML.format(next=html.escape(next_path), error=error_html)


_PLACEHOLDER_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta http-equiv="refresh" content="1" />
    <title>Item Inventory</title>
  </head>
  <body>
    <div>{text}</div>
  </body>
</html>
"""

_LOGIN_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Login</title>
  </head>
  <body>
    <main>
      <h1>Login</h1>
      <form method="post" action="/login">
        <input type="hidden" name="next" value="{next}" />
        <label for="email">Email</label>
        <input id="email" name="email" type="email" autocomplete="email" required />
        <label for="password">Password</label>
        <input
          id="password"
          name="password"
          type="password"
          autocomplete="current-password"
          required
        />
        <button type="submit">Sign in</button>
      </form>
      {error}
      <p>Protected route example: <a href="/">Home</a></p>
    </main>
  </body>
</html>
"""

_HOME_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Item Inventory</title>
  </head>
  <body>
    <main>
      <h1>Protected Home</h1>
      <p>Signed in as: {email}</p>
      <form method="post" action="/logout">
        <button type="submit">Sign out</button>
      </form>
    </main>
  </body>
</html>
"""
