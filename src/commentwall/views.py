"""Routes of the comment wall and the factory that wires them up.

Five outcomes per request: the login form, a login attempt, a profile
page, a comment post, or "Page not found". Everything outside ``/`` and
``/login`` sits behind ``SessionGate``; the profile and comment handlers
then repeat their own session checks.
"""

import logging
import secrets

from commentwall.app import App
from commentwall.config import AppConfig
from commentwall.errors import ConfigurationError, Forbidden, MethodNotAllowed, NotFound
from commentwall.http.request import Request
from commentwall.http.response import Redirect, Response
from commentwall.middleware.gate import GateConfig, SessionGate
from commentwall.middleware.sessions import SessionConfig, SessionMiddleware
from commentwall.security.audit import emit_security_event
from commentwall.session import SessionAccessor, current_session
from commentwall.store import DEFAULT_COMMENTS, Store, default_users
from commentwall.templating.returns import Template
from commentwall.validation import validate

logger = logging.getLogger("commentwall.views")

HOME_TITLE = "Welcome to the Store"
INVALID_CREDENTIALS = "Invalid credentials. Please try again."
INVALID_COMMENT = "Invalid comment. Please try again."
ACCESS_DENIED = "Access denied!"
USER_NOT_FOUND = "User not found"
PAGE_NOT_FOUND = "Page not found"

PUBLIC_PATHS = frozenset({"/", "/login"})


def home() -> Template:
    return Template("home.html", title=HOME_TITLE)


async def login(request: Request, store: Store, session: SessionAccessor) -> Redirect | str:
    """Exact email + password match against the user list, first hit wins."""
    form = await request.form()
    email = form.get("email") or ""
    user = store.find_by_credentials(email, form.get("password") or "")

    if user is None:
        emit_security_event("auth.login.failure", request=request, details={"email": email})
        return INVALID_CREDENTIALS

    session.set_current_user_id(user.id)
    emit_security_event("auth.login.success", request=request, user_id=user.id)
    return Redirect(f"/user/{user.id}")


def profile(
    request: Request,
    id: str,  # noqa: A002
    store: Store,
    session: SessionAccessor,
) -> Template:
    """Profile of the logged-in user plus every comment on the wall.

    Only the owner may view a profile; the id in the path is compared to
    the session id as a plain string before any lookup happens.
    """
    session_user_id = session.get_current_user_id()
    if session_user_id != id:
        emit_security_event(
            "auth.access.denied",
            request=request,
            user_id=session_user_id,
            details={"requested": id},
        )
        raise Forbidden(ACCESS_DENIED)

    user = store.get_user(id)
    if user is None:
        raise NotFound(USER_NOT_FOUND)

    return Template("profile.html", user=user, comments=store.comments())


async def post_comment(request: Request, store: Store, session: SessionAccessor) -> Redirect | str:
    user_id = session.get_current_user_id()
    if user_id is None:
        return Redirect("/")

    form = await request.form()
    text = form.get("comment") or ""
    if not validate(text):
        logger.info("Rejected comment from %s: %r", user_id, text)
        emit_security_event("comment.rejected", request=request, user_id=user_id)
        return INVALID_COMMENT

    store.add_comment(text)
    logger.info("Received comment: %s", text)
    return Redirect(f"/user/{user_id}")


def page_not_found() -> Response:
    return Response(body=PAGE_NOT_FOUND, status=404)


def _session_secret(config: AppConfig) -> str:
    if config.secret_key:
        return config.secret_key
    if config.debug:
        logger.warning("No secret key configured; using a random per-process key (debug only)")
        return secrets.token_urlsafe(32)
    msg = "A secret key is required outside debug mode. Set COMMENTWALL_SECRET_KEY."
    raise ConfigurationError(msg)


def create_app(config: AppConfig | None = None, store: Store | None = None) -> App:
    """Build the comment wall application.

    Args:
        config: Application settings. Defaults to ``AppConfig.from_env()``.
        store: Users and comments. Defaults to the three demo users and
            one seed comment, created fresh for this app.
    """
    config = config or AppConfig.from_env()
    if store is None:
        store = Store(default_users(), comments=DEFAULT_COMMENTS)

    app = App(config)

    app.add_middleware(
        SessionMiddleware(
            SessionConfig(
                secret_key=_session_secret(config),
                cookie_name=config.session_cookie,
                max_age=config.session_max_age,
            )
        )
    )
    app.add_middleware(SessionGate(GateConfig(whitelist=PUBLIC_PATHS, redirect_to="/")))

    app.provide(Store, lambda: store)
    app.provide(SessionAccessor, current_session)

    app.route("/", name="home")(home)
    app.route("/login", methods=["POST"], name="login")(login)
    app.route("/user/{id}", name="profile")(profile)
    app.route("/comments", methods=["POST"], name="comments")(post_comment)

    # A known path with the wrong method is just another unknown page
    app.error(MethodNotAllowed)(page_not_found)

    return app
