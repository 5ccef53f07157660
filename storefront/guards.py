"""
Route-access predicates.

Each page is entered only after its guards allow it. A guard answers either
Allow or RedirectTo(path); the UI layer performs the redirect.

- auth_guard: the user must hold a session token, otherwise -> /login
- premium_guard: the user must be premium, otherwise -> /premium/plans
  (fail closed: a failed status request counts as "not premium")
- guest_only: the page is for anonymous users, otherwise -> /home
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .premium import PremiumService
    from .session import SessionStore

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
REGISTER_PATH = "/register"
HOME_PATH = "/home"
PLANS_PATH = "/premium/plans"


@dataclass(frozen=True)
class GuardDecision:
    """
    Outcome of a route check.

    Attributes:
        allowed: True when the page may be entered
        redirect_to: Target path when not allowed
    """
    allowed: bool
    redirect_to: Optional[str] = None

    @classmethod
    def allow(cls) -> "GuardDecision":
        return cls(allowed=True)

    @classmethod
    def redirect(cls, path: str) -> "GuardDecision":
        return cls(allowed=False, redirect_to=path)


def auth_guard(session: "SessionStore") -> GuardDecision:
    if session.is_authenticated():
        return GuardDecision.allow()
    return GuardDecision.redirect(LOGIN_PATH)


def guest_only(session: "SessionStore") -> GuardDecision:
    """Keep authenticated users away from the login page."""
    if session.is_authenticated():
        return GuardDecision.redirect(HOME_PATH)
    return GuardDecision.allow()


def premium_guard(premium: "PremiumService") -> GuardDecision:
    return premium.check_access()


@dataclass(frozen=True)
class Route:
    """A page and the guards consulted, in order, before entering it."""
    path: str
    title: str
    guards: tuple = ()


# Guard names used in the route table
AUTH = "auth"
PREMIUM = "premium"
GUEST = "guest"

ROUTES: List[Route] = [
    Route("/register", "Register", (GUEST,)),
    Route("/login", "Login", (GUEST,)),
    Route("/home", "Home", (AUTH,)),
    Route("/menu", "Menu", (AUTH,)),
    Route("/cart", "Cart", (AUTH,)),
    Route("/premium/plans", "Plans", (AUTH,)),
    Route("/premium/features", "Premium features", (AUTH, PREMIUM)),
    Route("/premium/personalized-plan", "Personalized plan", (AUTH, PREMIUM)),
    Route("/profile", "Profile", (AUTH,)),
    Route("/settings", "Settings", (AUTH,)),
    Route("/contact", "Contact", ()),
]

ROUTES_BY_PATH: Dict[str, Route] = {r.path: r for r in ROUTES}

# Unknown paths land here, like the router's wildcard redirect
DEFAULT_PATH = REGISTER_PATH


def check_route(
    path: str,
    session: "SessionStore",
    premium: "PremiumService",
) -> GuardDecision:
    """
    Run the guards of the route at `path` in order.

    The first guard that does not allow entry decides the redirect. Premium
    status is only requested once the auth guard has passed. Unknown paths
    redirect to DEFAULT_PATH.

    Args:
        path: Requested page path
        session: Session store
        premium: Premium service

    Returns:
        Allow, or RedirectTo the first failing guard's target.
    """
    route = ROUTES_BY_PATH.get(path)
    if route is None:
        return GuardDecision.redirect(DEFAULT_PATH)
    checks: Dict[str, Callable[[], GuardDecision]] = {
        AUTH: lambda: auth_guard(session),
        GUEST: lambda: guest_only(session),
        PREMIUM: lambda: premium_guard(premium),
    }
    for name in route.guards:
        decision = checks[name]()
        if not decision.allowed:
            logger.info("Route %s blocked by %s guard -> %s", route.path, name, decision.redirect_to)
            return decision
    return GuardDecision.allow()
