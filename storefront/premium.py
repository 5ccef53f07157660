"""
Premium gate: subscription status, plans and purchases.

The premium flag is a single in-memory boolean with observable semantics:
subscribers get the current value on subscribe and every value set afterwards.

Lifecycle of the flag:
- False at construction
- load_status() at start: fetched from GET /api/user/status when a session
  exists (a failed request leaves it False)
- purchase_plan(): set to True optimistically once POST /api/purchase
  succeeds, without re-fetching
- Never refreshed otherwise, so a revoked subscription goes unnoticed until
  the next start

check_access() does not use the cached flag: it asks the backend every time
and fails closed.
"""

import logging
from typing import Any, Callable, List, Optional

from pydantic import TypeAdapter, ValidationError

from .api_client import ApiClient
from .errors import StorefrontError
from .guards import PLANS_PATH, GuardDecision
from .models import SubscriptionPlan, SubscriptionStatus
from .session import SessionStore

logger = logging.getLogger(__name__)

_PLAN_LIST = TypeAdapter(List[SubscriptionPlan])

PremiumListener = Callable[[bool], None]


class PremiumService:
    """
    Subscription backend wrapper plus the cached premium flag.

    Args:
        client: ApiClient bound to the subscription backend ("<api>/api"),
                with a token provider reading the session token
        session: Session store, consulted by load_status()
    """

    def __init__(self, client: ApiClient, session: SessionStore) -> None:
        self.client = client
        self.session = session
        self._premium = False
        self._listeners: List[PremiumListener] = []

    @property
    def is_premium(self) -> bool:
        return self._premium

    def subscribe(self, listener: PremiumListener) -> Callable[[], None]:
        """
        Observe the premium flag.

        The listener is called immediately with the current value.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)
        listener(self._premium)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_premium(self, value: bool) -> None:
        self._premium = value
        for listener in list(self._listeners):
            listener(value)

    def reset(self) -> None:
        """Drop the cached flag (used on logout)."""
        self._set_premium(False)

    def load_status(self) -> None:
        """Initialize the flag from the backend if a session exists."""
        if not self.session.is_authenticated():
            logger.debug("No session; premium status not loaded")
            return
        try:
            status = self.get_user_status()
        except (StorefrontError, ValidationError) as e:
            logger.warning("Could not load premium status, assuming not premium: %s", e)
            self._set_premium(False)
            return
        self._set_premium(status.premium)

    def get_user_status(self) -> SubscriptionStatus:
        """
        Fetch the subscription status of the current user.

        Raises:
            ApiError / NetworkError on failure.
        """
        data = self.client.get("/user/status", auth=True)
        return SubscriptionStatus.model_validate(data if data is not None else {})

    def get_subscription_plans(self) -> List[SubscriptionPlan]:
        data = self.client.get("/plans")
        return _PLAN_LIST.validate_python(data if data is not None else [])

    def purchase_plan(self, plan_id: str) -> Optional[Any]:
        """
        Buy a subscription plan.

        On success the premium flag is set to True without asking the backend
        for the new status.

        Args:
            plan_id: Identifier of the plan to purchase

        Returns:
            The backend's response body.

        Raises:
            ApiError / NetworkError on failure (flag untouched).
        """
        data = self.client.post("/purchase", json={"plan": plan_id}, auth=True)
        logger.info("Purchased plan %s", plan_id)
        self._set_premium(True)
        return data

    def check_access(self) -> GuardDecision:
        """
        Decide whether a premium-only page may be entered.

        Issues one authenticated status request. premium=true allows; anything
        else, including a failed request, redirects to the plans page.
        """
        try:
            status = self.get_user_status()
        except (StorefrontError, ValidationError) as e:
            logger.warning("Premium check failed, denying access: %s", e)
            return GuardDecision.redirect(PLANS_PATH)
        if status.premium:
            return GuardDecision.allow()
        return GuardDecision.redirect(PLANS_PATH)
