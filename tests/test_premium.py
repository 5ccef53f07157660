"""
Tests for the premium gate.

These tests verify that:
- check_access() allows premium users and redirects everyone else
- Network failures and malformed status payloads fail closed
- The cached flag is loaded at start and set optimistically after purchase
"""

import pytest
import requests
from pydantic import ValidationError

from storefront.api_client import ApiClient
from storefront.errors import ApiError
from storefront.guards import PLANS_PATH
from storefront.premium import PremiumService
from storefront.session import SessionStore
from storefront.storage import TOKEN_KEY


@pytest.fixture
def premium(storage, auth_client, http):
    storage.set_item(TOKEN_KEY, "t1")
    session = SessionStore(storage, auth_client)
    client = ApiClient("http://auth.test/api", session=http, token_provider=lambda: session.token)
    return PremiumService(client, session)


class TestCheckAccess:
    """Test premium.check_access()."""

    def test_premium_true_allows(self, premium, http, make_response):
        http.request.return_value = make_response(200, {"premium": True, "plan": "monthly"})

        decision = premium.check_access()

        assert decision.allowed is True
        assert decision.redirect_to is None

    def test_premium_false_redirects_to_plans(self, premium, http, make_response):
        http.request.return_value = make_response(200, {"premium": False})

        decision = premium.check_access()

        assert decision.allowed is False
        assert decision.redirect_to == PLANS_PATH

    def test_network_failure_fails_closed(self, premium, http):
        http.request.side_effect = requests.exceptions.ConnectionError("refused")

        decision = premium.check_access()

        assert decision.allowed is False
        assert decision.redirect_to == PLANS_PATH

    def test_server_error_fails_closed(self, premium, http, make_response):
        http.request.return_value = make_response(503, {"message": "maintenance"})
        assert premium.check_access().redirect_to == PLANS_PATH

    @pytest.mark.parametrize("body", [{"premium": "maybe"}, True, [1], "premium", 0])
    def test_malformed_status_fails_closed(self, premium, http, make_response, body):
        http.request.return_value = make_response(200, body)

        decision = premium.check_access()

        assert decision.allowed is False
        assert decision.redirect_to == PLANS_PATH

    def test_sends_bearer_token(self, premium, http, make_response):
        http.request.return_value = make_response(200, {"premium": True})

        premium.check_access()

        args, kwargs = http.request.call_args
        assert args == ("GET", "http://auth.test/api/user/status")
        assert kwargs["headers"]["Authorization"] == "Bearer t1"

    def test_asks_backend_every_time(self, premium, http, make_response):
        http.request.return_value = make_response(200, {"premium": True})

        premium.check_access()
        premium.check_access()

        assert http.request.call_count == 2


class TestPremiumFlag:
    """Test the cached premium flag."""

    def test_starts_false(self, premium):
        assert premium.is_premium is False

    def test_load_status(self, premium, http, make_response):
        http.request.return_value = make_response(200, {"premium": True})

        premium.load_status()

        assert premium.is_premium is True

    def test_load_status_failure_leaves_false(self, premium, http):
        http.request.side_effect = requests.exceptions.ConnectionError()

        premium.load_status()

        assert premium.is_premium is False

    def test_load_status_without_session_does_nothing(self, premium, storage, http):
        storage.remove_item(TOKEN_KEY)

        premium.load_status()

        http.request.assert_not_called()
        assert premium.is_premium is False

    def test_purchase_sets_flag_without_refetch(self, premium, http, make_response):
        http.request.return_value = make_response(200, {"ok": True})

        premium.purchase_plan("monthly")

        assert premium.is_premium is True
        assert http.request.call_count == 1
        args, kwargs = http.request.call_args
        assert args == ("POST", "http://auth.test/api/purchase")
        assert kwargs["json"] == {"plan": "monthly"}

    def test_failed_purchase_leaves_flag(self, premium, http, make_response):
        http.request.return_value = make_response(402, {"message": "Card declined"})

        with pytest.raises(ApiError):
            premium.purchase_plan("monthly")

        assert premium.is_premium is False

    def test_subscribers_see_current_and_new_values(self, premium, http, make_response):
        seen = []
        unsubscribe = premium.subscribe(seen.append)
        http.request.return_value = make_response(200, {"ok": True})

        premium.purchase_plan("monthly")
        unsubscribe()
        premium.reset()

        assert seen == [False, True]
        assert premium.is_premium is False

    def test_get_subscription_plans(self, premium, http, make_response):
        http.request.return_value = make_response(200, [
            {"id": "monthly", "name": "Monthly", "price": 9.99, "benefits": ["Weekly plan"]},
            {"id": "yearly", "name": "Yearly", "price": 99},
        ])

        plans = premium.get_subscription_plans()

        assert [p.id for p in plans] == ["monthly", "yearly"]
        assert plans[1].benefits == []

    @pytest.mark.parametrize("body", [True, [1], "premium", {"premium": "maybe"}])
    def test_load_status_malformed_body_leaves_false(self, premium, http, make_response, body):
        http.request.return_value = make_response(200, body)

        premium.load_status()

        assert premium.is_premium is False

    @pytest.mark.parametrize("body", [{"plans": []}, "monthly", [1]])
    def test_malformed_plans_raise_validation_error(self, premium, http, make_response, body):
        http.request.return_value = make_response(200, body)

        with pytest.raises(ValidationError):
            premium.get_subscription_plans()

    def test_empty_plans_body(self, premium, http, make_response):
        http.request.return_value = make_response(204)
        assert premium.get_subscription_plans() == []
