"""
Page flows: what a page does when the user submits something.

Each flow validates its form first (invalid forms never reach the network),
calls the matching service, and reports back a FlowOutcome the UI can render:
an optional dialog, an optional redirect, and field errors.

Error policy:
- validation errors -> field_errors, nothing sent
- login errors -> the backend's message verbatim; two known messages get
  their own dialogs, everything else a generic one
- write-path failures (register, purchase, profile/settings save) -> a
  generic failure banner, using the server message when there is one
Every failure leaves the flow ready to be submitted again.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from .cart import Cart
from .errors import ApiError, AuthError, StorefrontError, ValidationFailed
from .forms import (
    LoginForm,
    PaymentForm,
    ProfileForm,
    RegistrationForm,
    SettingsForm,
    validate_form,
)
from .guards import HOME_PATH, LOGIN_PATH, REGISTER_PATH
from .models import SubscriptionPlan
from .premium import PremiumService
from .profile import ProfileService, SettingsService
from .session import SessionStore
from .users import UserDirectory

logger = logging.getLogger(__name__)

# Messages sent by the auth backend, matched verbatim
WRONG_PASSWORD_MESSAGE = "Contraseña incorrecta"
USER_NOT_FOUND_MESSAGE = "Usuario no encontrado"

REGISTER_FAILED_MESSAGE = "Error registering the user"
PAYMENT_RETRY_MESSAGE = "Please try again later."
PROFILE_LOAD_FAILED_MESSAGE = "Could not load the profile"
PROFILE_SAVE_FAILED_MESSAGE = "Error updating the profile"
SETTINGS_LOAD_FAILED_MESSAGE = "Could not load your preferences"
SETTINGS_SAVE_FAILED_MESSAGE = "Error saving your preferences"
SETTINGS_SAVED_MESSAGE = "Preferences saved successfully"


@dataclass(frozen=True)
class Dialog:
    """
    A modal message for the UI.

    Attributes:
        kind: "success", "error" or "question"
        title: Dialog title
        text: Dialog body
        confirm_label: Label of the confirm button for "question" dialogs
        confirm_path: Page to go to when the question is confirmed
    """
    kind: str
    title: str
    text: str
    confirm_label: Optional[str] = None
    confirm_path: Optional[str] = None


@dataclass
class FlowOutcome:
    """Result of submitting a page flow."""
    ok: bool
    message: Optional[str] = None
    dialog: Optional[Dialog] = None
    redirect_to: Optional[str] = None
    field_errors: Dict[str, List[str]] = field(default_factory=dict)
    value: Any = None


def login_error_dialog(message: str) -> Dialog:
    """Pick the dialog for a rejected login."""
    if message == WRONG_PASSWORD_MESSAGE:
        return Dialog("error", "Wrong password", "The password you entered is incorrect, please try again.")
    if message == USER_NOT_FOUND_MESSAGE:
        return Dialog(
            "question",
            "User not found",
            "Do you want to create a new account?",
            confirm_label="Yes, sign me up",
            confirm_path=REGISTER_PATH,
        )
    return Dialog("error", "Error", message)


class LoginState(str, Enum):
    ANONYMOUS = "anonymous"
    SUBMITTING = "submitting"
    AUTHENTICATED = "authenticated"


class LoginFlow:
    """
    Login page state machine.

    Anonymous -> Submitting -> Authenticated (redirect to /home)
                            -> Anonymous with error (submission re-enabled)

    Only "submitting" is held in memory. Anonymous and Authenticated are read
    from the session store on every access, so a token cleared elsewhere
    (another page, another browser tab) re-enables the form.
    """

    def __init__(self, session: SessionStore) -> None:
        self.session = session
        self.submitting = False
        self.error: Optional[str] = None

    @property
    def state(self) -> LoginState:
        if self.submitting:
            return LoginState.SUBMITTING
        if self.session.is_authenticated():
            return LoginState.AUTHENTICATED
        return LoginState.ANONYMOUS

    @property
    def can_submit(self) -> bool:
        return self.state == LoginState.ANONYMOUS

    def submit(self, data: Mapping[str, Any]) -> FlowOutcome:
        """
        Submit the login form.

        Args:
            data: Raw form values with "email" and "password_hash"

        Returns:
            FlowOutcome; on success redirect_to is /home.
        """
        state = self.state
        if state == LoginState.AUTHENTICATED:
            return FlowOutcome(ok=True, redirect_to=HOME_PATH)
        if state == LoginState.SUBMITTING:
            return FlowOutcome(ok=False)

        try:
            form = validate_form(LoginForm, data)
        except ValidationFailed as e:
            return FlowOutcome(ok=False, field_errors=e.field_errors)

        self.submitting = True
        self.error = None
        try:
            self.session.login(form.email, form.password_hash)
        except AuthError as e:
            self.error = e.message
            return FlowOutcome(ok=False, message=e.message, dialog=login_error_dialog(e.message))
        finally:
            self.submitting = False

        return FlowOutcome(
            ok=True,
            dialog=Dialog("success", "Welcome", "You have logged in successfully"),
            redirect_to=HOME_PATH,
        )


def register_user(users: UserDirectory, data: Mapping[str, Any]) -> FlowOutcome:
    """
    Submit the registration form.

    Returns:
        FlowOutcome redirecting to /login on success; on failure the server
        message (or a generic one) in `message`.
    """
    try:
        form = validate_form(RegistrationForm, data)
    except ValidationFailed as e:
        return FlowOutcome(ok=False, field_errors=e.field_errors)

    try:
        message = users.register(form.model_dump())
    except ApiError as e:
        return FlowOutcome(ok=False, message=e.message or REGISTER_FAILED_MESSAGE)
    except StorefrontError as e:
        logger.warning("Registration failed: %s", e)
        return FlowOutcome(ok=False, message=REGISTER_FAILED_MESSAGE)
    return FlowOutcome(ok=True, message=message, redirect_to=LOGIN_PATH)


class PurchaseFlow:
    """
    Plans page: pick a plan, fill in the payment dialog, confirm.

    The payment details are only checked for presence; the backend purchase
    call receives the plan id alone.
    """

    def __init__(self, premium: PremiumService) -> None:
        self.premium = premium
        self.selected_plan: Optional[SubscriptionPlan] = None
        self.processing = False

    def open(self, plan: SubscriptionPlan) -> None:
        self.selected_plan = plan

    def close(self) -> None:
        self.selected_plan = None
        self.processing = False

    def confirm(self, payment: Mapping[str, Any]) -> FlowOutcome:
        plan = self.selected_plan
        if plan is None:
            return FlowOutcome(ok=False)

        try:
            validate_form(PaymentForm, payment)
        except ValidationFailed as e:
            return FlowOutcome(ok=False, field_errors=e.field_errors)

        self.processing = True
        try:
            self.premium.purchase_plan(plan.id)
        except StorefrontError as e:
            self.processing = False
            text = (e.message if isinstance(e, ApiError) else None) or PAYMENT_RETRY_MESSAGE
            return FlowOutcome(ok=False, message=text, dialog=Dialog("error", "Error processing the payment", text))

        self.close()
        return FlowOutcome(
            ok=True,
            dialog=Dialog("success", "Purchase successful!", f"You have unlocked the {plan.name} plan."),
            value=plan,
        )


def checkout_cart(cart: Cart) -> FlowOutcome:
    """Finish the purchase of the cart contents and empty the cart."""
    receipt = cart.checkout()
    return FlowOutcome(
        ok=True,
        dialog=Dialog("success", "Purchase completed!", f"Total: €{receipt.total:.2f}"),
        value=receipt,
    )


class ProfileFlow:
    """Load and save the profile page."""

    def __init__(self, service: ProfileService) -> None:
        self.service = service

    def load(self) -> FlowOutcome:
        try:
            profile = self.service.get_profile()
        except (StorefrontError, ValidationError) as e:
            logger.warning("Profile load failed: %s", e)
            return FlowOutcome(ok=False, message=PROFILE_LOAD_FAILED_MESSAGE)
        return FlowOutcome(ok=True, value=profile)

    def save(self, data: Mapping[str, Any]) -> FlowOutcome:
        try:
            form = validate_form(ProfileForm, data)
        except ValidationFailed as e:
            return FlowOutcome(ok=False, field_errors=e.field_errors)
        try:
            profile = self.service.update_profile(form.model_dump(exclude_none=True))
        except (StorefrontError, ValidationError) as e:
            logger.warning("Profile save failed: %s", e)
            return FlowOutcome(ok=False, message=PROFILE_SAVE_FAILED_MESSAGE)
        return FlowOutcome(ok=True, value=profile)


class SettingsFlow:
    """Load and save the settings page."""

    def __init__(self, service: SettingsService) -> None:
        self.service = service

    def load(self) -> FlowOutcome:
        try:
            settings = self.service.get_settings()
        except (StorefrontError, ValidationError) as e:
            logger.warning("Settings load failed: %s", e)
            return FlowOutcome(ok=False, message=SETTINGS_LOAD_FAILED_MESSAGE)
        return FlowOutcome(ok=True, value=settings)

    def save(self, data: Mapping[str, Any]) -> FlowOutcome:
        try:
            form = validate_form(SettingsForm, data)
        except ValidationFailed as e:
            return FlowOutcome(ok=False, field_errors=e.field_errors)
        try:
            settings = self.service.update_settings(form.model_dump())
        except (StorefrontError, ValidationError) as e:
            logger.warning("Settings save failed: %s", e)
            return FlowOutcome(ok=False, message=SETTINGS_SAVE_FAILED_MESSAGE)
        return FlowOutcome(ok=True, message=SETTINGS_SAVED_MESSAGE, value=settings)
