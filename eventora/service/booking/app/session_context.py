"""
Session context.

Owns the bearer credential for the whole client: every request reads it from here and every
way of losing it (logout, 401, account deactivation or deletion) goes through `clear()`.
"""

from eventora.platform.constant.view_route import ViewRoute
from eventora.platform.exception.exceptions import AuthenticationError
from eventora.platform.logging.loguru_io import Logger
from eventora.service.booking.app.interface.i_credential_store import ICredentialStore
from eventora.service.booking.app.interface.i_navigator import INavigator
from eventora.service.booking.app.interface.i_pending_intent_store import IPendingIntentStore
from eventora.service.booking.domain.value_object.pending_intent import PendingIntent


class SessionContext:
    def __init__(
        self,
        *,
        credential_store: ICredentialStore,
        pending_intent_store: IPendingIntentStore,
        navigator: INavigator,
    ) -> None:
        self.credential_store = credential_store
        self.pending_intent_store = pending_intent_store
        self.navigator = navigator
        self._credential: str | None = None

    def load(self) -> str | None:
        self._credential = self.credential_store.load()
        return self._credential

    def get_credential(self) -> str | None:
        return self._credential

    @property
    def is_authenticated(self) -> bool:
        return bool(self._credential)

    def sign_in(self, token: str) -> None:
        self.credential_store.save(token=token)
        self._credential = token
        Logger.base.info('🔑 [SESSION] Signed in')

    def clear(self) -> None:
        self.credential_store.clear()
        self._credential = None
        Logger.base.info('🚪 [SESSION] Credential cleared')

    def require_credential(self, intent: PendingIntent | None = None) -> str:
        """Return the credential, or remember `intent`, go to login and raise."""
        if self._credential:
            return self._credential

        if intent is not None:
            self.remember_intent(intent)
        Logger.base.info('🔒 [SESSION] Login required, redirecting')
        self.navigator.navigate(ViewRoute.LOGIN)
        raise AuthenticationError('Please login to continue with your booking.')

    def remember_intent(self, intent: PendingIntent) -> None:
        """Resume point for the next sign-in; the booking flow reopens on return."""
        self.pending_intent_store.save(intent=intent.with_continue_booking())

    def handle_unauthorized(self) -> None:
        """401 from any endpoint: drop the credential, go to login unless already there."""
        self.clear()
        if self.navigator.current_route != ViewRoute.LOGIN:
            self.navigator.navigate(ViewRoute.LOGIN)

    def consume_pending_intent(self) -> PendingIntent | None:
        return self.pending_intent_store.pop()

    def resume(self) -> PendingIntent | None:
        """After sign-in: go where the user was headed, else the dashboard."""
        intent = self.consume_pending_intent()
        if intent is None:
            self.navigator.navigate(ViewRoute.DASHBOARD)
        else:
            self.navigator.navigate(intent.route, intent.params)
        return intent
