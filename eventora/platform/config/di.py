"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from dependency_injector import containers, providers

from eventora.platform.config.core_setting import Settings
from eventora.platform.http.api_client import ApiClient
from eventora.platform.state.local_storage_client import LocalStorageClient
from eventora.service.booking.app.session_context import SessionContext
from eventora.service.booking.driven_adapter.api.auth_api_impl import AuthApiImpl
from eventora.service.booking.driven_adapter.api.bookings_api_impl import BookingsApiImpl
from eventora.service.booking.driven_adapter.api.events_api_impl import EventsApiImpl
from eventora.service.booking.driven_adapter.api.users_api_impl import UsersApiImpl
from eventora.service.booking.driven_adapter.state.advisory_lock_store_impl import (
    AdvisoryLockStoreImpl,
)
from eventora.service.booking.driven_adapter.state.credential_store_impl import (
    CredentialStoreImpl,
)
from eventora.service.booking.driven_adapter.state.pending_intent_store_impl import (
    PendingIntentStoreImpl,
)
from eventora.service.booking.driving_adapter.view.route_navigator import RouteNavigator


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Local state (localStorage equivalent); tests override with an in-memory client
    local_storage = providers.Singleton(
        LocalStorageClient, path=config_service.provided.LOCAL_STATE_PATH
    )

    credential_store = providers.Singleton(CredentialStoreImpl, storage=local_storage)
    pending_intent_store = providers.Singleton(PendingIntentStoreImpl, storage=local_storage)
    advisory_lock_store = providers.Singleton(AdvisoryLockStoreImpl, storage=local_storage)

    navigator = providers.Singleton(RouteNavigator)

    session_context = providers.Singleton(
        SessionContext,
        credential_store=credential_store,
        pending_intent_store=pending_intent_store,
        navigator=navigator,
    )

    # HTTP (transport is None in production; tests plug in httpx.MockTransport)
    http_transport = providers.Object(None)
    api_client = providers.Singleton(
        ApiClient,
        base_url=config_service.provided.API_URL,
        credential_provider=session_context.provided.get_credential,
        on_unauthorized=session_context.provided.handle_unauthorized,
        transport=http_transport,
    )

    # Backend adapters
    events_api = providers.Singleton(EventsApiImpl, api_client=api_client)
    bookings_api = providers.Singleton(BookingsApiImpl, api_client=api_client)
    users_api = providers.Singleton(UsersApiImpl, api_client=api_client)
    auth_api = providers.Singleton(AuthApiImpl, api_client=api_client)


container = Container()
