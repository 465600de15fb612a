from eventora.platform.constant.storage_key import TOKEN_KEY
from eventora.platform.state.local_storage_client import LocalStorageClient
from eventora.service.booking.app.interface.i_credential_store import ICredentialStore


class CredentialStoreImpl(ICredentialStore):
    def __init__(self, *, storage: LocalStorageClient) -> None:
        self.storage = storage

    def load(self) -> str | None:
        return self.storage.get_item(TOKEN_KEY) or None

    def save(self, *, token: str) -> None:
        self.storage.set_item(TOKEN_KEY, token)

    def clear(self) -> None:
        self.storage.remove_item(TOKEN_KEY)
