from abc import ABC, abstractmethod


class ICredentialStore(ABC):
    @abstractmethod
    def load(self) -> str | None:
        pass

    @abstractmethod
    def save(self, *, token: str) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass
