from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from eventora.platform.constant.path import LOCAL_STATE_DIR


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Eventora Booking Client'
    VERSION: str = '0.1.0'
    DEBUG: bool = False

    # Backend API
    API_BASE_URL: str = 'http://localhost:5000'

    @field_validator('API_BASE_URL', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/') if isinstance(v, str) else v

    @property
    def API_URL(self) -> str:
        return f'{self.API_BASE_URL}/api'

    # Local state (localStorage equivalent)
    LOCAL_STATE_DIR: Path = LOCAL_STATE_DIR
    LOCAL_STATE_FILE: str = 'local_storage.json'

    @property
    def LOCAL_STATE_PATH(self) -> Path:
        return Path(self.LOCAL_STATE_DIR) / self.LOCAL_STATE_FILE

    # Checkout
    PAYMENT_METHOD: str = 'card'
    PAYMENT_SIMULATED_DELAY_SECONDS: float = 1.2  # Fake gateway latency before PaymentSucceeded
    CURRENCY_SYMBOL: str = '₹'

    # Seat selection
    MAX_SEATS_PER_BOOKING: int = 10
    SEATS_PER_ROW: int = 10  # Used when the backend sends no explicit seat layout

    # Advisory lock (read-merge-write retries on version conflict)
    ADVISORY_LOCK_CAS_ATTEMPTS: int = 3


settings = Settings()  # type: ignore
