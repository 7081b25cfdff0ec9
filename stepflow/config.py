from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Stepflow Workflow Builder"
    API_PREFIX: str = "/api"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Identity used until an authentication layer supplies the real caller
    DEFAULT_USER_ID: int = 1

    # Simulated execution
    EXECUTION_SUCCESS_RATE: float = 0.8
    EXECUTION_SEED: Optional[int] = None

    LOG_LEVEL: str = "INFO"

    # API client
    CLIENT_BASE_URL: str = "http://localhost:8000"
    CLIENT_TIMEOUT: float = 30.0

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

settings = Settings()
