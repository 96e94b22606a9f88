from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Public origin of this app; scan-landing URLs are built on top of it.
    SHOPIFY_APP_URL: str = "http://localhost:8000"
    SHOPIFY_API_VERSION: str = "2025-07"

    DATABASE_URL: str = "sqlite:///./shop_qrcodes.db"

    # Admin GraphQL request timeout, seconds
    CATALOG_TIMEOUT_SECONDS: float = 10.0

    QR_BOX_SIZE: int = 10
    QR_BORDER: int = 4

    # When True, a failed product lookup or render for one QR code in a list
    # turns into an error marker on that row instead of failing the list.
    ENRICHMENT_ISOLATE_FAILURES: bool = True

    LOG_LEVEL: str = "INFO"


settings = Settings()
