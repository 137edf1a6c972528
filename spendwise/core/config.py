import os
from dotenv import load_dotenv

# Pick up a local .env before any setting is read
load_dotenv()


def _split(value: str) -> list:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    PROJECT_NAME: str = "SpendWise API"
    PROJECT_VERSION: str = "2.0.0"
    API_PREFIX: str = "/api"

    APP_ENV: str = os.getenv("APP_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    PORT: int = int(os.getenv("PORT", "3001"))

    # Infrastructure config (DATABASE_URL wins over the POSTGRES_* pieces)
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "spendwise")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "spendwise")
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "db")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "spendwise")

    # HTTP surface
    FRONTEND_URLS: list = _split(os.getenv("FRONTEND_URL", "http://localhost:3000"))
    PREVIEW_ORIGIN_SUFFIX: str = os.getenv("PREVIEW_ORIGIN_SUFFIX", ".vercel.app")
    MAX_BODY_BYTES: int = int(os.getenv("MAX_BODY_BYTES", str(10 * 1024 * 1024)))
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900"))
    RATE_LIMIT_MAX_REQUESTS: int = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "200"))
    RATE_LIMIT_MAX_CLIENTS: int = int(os.getenv("RATE_LIMIT_MAX_CLIENTS", "10000"))

    # Identity provider (Clerk)
    CLERK_JWT_KEY: str = os.getenv("CLERK_JWT_KEY", "").replace("\\n", "\n")
    CLERK_JWKS_URL: str = os.getenv("CLERK_JWKS_URL", "")
    CLERK_AUTHORIZED_PARTIES: list = _split(os.getenv("CLERK_AUTHORIZED_PARTIES", ""))
    JWKS_CACHE_TTL_SECONDS: int = int(os.getenv("JWKS_CACHE_TTL_SECONDS", "3600"))

    @property
    def DATABASE_URL(self) -> str:
        url = os.getenv("DATABASE_URL")
        if url:
            return url
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    @property
    def ALLOWED_ORIGINS(self) -> list:
        origins = list(self.FRONTEND_URLS)
        if "http://localhost:3000" not in origins:
            origins.append("http://localhost:3000")
        return origins

    @property
    def ALLOWED_ORIGIN_REGEX(self) -> str:
        if not self.PREVIEW_ORIGIN_SUFFIX:
            return None
        return r"https?://.*" + self.PREVIEW_ORIGIN_SUFFIX.replace(".", r"\.")

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"


settings = Settings()
