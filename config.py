import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./sessions.db")
    DB_CONNECT_TIMEOUT_SECONDS = float(data.get("DB_CONNECT_TIMEOUT_SECONDS", 5))
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", True))
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8080)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:5173"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_TTL_SECONDS = int(data.get("ACCESS_TOKEN_TTL_SECONDS", 15 * 60))
    REFRESH_TOKEN_TTL_SECONDS = int(data.get("REFRESH_TOKEN_TTL_SECONDS", 7 * 24 * 60 * 60))
    # Must be true whenever the API is served over HTTPS
    COOKIE_SECURE = bool(data.get("COOKIE_SECURE", False))

    OIDC_JWKS_URL = data.get(
        "OIDC_JWKS_URL",
        "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com",
    )
    # Required: https://securetoken.google.com/<project-id> and <project-id> for Firebase
    OIDC_ISSUER = data.get("OIDC_ISSUER", "")
    OIDC_AUDIENCE = data.get("OIDC_AUDIENCE", "")
    OIDC_JWKS_CACHE_SECONDS = int(data.get("OIDC_JWKS_CACHE_SECONDS", 3600))
    IDENTITY_PROVIDER_TIMEOUT_SECONDS = float(data.get("IDENTITY_PROVIDER_TIMEOUT_SECONDS", 5))
