from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    app_name: str = "Seva Portal API"
    jwt_secret: str = "dev-only-secret-change-me-before-deploying-seva-portal"
    jwt_alg: str = "HS256"
    access_ttl_min: int = 12 * 60
    session_cookie_name: str = "seva_session"
    session_cookie_secure: bool = False

    use_mongo: bool = False
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "seva_portal"

    cors_origins: str = "*"
    log_level: str = "INFO"
    allow_seed: bool = False

    # document numbering
    receipt_prefix: str = "BSS-RCP"
    membership_prefix: str = "BSS-MEM"
    id_card_validity_days: int = 365

    # printed on receipts, ID cards and letters
    org_name: str = "Bawaliya Seva Sansthan"
    org_website: str = "www.bawaliyaseva.org"
    org_email: str = "info@bawaliyaseva.org"
    org_registration: str = "Registered under Section 12A & 80G"
    org_pan: str = "XXXXX0000X"
    org_signatory: str = "Secretary"

    seed_admin_email: str = "admin@bawaliyasevasansthan.org"
    seed_admin_password: str = "admin123"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

settings = Settings()
