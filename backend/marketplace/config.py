import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Process configuration, built once and handed to the app factory."""

    database_url: str = "sqlite:///marketplace.db"
    org_id: str = "default"
    app_id: str = "web"

    auth_secret_key: Optional[str] = None
    auth_algorithm: str = "HS256"
    auth_jwks_url: Optional[str] = None
    auth_audience: Optional[str] = None
    auth_issuer: Optional[str] = None

    s3_bucket: str = "marketplace-uploads"
    s3_region: str = "us-east-1"
    s3_public_base_url: Optional[str] = None
    upload_max_files: int = 5
    upload_max_bytes: int = 5 * 1024 * 1024

    allowed_origin: str = "http://localhost:3000"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            org_id=os.getenv("ORG_ID", cls.org_id),
            app_id=os.getenv("APP_ID", cls.app_id),
            auth_secret_key=os.getenv("AUTH_SECRET_KEY"),
            auth_algorithm=os.getenv("AUTH_ALGORITHM", cls.auth_algorithm),
            auth_jwks_url=os.getenv("AUTH_JWKS_URL"),
            auth_audience=os.getenv("AUTH_AUDIENCE"),
            auth_issuer=os.getenv("AUTH_ISSUER"),
            s3_bucket=os.getenv("S3_BUCKET", cls.s3_bucket),
            s3_region=os.getenv("S3_REGION", cls.s3_region),
            s3_public_base_url=os.getenv("S3_PUBLIC_BASE_URL"),
            upload_max_files=int(os.getenv("UPLOAD_MAX_FILES", cls.upload_max_files)),
            upload_max_bytes=int(os.getenv("UPLOAD_MAX_BYTES", cls.upload_max_bytes)),
            allowed_origin=os.getenv("ALLOWED_ORIGIN", cls.allowed_origin),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
        )

    @property
    def public_upload_base(self) -> str:
        if self.s3_public_base_url:
            return self.s3_public_base_url.rstrip("/")
        return f"https://{self.s3_bucket}.s3.{self.s3_region}.amazonaws.com"
