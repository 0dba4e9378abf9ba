from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./price_compare.db"

    # Application
    app_name: str = "Price Compare API"
    environment: str = "development"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Cloudinary (product and store images)
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    cloudinary_folder: str = "productos-escasos"
    upload_timeout: float = 30.0

    # Image optimization before upload
    image_max_width: int = 800
    image_jpeg_quality: int = 85

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
