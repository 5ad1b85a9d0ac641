from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Application settings
    app_name: str = "Fairness Verification API"

    # Hash scheme shared with the game server. Both sides must agree on
    # these bit for bit; nothing in a verification request can enforce it.
    hash_algorithm: str = "sha256"
    hash_prefix_chars: int = 8  # 8 hex chars = 32 bits

    # Crash game settings
    crash_house_edge: float = 0.04

    # Upper bound on rows for multi-row outcome requests
    max_rows: int = 1000

    cors_origins: List[str] = ["*"]

    # Logging settings
    log_level: str = "INFO"

    class Config:
        env_file = ".env" # If you want to use an.env file for configuration
        env_file_encoding = 'utf-8'

settings = Settings()
