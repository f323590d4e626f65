import os
from typing import List

from dotenv import load_dotenv

# Load variables from .env file
load_dotenv()


class Settings:
    PROJECT_NAME: str = "AI Story Builder"
    VERSION: str = "1.0.0"

    def __init__(self):
        # Server
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "4000"))
        self.CORS_ORIGINS: List[str] = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]

        # Upstream (DeepInfra)
        self.DEEPINFRA_API_KEY: str = os.getenv("DEEPINFRA_API_KEY", "")
        self.DEEPINFRA_BASE_URL: str = os.getenv("DEEPINFRA_BASE_URL", "https://api.deepinfra.com").rstrip("/")
        self.TEXT_MODEL: str = os.getenv("TEXT_MODEL", "meta-llama/Meta-Llama-3-8B-Instruct")
        self.IMAGE_MODEL: str = os.getenv("IMAGE_MODEL", "stabilityai/stable-diffusion-2-1")
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "800"))

        # Image calls are slower than text calls
        self.TEXT_TIMEOUT_SECONDS: float = float(os.getenv("TEXT_TIMEOUT_SECONDS", "60"))
        self.IMAGE_TIMEOUT_SECONDS: float = float(os.getenv("IMAGE_TIMEOUT_SECONDS", "90"))

        # Serve placeholder stories when the upstream is unconfigured or unreachable
        self.DEV_FALLBACK: bool = os.getenv("DEV_FALLBACK", "true").lower() == "true"

    def inference_url(self, model: str) -> str:
        return f"{self.DEEPINFRA_BASE_URL}/v1/inference/{model}"


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency; overridden in tests."""
    return settings
