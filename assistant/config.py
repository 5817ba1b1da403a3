from pydantic import BaseModel
import os
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///assistant.db")
    typing_delay_seconds: float = float(os.getenv("TYPING_DELAY_SECONDS", "1.5"))
    speech_enabled: bool = os.getenv("SPEECH_ENABLED", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))


settings = Settings()
