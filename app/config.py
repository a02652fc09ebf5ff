import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    def __init__(self, **overrides):
        self.SHARED_SECRET: str = os.getenv("SHARED_SECRET", "")
        self.TOKEN_SCOPE: str = os.getenv("TOKEN_SCOPE", "id")
        self.ID_API_TOKEN: str = os.getenv("ID_API_TOKEN", "")
        self.ID_API_ENDPOINT: str = os.getenv("ID_API_ENDPOINT", "")
        self.DEMOGRAPHICS_TIMEOUT_SECONDS: float = float(
            os.getenv("DEMOGRAPHICS_TIMEOUT_SECONDS", "10")
        )
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        for name, value in overrides.items():
            if not hasattr(self, name):
                raise AttributeError(f"Unknown setting: {name}")
            setattr(self, name, value)


settings = Settings()
