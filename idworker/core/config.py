from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "dev"
    WORKER_ID: int = 0
    DATACENTER_ID: int = 0
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
