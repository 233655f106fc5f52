from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///newslens.db"
    STORAGE_BACKEND: str = "sql"  # "sql" | "memory"
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    YOUTUBE_API_KEY: str = ""
    APP_URL: str = "http://localhost:5173"
    PORT: int = 8000


settings = Settings(_env_file=".env", _env_file_encoding="utf-8")
