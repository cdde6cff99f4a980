from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    google_api_key: str = ""
    llm_model: str = "gemini-2.0-flash"
    chat_model: str = "gemini-2.0-flash"

    # Local key-value store
    store_dir: str = "data/store"
    reset_corrupt_store: bool = False

    default_language: str = "es"
    log_level: str = "INFO"


settings = Settings()
