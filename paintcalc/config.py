from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Draft storage (local key-value store used by front ends)
    draft_db_path: str = "data/drafts.db"
    interior_draft_key: str = "estimation-calc-draft"
    exterior_draft_key: str = "estimation-calc-exterior-draft"
    draft_debounce_ms: int = 500


settings = Settings()
