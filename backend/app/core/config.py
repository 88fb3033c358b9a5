from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "SportsBro Teams"
    API_PREFIX: str = "/api"

    MONGODB_URL: str
    DATABASE_NAME: str = "sportsbro"

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Frontend
    FRONTEND_BASE_URL: str = "http://localhost:5173"

    # Teams
    DEFAULT_TEAM_IMAGE_URL: str = "https://images.unsplash.com/photo-1519861531473-9200262188bf"
    TEAM_LIST_LIMIT: int = 200
    TEAM_UPDATE_MAX_RETRIES: int = 5
    # When True, joining directly is refused for private teams just like join requests.
    DIRECT_JOIN_REQUIRES_PUBLIC: bool = False

    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
