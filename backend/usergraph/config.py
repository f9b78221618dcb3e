from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "User GraphQL API"
    APP_VERSION: str = "1.0.0"
    ENV: str = "dev"  # Environment: "dev", "staging", "prod"

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: List[str] = ["*"]

    # Database (MongoDB)
    MONGODB_URI: Optional[str] = None  # Required at startup
    MONGODB_DB_NAME: str = Field(
        default="graphql_example",
        validation_alias=AliasChoices("MONGODB_DB_NAME", "DB_NAME"),
    )

    @property
    def is_dev(self) -> bool:
        return self.ENV.lower() == "dev"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
