from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    This class loads configuration values used throughout the application from
    environment variables. Since Docker Compose automatically loads the .env file
    from the project root, there's no need to explicitly specify the file path.
    """

    # GitHub REST API settings
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_REQUEST_TIMEOUT: float = 10.0  # Seconds per remote call
    RECENT_REPOS_LIMIT: int = 5

    # Stored connection (user + token) written by the connections UI
    CREDENTIAL_STORE_PATH: str = "./.github_connection.json"

    # Workspace paths are reported relative to this root
    WORKSPACE_ROOT: str = "/home/project"
    COMMIT_MESSAGE: str = "Initial commit from workspace"

    # Development and debugging
    DEBUG: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
