"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Page canvas (US letter at 96 units per inch)
    PAGE_WIDTH: int = 816
    PAGE_HEIGHT: int = 1056
    UNITS_PER_INCH: int = 96
    GRID_SIZE: int = 16

    # Resize geometry
    MIN_BLOCK_SIZE: float = 20.0  # Keeps handles grabbable
    ANCHOR_TOLERANCE: float = 0.5  # Max anchor movement in page units

    # Drift diagnostics
    MODEL_DRIFT_TOLERANCE: float = 0.1
    RECT_DRIFT_TOLERANCE: float = 1.0  # Screen pixels
    HISTORY_LIMIT: int = 10

    # Default layout
    DEFAULT_CHURCH_NAME: str = "Our Church"
    DEFAULT_GIVING_URL: str = "https://example.com/give"

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    model_config = {"env_prefix": "BULLETIN_CANVAS_"}


settings = Settings()
