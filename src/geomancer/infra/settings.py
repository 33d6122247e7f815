"""Runtime settings for the rendering pipeline."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RenderSettings(BaseSettings):
    """Settings for rendering geoms.

    Values are read from ``GEOMANCER_*`` environment variables or a local
    ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEOMANCER_",
        env_file=".env",
        extra="ignore",
    )

    width: int = Field(400, ge=1, description="Default primitive width in pixels")
    height: int = Field(300, ge=1, description="Default primitive height in pixels")
    icon_size: int = Field(40, ge=1, description="Width and height of preview glyphs in pixels")
    munch_pieces: int = Field(10, ge=1, description="Pieces each segment is cut into when munching")


@lru_cache(maxsize=1)
def get_settings() -> RenderSettings:
    """Return the process-wide settings, read once."""
    return RenderSettings()
