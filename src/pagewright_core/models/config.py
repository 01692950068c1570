from typing import Optional

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PagewrightConfig(BaseSettings):
    """Configuration values for Pagewright. All env variables must start with pagewright_"""

    upload_dir: str = 'uploads'
    """Directory holding uploads while they are processed. Default "uploads"."""

    output_dir: str = 'results'
    """Directory holding generated artifacts until they expire. Default "results"."""

    retention_seconds: int = Field(default=3600, gt=0)
    """Lifetime of every generated artifact. Applies service wide. Default 3600 (one hour)."""

    min_merge_files: int = Field(default=2, ge=2)
    """Minimum number of documents accepted by a merge. Default 2."""

    max_merge_files: int = Field(default=10, ge=2)
    """Maximum number of documents accepted by a merge. Default 10."""

    max_upload_bytes: int = 50 * 1024 * 1024
    """Maximum size of a single uploaded file. Default 50 MB."""

    logging_level: Optional[int] = logging.INFO
    """The logging level. Default "logging.INFO"."""

    logging_file: Optional[str] = None
    """The log file path. Specify to save logs to file. Default "None"."""

    model_config = SettingsConfigDict(
        env_prefix='pagewright_',
        env_file='.env',
        extra='ignore',
    )
