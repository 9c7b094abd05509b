"""
Plasticity Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    # Lookup tables (aidef.json, jpen.json, hashes.json)
    PACKAGE_DATA_DIR: Path = Path(__file__).parent / "data"
    DATA_DIR: Path = Path(os.getenv("PLASTICITY_DATA_DIR", str(PACKAGE_DATA_DIR)))

    # Highest n tried when reversing synthetic "<Segment>_<n>" keys
    NUMBERED_NAME_LIMIT: int = int(os.getenv("PLASTICITY_NUMBERED_NAME_LIMIT", "1000"))

    # Saved documents
    JSON_INDENT: int = int(os.getenv("PLASTICITY_JSON_INDENT", "2"))

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if cls.NUMBERED_NAME_LIMIT < 0:
            raise ValueError(
                "PLASTICITY_NUMBERED_NAME_LIMIT must be >= 0 "
                f"(got {cls.NUMBERED_NAME_LIMIT})"
            )

        if not cls.DATA_DIR.is_dir():
            raise ValueError(
                f"PLASTICITY_DATA_DIR does not exist: {cls.DATA_DIR}. "
                "Point it at a directory containing aidef.json, jpen.json and hashes.json."
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Plasticity Configuration:",
            f"  Data directory: {cls.DATA_DIR}",
            f"  Numbered name limit: {cls.NUMBERED_NAME_LIMIT}",
            f"  JSON indent: {cls.JSON_INDENT}",
        ]
        return "\n".join(lines)
