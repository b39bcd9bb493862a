"""
config/settings.py
Central configuration: reads from environment variables and .env file.
"""
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings:

    def __init__(self):
        self._load()

    def _load(self):
        import os
        env_file = BASE_DIR / ".env"
        if env_file.exists():
            for line in env_file.read_text().splitlines():
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, _, val = line.partition("=")
                    os.environ.setdefault(key.strip(), val.strip())

        self.api_host    = os.environ.get("API_HOST", "0.0.0.0")
        self.api_port    = int(os.environ.get("API_PORT", "8000"))
        self.api_title   = "Laytime & Demurrage API"
        self.api_version = "1.0.0"

        self.metrics_port = int(os.environ.get("METRICS_PORT", "9090"))
        self.log_level    = os.environ.get("LOG_LEVEL", "INFO")

        # Timeline timestamps carry no year ("12 May 05:45"); the whole voyage
        # is resolved against this one. Wrong across a 31 Dec / 1 Jan boundary.
        self.reference_year = int(os.environ.get("LAYTIME_REFERENCE_YEAR", "2024"))

        # Allowed gap (minutes) between a computed net laytime and the figure
        # on the laytime statement before a port is flagged.
        self.validation_tolerance_minutes = float(
            os.environ.get("VALIDATION_TOLERANCE_MIN", "1.0")
        )
        self.share_tolerance = 1e-9


settings = Settings()
