"""Configuration management for the imagery access broker."""
import os
from pathlib import Path
import yaml
from dotenv import load_dotenv

load_dotenv()

TRUE_VALUES = ("1", "true", "yes", "on")


class Config:
    """Application configuration loaded from config.yaml and environment variables."""

    def __init__(self, config_path=None):
        if config_path is None:
            config_path = Path(__file__).parent / "config.yaml"

        with open(config_path) as f:
            self._config = yaml.safe_load(f)

        self._load_env_overrides()

    def _load_env_overrides(self):
        """Load environment variable overrides."""
        self.pl_api_key = os.getenv("PL_API_KEY")
        self._planet_base_url = os.getenv("PL_API_URL")
        self._landsat_host = os.getenv("LANDSAT_HOST")
        self._tides_url = os.getenv("BF_TIDE_PREDICTION_URL")
        self._disable_permissions_check = os.getenv("PL_DISABLE_PERMISSIONS_CHECK")
        self._refresh_interval = os.getenv("IABROKER_CATALOG_REFRESH_INTERVAL")

    @property
    def planet_base_url(self):
        return self._planet_base_url or self._config["api"]["planet_base_url"]

    @property
    def api_timeout(self):
        return self._config["api"]["timeout"]

    @property
    def pagination_delay(self):
        return self._config["api"]["pagination_delay"]

    @property
    def disable_permissions_check(self):
        if self._disable_permissions_check is not None:
            return self._disable_permissions_check.strip().lower() in TRUE_VALUES
        return bool(self._config["api"]["disable_permissions_check"])

    @property
    def landsat_host(self):
        return (self._landsat_host or self._config["landsat"]["host"]).rstrip("/")

    @property
    def scene_list_path(self):
        return self._config["landsat"]["scene_list_path"]

    @property
    def scene_list_url(self):
        return f"{self.landsat_host}{self.scene_list_path}"

    @property
    def landsat_band_host(self):
        return self._config["landsat"]["band_host"]

    @property
    def sentinel_band_host(self):
        return self._config["sentinel"]["band_host"]

    @property
    def catalog_refresh_interval(self):
        if self._refresh_interval:
            return float(self._refresh_interval)
        return float(self._config["catalog"]["refresh_interval"])

    @property
    def catalog_warm_up_timeout(self):
        return float(self._config["catalog"]["warm_up_timeout"])

    @property
    def tides_url(self):
        return self._tides_url or self._config["tides"]["url"]

    @property
    def log_level(self):
        return self._config["logging"]["level"]

    @property
    def log_format(self):
        return self._config["logging"]["format"]


# Global config instance
config = Config()
