import os

from fetchgate import constants


class ConfigManager:
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    PROXY_CLIENT_TIMEOUT_SECS: float = float(os.environ.get("PROXY_CLIENT_TIMEOUT_SECS", 30))

    VARIANTS_PATH: str = os.environ.get("VARIANTS_PATH", "")
    UI_CONFIG_PATH: str = os.environ.get("UI_CONFIG_PATH", "")

    CATALOG_URL: str = os.environ.get("CATALOG_URL", constants.CATALOG_URL)
    CATALOG_API_KEY: str = os.environ.get("CATALOG_API_KEY", constants.CATALOG_API_KEY)
    CATALOG_USER_AGENT: str = os.environ.get("CATALOG_USER_AGENT", constants.CATALOG_USER_AGENT)
