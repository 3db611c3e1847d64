from __future__ import annotations
from datetime import timedelta
from pathlib import Path
import fcntl
from typing import Any, Dict
import yaml

from cattata.util.logger import get_logger

logger = get_logger("app_configuration")


CONFIG_PATH = Path("./config/app_config.yml").resolve()

DEFAULT_THRESHOLD_DAYS = 14.0
DEFAULT_CHECK_INTERVAL_HOURS = 24.0
DEFAULT_MAX_PAGE_LENGTH = 1024
DEFAULT_MAX_PAGES_PER_MESSAGE = 10
DEFAULT_FOOTER = (
    "Please note that this is tracked via the database. "
    "Users who have not spoke in **ages** will not be tracked here!"
)
DEFAULT_CHECK_INACTIVE_COMMAND = "!checkInactive"
DEFAULT_SHOW_USERS_COMMAND = "!showUsers"
DEFAULT_DATABASE_PATH = Path("data/user_activity.db")


def _optional_int(value: Any) -> int | None:
    """Coerce snowflake-like config values (int or numeric string) to int."""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("[APP CONFIGURATION] Ignoring non-numeric id %r", value)
        return None


class AppConfig:
    """File-lock based accessor around the YAML application configuration.

    Caches the contents of ``./config/app_config.yml`` and exposes typed
    properties with defaults for every setting the bot reads. A missing or
    malformed file yields an empty mapping so every property falls back to
    its default.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path
        self._data: Dict[str, Any] = {}
        self.reload()

    # --------------------------
    # Private helpers
    # --------------------------
    def load_from_disk(self) -> Dict[str, Any]:
        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_SH)
                data = yaml.safe_load(f)
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError:
            logger.error("[APP CONFIGURATION] Config file %s not found.", self.config_path)
            return {}
        except Exception as exc:
            logger.error("[APP CONFIGURATION] Failed to load config %s: %s", self.config_path, exc)
            return {}

        if not isinstance(data, dict):
            if data is not None:
                logger.error("[APP CONFIGURATION] Config root in %s is not a mapping.", self.config_path)
            return {}
        return data

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._data.get(name, {})
        return section if isinstance(section, dict) else {}

    # --------------------------
    # Public API
    # --------------------------
    def reload(self) -> Dict[str, Any]:
        """Reload configuration from disk and return the loaded mapping."""
        self._data = self.load_from_disk()
        return self._data

    @property
    def data(self) -> Dict[str, Any]:
        """Return the current cached configuration mapping (do not mutate)."""
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Safe lookup for top-level configuration keys."""
        return self._data.get(key, default)

    # --------------------------
    # High-level shortcuts
    # --------------------------
    @property
    def target_role_id(self) -> int | None:
        """Role whose holders are checked for inactivity."""
        return _optional_int(self._data.get("target_role_id"))

    @property
    def guild_id(self) -> int | None:
        """Guild to evaluate; ``None`` means the first guild the bot is in."""
        return _optional_int(self._data.get("guild_id"))

    @property
    def inactivity_threshold(self) -> timedelta:
        """How long a role holder may stay silent before being reported."""
        days = self._section("inactivity").get("threshold_days", DEFAULT_THRESHOLD_DAYS)
        return timedelta(days=float(days))

    @property
    def check_interval(self) -> float:
        """Seconds between scheduled inactivity checks."""
        hours = self._section("inactivity").get("check_interval_hours", DEFAULT_CHECK_INTERVAL_HOURS)
        return float(hours) * 3600.0

    @property
    def report_channel_id(self) -> int | None:
        """Channel that receives scheduled inactivity reports, if any."""
        return _optional_int(self._section("inactivity").get("report_channel_id"))

    @property
    def max_page_length(self) -> int:
        """Character budget of a single report page (embed description)."""
        return int(self._section("reports").get("max_page_length", DEFAULT_MAX_PAGE_LENGTH))

    @property
    def max_pages_per_message(self) -> int:
        """Maximum number of report pages sent together in one message."""
        return int(self._section("reports").get("max_pages_per_message", DEFAULT_MAX_PAGES_PER_MESSAGE))

    @property
    def report_footer(self) -> str:
        """Footer text shown beneath every report page."""
        return str(self._section("reports").get("footer") or DEFAULT_FOOTER)

    @property
    def check_inactive_command(self) -> str:
        """Text trigger for the on-demand inactivity report."""
        return str(self._section("commands").get("check_inactive") or DEFAULT_CHECK_INACTIVE_COMMAND)

    @property
    def show_users_command(self) -> str:
        """Text trigger for the full activity table report."""
        return str(self._section("commands").get("show_users") or DEFAULT_SHOW_USERS_COMMAND)

    @property
    def database_path(self) -> Path:
        """Location of the SQLite activity ledger."""
        value = self._section("database").get("path")
        return Path(value) if value else DEFAULT_DATABASE_PATH


# Shared application-wide configuration instance
app_config = AppConfig(CONFIG_PATH)
