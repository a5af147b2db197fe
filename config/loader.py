"""Configuration loader for the hospital admin client

A value is taken from the process environment when set, otherwise from the
``.env`` file, otherwise from the default given in ``settings.py``. Values
read from the environment are converted to the type of that default.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Points the client at a different .env file
ENV_FILE_VAR = "HOSPITAL_ADMIN_ENV_FILE"

TRUE_VALUES = {"true", "1", "yes", "on"}


class ConfigLoader:
    """Environment-backed settings with typed defaults"""

    def __init__(self, env_path: Optional[Union[str, Path]] = None):
        """
        Args:
            env_path: .env file to load. Falls back to $HOSPITAL_ADMIN_ENV_FILE,
                then '.env' in the working directory.
        """
        self.env_path = Path(env_path or os.getenv(ENV_FILE_VAR) or ".env")
        self.env_loaded = False
        if self.env_path.is_file():
            # Existing environment variables win over the file
            self.env_loaded = load_dotenv(dotenv_path=self.env_path, override=False)
            logger.debug(f"Read settings file {self.env_path}")
        else:
            logger.debug(f"No settings file at {self.env_path}, using environment and defaults")

    def _coerce(self, env_var: str, raw: str, default: Any) -> Any:
        """Convert a raw environment string to the type of the default"""
        # bool is an int subclass, so it goes first
        if isinstance(default, bool):
            return raw.strip().lower() in TRUE_VALUES
        if isinstance(default, (int, float)):
            try:
                return type(default)(raw)
            except ValueError:
                logger.warning(
                    f"{env_var}={raw!r} is not a valid {type(default).__name__}, keeping {default}"
                )
                return default
        return raw

    def get(self, env_var: str, default: Any) -> Any:
        """Look up env_var, converted to the type of default

        String defaults starting with '~/' are expanded to the home directory.
        """
        raw = os.getenv(env_var)
        if raw is not None:
            return self._coerce(env_var, raw, default)
        if isinstance(default, str) and default.startswith("~/"):
            return os.path.expanduser(default)
        return default


_loader: Optional[ConfigLoader] = None


def get_config_loader() -> ConfigLoader:
    """Shared loader used by settings.py"""
    global _loader
    if _loader is None:
        _loader = ConfigLoader()
    return _loader
