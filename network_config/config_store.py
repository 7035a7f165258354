# config_store.py - Layered JSON configuration store for the network client
import os
import copy
import json
import threading
import logging
from typing import Optional, Dict, Any, List, Mapping

from mergedeep import merge, Strategy

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

STATE_INIT = "init"
STATE_REGISTERING = "registering"
STATE_READY = "ready"

_MISSING = object()


def env_key(name: str) -> str:
    """Map a setting name to the environment variable that overrides it ('request-timeout' -> 'REQUEST_TIMEOUT')"""
    return name.upper().replace('-', '_')


class ConfigStore:
    """
    Configuration store fed by JSON files registered at startup.

    Merge semantics:
    - Files are deep-merged in registration order
    - Nested objects merge key by key
    - Scalars and lists from a later file replace earlier values,
      so the most recently registered file wins on conflicts

    Lookup precedence for get_config_setting():
    1. Runtime overrides (set_config_setting)
    2. Environment variables (see env_key), only for settings a file defines
    3. Merged file contents
    4. Caller supplied default
    """
    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Args:
            environ: Mapping consulted for environment overrides (default: os.environ)
        """
        self._environ = environ
        self._lock = threading.Lock()
        self._files: List[str] = []
        self._data: Dict[str, Any] = {}
        self._overrides: Dict[str, Any] = {}
        self._state = STATE_INIT

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    @property
    def state(self) -> str:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state == STATE_READY

    @property
    def config_files(self) -> List[str]:
        """Registered file paths in registration order"""
        with self._lock:
            return list(self._files)

    def add_config_file(self, path: str) -> None:
        """
        Register a JSON configuration file and merge it over the current contents.

        Args:
            path: Path to a JSON file whose top level is an object

        Raises:
            FileNotFoundError: the file does not exist
            json.JSONDecodeError: the file is not valid JSON
            UnicodeDecodeError: the file is not valid UTF-8
            ValueError: the top level of the file is not an object
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                contents = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load config file {path}: {e}")
            raise

        if not isinstance(contents, dict):
            logger.error(f"Config file {path} does not contain a JSON object")
            raise ValueError(f"Config file {path} must contain a JSON object, got {type(contents).__name__}")

        with self._lock:
            if self._state == STATE_READY:
                logger.warning(f"Registering {path} after the config store was marked ready")
            else:
                self._state = STATE_REGISTERING
            merge(self._data, contents, strategy=Strategy.REPLACE)
            self._files.append(path)

        logger.info(f"Config file registered: {path} ({len(contents)} top-level keys)")

    def get_config_setting(self, name: str, default: Any = None) -> Any:
        """
        Look up a setting by its top-level name.

        Args:
            name: Setting name, e.g. 'request-timeout' or 'network-config'
            default: Value returned when no layer defines the setting

        Returns:
            The highest precedence value for the setting
        """
        with self._lock:
            value = self._overrides.get(name, _MISSING)
            if value is not _MISSING:
                return copy.deepcopy(value)

            value = self._data.get(name, _MISSING)
            if value is not _MISSING:
                # Environment only overrides settings the files define
                return self.environ.get(env_key(name), copy.deepcopy(value))

        return default

    def has_config_setting(self, name: str) -> bool:
        """True when a runtime override or a registered file defines the setting"""
        with self._lock:
            return name in self._overrides or name in self._data

    def set_config_setting(self, name: str, value: Any) -> None:
        """Override a setting at runtime; file contents are left untouched"""
        with self._lock:
            self._overrides[name] = value
        logger.debug(f"Config setting overridden: {name}")

    def as_dict(self) -> Dict[str, Any]:
        """Merged file contents with runtime overrides applied on top"""
        with self._lock:
            result = copy.deepcopy(self._data)
            result.update(copy.deepcopy(self._overrides))
        return result

    def mark_ready(self) -> None:
        with self._lock:
            self._state = STATE_READY
            file_count = len(self._files)
        logger.info(f"Config store ready with {file_count} file(s)")

    def reset(self) -> None:
        """Drop all registered files and overrides and return to the init state"""
        with self._lock:
            self._files = []
            self._data = {}
            self._overrides = {}
            self._state = STATE_INIT


# Process-wide store shared by the module-level helpers below
_default_store = ConfigStore()


def get_config_store() -> ConfigStore:
    return _default_store


def add_config_file(path: str) -> None:
    _default_store.add_config_file(path)


def get_config_setting(name: str, default: Any = None) -> Any:
    return _default_store.get_config_setting(name, default)


def set_config_setting(name: str, value: Any) -> None:
    _default_store.set_config_setting(name, value)
