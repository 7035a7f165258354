# config.py - Resolves the network-config files for the target network and registers them
import os
import logging
from typing import NamedTuple, Optional, Mapping

from .config_store import ConfigStore, get_config_store

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

NETWORK_CONFIG_TEMPLATE = 'network-config%s.json'
NETWORK_CONFIG_SUBDIR = 'app'
BASE_CONFIG_FILENAME = 'config.json'

current_dir = os.path.dirname(os.path.abspath(__file__))


class ConfigPaths(NamedTuple):
    network_config: str
    base_config: str


def network_config_filename(target_network: Optional[str]) -> str:
    """'testnet' -> 'network-config-testnet.json'; None or '' -> 'network-config.json'"""
    if target_network:
        return NETWORK_CONFIG_TEMPLATE % ('-' + target_network)
    return NETWORK_CONFIG_TEMPLATE % ''


def resolve_config_paths(environ: Optional[Mapping[str, str]] = None,
                         base_dir: Optional[str] = None) -> ConfigPaths:
    """
    Build the absolute paths of the two configuration files.

    Args:
        environ: Mapping holding TARGET_NETWORK (default: os.environ)
        base_dir: Directory the files are anchored at (default: this module's directory)

    Returns:
        ConfigPaths with the network-specific file first and config.json second
    """
    if environ is None:
        environ = os.environ
    if base_dir is None:
        base_dir = current_dir

    filename = network_config_filename(environ.get('TARGET_NETWORK'))
    return ConfigPaths(
        network_config=os.path.abspath(os.path.join(base_dir, NETWORK_CONFIG_SUBDIR, filename)),
        base_config=os.path.abspath(os.path.join(base_dir, BASE_CONFIG_FILENAME)),
    )


def load_config(store: Optional[ConfigStore] = None,
                environ: Optional[Mapping[str, str]] = None,
                base_dir: Optional[str] = None) -> ConfigStore:
    """
    Startup routine, run once per store: register the network config, then config.json, and mark the store ready.

    Errors raised by the store (missing file, malformed JSON) propagate unchanged.
    config.json is registered last so its values override the network config.
    """
    if store is None:
        store = get_config_store()
    if store.is_ready:
        logger.info(f"Config store already loaded from {len(store.config_files)} file(s)")
        return store

    paths = resolve_config_paths(environ, base_dir)
    logger.info(f"Loading network config from {paths.network_config}")

    store.add_config_file(paths.network_config)
    store.add_config_file(paths.base_config)
    store.mark_ready()
    return store
