# network_config - Resolves and registers the network-config files for the target network
from .config_store import (
    ConfigStore,
    get_config_store,
    add_config_file,
    get_config_setting,
    set_config_setting,
)
from .config import (
    ConfigPaths,
    network_config_filename,
    resolve_config_paths,
    load_config,
)
