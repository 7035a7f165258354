# server.py - Flask app exposing the merged network configuration
import os
import logging
from typing import Optional, Mapping

from flask import Flask, jsonify
from flask_cors import CORS

from .config import load_config, resolve_config_paths
from .config_store import ConfigStore

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

LOCAL_ORIGINS = ["http://localhost:8080", "http://localhost:5000"]


def is_production(environ: Mapping[str, str]) -> bool:
    # Heroku provides PORT and DYNO
    return environ.get('PORT') is not None or environ.get('DYNO') is not None


def create_app(store: Optional[ConfigStore] = None,
               environ: Optional[Mapping[str, str]] = None) -> Flask:
    """
    Run the config startup routine and build the Flask app serving it.

    Args:
        store: Config store to register into (default: the process-wide store)
        environ: Environment mapping (default: os.environ)
    """
    if environ is None:
        environ = os.environ

    store = load_config(store, environ)
    production = is_production(environ)
    target_network = environ.get('TARGET_NETWORK') or None

    print(f"🌐 Target network: {target_network or 'default'}")
    for path in store.config_files:
        print(f"📋 Config file: {path}")

    app = Flask(__name__)
    CORS(app, origins=LOCAL_ORIGINS if not production else ["*"])
    app.config["CONFIG_STORE"] = store

    @app.route('/health')
    def health():
        return jsonify({"status": "healthy", "config_ready": store.is_ready})

    @app.route('/network_config.json')
    def network_config():
        return jsonify(store.as_dict())

    @app.route('/config/<name>')
    def config_setting(name):
        if not store.has_config_setting(name):
            return jsonify({"error": f"Unknown config setting: {name}"}), 404
        return jsonify({"name": name, "value": store.get_config_setting(name)})

    @app.route('/system_info')
    def system_info():
        paths = resolve_config_paths(environ)
        return jsonify({
            "target_network": target_network,
            "network_config_path": paths.network_config,
            "config_files": store.config_files,
            "is_production": production,
        })

    logger.info(f"Config server created with {len(store.config_files)} config file(s)")
    return app
