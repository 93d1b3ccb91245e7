"""Data loading functionality for maritime routing."""

import json
import logging
import os
from typing import Dict, Optional

import requests

from .config import ALLOWED_NETWORKS, DATA_DIR_ENV, DEFAULT_NETWORK
from .errors import ConfigurationError, ResourceError
from .interfaces import PassageRuleConfig

logger = logging.getLogger(__name__)

PACKAGE_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')

def get_data_dir(data_dir: Optional[str] = None) -> str:
    """Resolve the data directory: argument, then environment, then package data."""
    return data_dir or os.environ.get(DATA_DIR_ENV) or PACKAGE_DATA_DIR

def _read_json(source: str) -> Dict:
    if source.startswith(('http://', 'https://')):
        response = requests.get(source)
        response.raise_for_status()
        return json.loads(response.content)

    with open(source, 'r', encoding='utf-8') as f:
        return json.load(f)

def load_network(source: str) -> Dict:
    """Load a shipping-lane network from a GeoJSON file path or URL.
    
    Args:
        source: Path or HTTP(S) URL of a GeoJSON FeatureCollection
        
    Returns:
        The parsed FeatureCollection
        
    Raises:
        ResourceError: If the network cannot be read or is not a FeatureCollection
    """
    logger.info(f"Loading network from {source}")
    
    try:
        data = _read_json(source)
    except (requests.RequestException, OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load network: {str(e)}")
        raise ResourceError(f"Failed to load network '{source}': {str(e)}") from e

    if not isinstance(data, dict) or not isinstance(data.get('features'), list):
        raise ResourceError(f"Network '{source}' is not a GeoJSON FeatureCollection")

    logger.debug(f"Retrieved network with {len(data['features'])} features")
    return data

def load_default_network(name: str = DEFAULT_NETWORK, data_dir: Optional[str] = None) -> Dict:
    """Load one of the bundled networks (``eurostat`` or ``ornl``).
    
    Raises:
        ConfigurationError: If ``name`` is not a bundled network
        ResourceError: If the network file is missing or corrupt
    """
    if name not in ALLOWED_NETWORKS:
        raise ConfigurationError(
            f"Invalid network name '{name}'. Available networks: {', '.join(ALLOWED_NETWORKS)}"
        )
    return load_network(os.path.join(get_data_dir(data_dir), 'networks', f"{name}.geojson"))

def load_profiles(source: str) -> PassageRuleConfig:
    """Load a passage rule configuration from a JSON file path or URL.
    
    Raises:
        ResourceError: If the file cannot be read
        ConfigurationError: If its content is not a valid rule configuration
    """
    logger.info(f"Loading passage rules from {source}")
    
    try:
        data = _read_json(source)
    except (requests.RequestException, OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load passage rules: {str(e)}")
        raise ResourceError(f"Failed to load passage rules '{source}': {str(e)}") from e

    config = PassageRuleConfig.from_dict(data)
    logger.debug(f"Loaded {len(config.passages)} passages for classes: {', '.join(config.classes)}")
    return config
