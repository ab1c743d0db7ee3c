import os
import copy
import logging
import logging.handlers
import yaml
from typing import Dict, Any
from dotenv import load_dotenv


def load_config(config_path: str = 'config.yaml') -> Dict[str, Any]:
    """Load configuration from YAML file with environment variable overrides."""
    # Load environment variables
    load_dotenv()

    config = get_default_config()
    try:
        if os.path.exists(config_path):
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f) or {}
            config = merge_config(config, file_config)
    except Exception as e:
        logging.warning(f"Could not load config from {config_path}: {e}")
        config = get_default_config()

    # Override with environment variables
    config = apply_env_overrides(config)

    return config


def get_default_config() -> Dict[str, Any]:
    """Get default configuration values."""
    return {
        'pdf': {
            'orientation': 'Portrait',
            'unit': 'mm',
            'page_size': 'A4',
            'margins': {
                'left': 1,
                'right': 1,
                'top': None
            },
            'font_directory': '',
            'default_background_color': [255, 255, 255],
            'default_text_color': [0, 0, 0],
            'default_font': {
                'family': 'helvetica',
                'size': 8
            },
            'table': {
                'indent': 1,
                'sub_row_indent': None
            }
        },
        'style': {
            'page_logo': ''
        },
        'http': {
            'user_agent': 'fpdfwriter/1.0',
            'timeout': 30
        },
        'language': {
            'file': None,
            'items': {}
        },
        'logging': {
            'level': 'INFO',
            'log_to_file': False,
            'log_filename': 'fpdfwriter.log',
            'rotate_logs': True,
            'logs_dir': 'logs'
        }
    }


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration."""
    env_mappings = {
        'PDF_ORIENTATION': ('pdf', 'orientation', str),
        'PDF_UNIT': ('pdf', 'unit', str),
        'PDF_PAGE_SIZE': ('pdf', 'page_size', str),
        'PDF_FONT_DIR': ('pdf', 'font_directory', str),
        'PAGE_LOGO': ('style', 'page_logo', str),
        'HTTP_TIMEOUT': ('http', 'timeout', int),
        'LOG_LEVEL': ('logging', 'level', str),
        'DEBUG_MODE': ('logging', 'level', lambda x: 'DEBUG' if x.lower() == 'true' else config['logging']['level'])
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            try:
                converted_value = converter(value)
                config.setdefault(section, {})[key] = converted_value
            except (ValueError, TypeError) as e:
                logging.warning(f"Invalid value for {env_var}: {value} - {e}")

    return config


def setup_logging(logging_config: Dict[str, Any]) -> logging.Logger:
    """Setup logging configuration."""
    # Configure logging
    logger = logging.getLogger()
    level = getattr(logging, logging_config.get('level', 'INFO').upper(), logging.INFO)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if logging_config.get('log_to_file', False):
        logs_dir = logging_config.get('logs_dir', 'logs')
        os.makedirs(logs_dir, exist_ok=True)
        log_filename = os.path.join(logs_dir, logging_config.get('log_filename', 'fpdfwriter.log'))

        if logging_config.get('rotate_logs', True):
            # Rotating file handler
            file_handler = logging.handlers.RotatingFileHandler(
                log_filename,
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
        else:
            file_handler = logging.FileHandler(log_filename, encoding='utf-8')

        file_handler.setLevel(logging.DEBUG)  # File gets all logs
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def format_file_size(size_bytes: int) -> str:
    """Format file size in human readable format."""
    if size_bytes == 0:
        return "0B"

    size_names = ["B", "KB", "MB", "GB", "TB"]
    import math
    i = int(math.floor(math.log(size_bytes, 1024)))
    p = math.pow(1024, i)
    s = round(size_bytes / p, 2)
    return f"{s} {size_names[i]}"


def clean_filename(filename: str) -> str:
    """Clean filename to be filesystem safe."""
    import re

    # Remove or replace invalid characters
    filename = re.sub(r'[<>:"/\\|?*]', '_', filename)

    # Remove control characters
    filename = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', filename)

    # Limit length
    if len(filename) > 255:
        name, ext = os.path.splitext(filename)
        filename = name[:255-len(ext)] + ext

    return filename.strip()


def is_remote_path(path: str) -> bool:
    """Check if an image path is an http(s) URL."""
    return path.lower().startswith(('http://', 'https://'))
