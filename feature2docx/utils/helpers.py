"""Helper utilities"""
import re
from typing import Dict, Any


def sanitize_filename(name: str) -> str:
    """Sanitize string for use as filename"""
    return re.sub(r'[<>:"/\\|?*\r\n]', '_', name)


def deep_get(dictionary: Dict, keys: str, default: Any = None) -> Any:
    """Get nested dictionary value using dot notation"""
    keys_list = keys.split('.')
    value = dictionary

    for key in keys_list:
        if isinstance(value, dict):
            value = value.get(key, default)
        else:
            return default

    return value


def megabytes(value: Any) -> int:
    """Convert a size in MB (int, float or numeric string) to bytes"""
    return int(float(value) * 1024 * 1024)


def format_megabytes(size: int) -> str:
    """Format a byte count as MB without rounding fractions away (0.5, 10)"""
    return f"{size / (1024 * 1024):g}"
