"""通用工具"""

from wabridge_core.common.utils.serialization import from_json, to_json

__all__ = ["from_json", "to_json"]
