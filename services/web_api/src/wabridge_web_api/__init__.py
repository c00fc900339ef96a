"""wabridge Web API"""

from wabridge_web_api.app_factory import create_app

__all__ = ["create_app"]
