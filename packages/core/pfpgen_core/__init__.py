"""Core app services for settings, credentials, brand lookup, and editing sessions."""

from .brand import BrandColor, BrandLookupError, BrandLookupResult, BrandService
from .config import AppConfig, load_config, save_config
from .credentials import load_api_key, save_api_key
from .diagnostics import build_doctor_payload
from .naming import brand_name_slug, brand_slug, export_filename
from .session import InvalidColorError, ProfileSession

__all__ = [
    "AppConfig",
    "BrandColor",
    "BrandLookupError",
    "BrandLookupResult",
    "BrandService",
    "InvalidColorError",
    "ProfileSession",
    "brand_name_slug",
    "brand_slug",
    "build_doctor_payload",
    "export_filename",
    "load_api_key",
    "load_config",
    "save_api_key",
    "save_config",
]
