"""brand.dev lookups that turn a brand name or domain into theme colors."""

from __future__ import annotations

import json
import os
import re
import ssl
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from typing import Any

import certifi

from .logging_setup import get_logger
from .naming import brand_name_slug


DEFAULT_API_BASE = "https://api.brand.dev/v1"
_DOMAIN_RE = re.compile(r"^[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

logger = get_logger("brand")


class BrandLookupError(Exception):
    """Lookup failure carrying the status text shown to the user."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


@dataclass(frozen=True)
class BrandColor:
    hex: str
    name: str = ""

    @property
    def label(self) -> str:
        return self.name or self.hex


@dataclass(frozen=True)
class BrandLookupResult:
    query: str
    title: str
    colors: list[BrandColor] = field(default_factory=list)

    @property
    def primary(self) -> BrandColor:
        return self.colors[0]

    @property
    def brand_name(self) -> str:
        return brand_name_slug(self.title)

    def status_text(self, color: BrandColor | None = None) -> str:
        color = color or self.primary
        return f"{self.title} → {color.label} ({color.hex})"


def is_domain(query: str) -> bool:
    return bool(_DOMAIN_RE.match(query))


def _with_hash(value: str) -> str:
    return value if value.startswith("#") else "#" + value


def _build_ssl_context() -> ssl.SSLContext:
    ca_bundle = os.environ.get("PFPGEN_CA_BUNDLE", "").strip()
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)
    return ssl.create_default_context(cafile=certifi.where())


def parse_brand_payload(query: str, payload: dict[str, Any]) -> BrandLookupResult:
    brand = payload.get("brand") or {}
    raw_colors = brand.get("colors") or []
    colors = [
        BrandColor(hex=_with_hash(str(c["hex"])), name=str(c.get("name") or ""))
        for c in raw_colors
        if isinstance(c, dict) and c.get("hex")
    ]
    if not colors:
        raise BrandLookupError("No colors found for this brand")
    return BrandLookupResult(query=query, title=str(brand.get("title") or query), colors=colors)


class BrandService:
    def __init__(self, api_base: str = DEFAULT_API_BASE, timeout_s: int = 15) -> None:
        self.api_base = api_base.rstrip("/")
        self.timeout_s = timeout_s

    def endpoint(self, query: str) -> str:
        key = "domain" if is_domain(query) else "name"
        params = urllib.parse.urlencode({key: query, "fast": "true"})
        return f"{self.api_base}/brand/retrieve?{params}"

    def lookup(self, query: str, api_key: str) -> BrandLookupResult:
        if not api_key:
            raise BrandLookupError("Set your brand.dev API key first")
        query = query.strip()
        if not query:
            raise BrandLookupError("Enter a brand name or domain")

        req = urllib.request.Request(
            self.endpoint(query),
            headers={"Authorization": f"Bearer {api_key}", "Accept": "application/json"},
        )
        logger.info("brand lookup", extra={"event": "brand_lookup_start"})

        try:
            with urllib.request.urlopen(req, timeout=self.timeout_s, context=_build_ssl_context()) as resp:
                payload = json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as exc:
            logger.warning("brand lookup failed status=%s", exc.code, extra={"event": "brand_lookup_http_error"})
            if exc.code == 401:
                raise BrandLookupError("Invalid API key", status=401) from exc
            if exc.code == 404:
                raise BrandLookupError("Brand not found", status=404) from exc
            raise BrandLookupError(f"Error {exc.code}", status=exc.code) from exc
        except (urllib.error.URLError, OSError) as exc:
            logger.error("brand lookup network error: %s", exc, extra={"event": "brand_lookup_network_error"})
            raise BrandLookupError("Network error") from exc
        except ValueError as exc:
            logger.error("brand lookup returned malformed JSON", extra={"event": "brand_lookup_bad_payload"})
            raise BrandLookupError("Unexpected response from brand.dev") from exc

        if not isinstance(payload, dict):
            raise BrandLookupError("Unexpected response from brand.dev")
        result = parse_brand_payload(query, payload)
        logger.info("brand lookup ok colors=%d", len(result.colors), extra={"event": "brand_lookup_ok"})
        return result
