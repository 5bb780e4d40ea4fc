"""Provider factory and registry."""

from __future__ import annotations

from typing import Any
from collections.abc import Mapping

from linealign.exceptions import ConfigurationError
from linealign.providers.annotation.base import AlignmentAnnotationProvider


def get_annotation_provider(config: Mapping[str, Any]) -> AlignmentAnnotationProvider:
    """Get alignment annotation provider based on configuration."""
    provider_type = str(config.get("provider", "http")).strip().lower()

    match provider_type:
        case "http":
            from linealign.providers.annotation.http import HTTPAnnotationProvider

            base_url = str(config.get("base_url") or "").strip()
            if not base_url:
                raise ConfigurationError("http annotation provider requires base_url")
            return HTTPAnnotationProvider(
                base_url=base_url,
                api_key=str(config.get("api_key") or ""),
                timeout=float(config.get("timeout", 30.0)),
                max_attempts=int(config.get("max_attempts", 3)),
            )
        case "local":
            from linealign.providers.annotation.local import LocalAnnotationProvider

            local_dir = str(config.get("local_dir") or "").strip()
            if not local_dir:
                raise ConfigurationError("local annotation provider requires local_dir")
            return LocalAnnotationProvider(base_dir=local_dir)
        case _:
            raise ConfigurationError(f"Unknown annotation provider: {provider_type}")
