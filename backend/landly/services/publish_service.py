"""
Publish pipeline: render a persisted schema, upload the build under
sites/<subdomain>/ and report the public URL. Callers serialize publishes per
project; nothing here locks.
"""
from __future__ import annotations

import logging
import posixpath
import re
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

from landly.config import settings
from landly.exceptions import PublishError
from landly.schemas import PublishResult
from landly.services.static_renderer import StaticRenderer
from landly.services.storage import SITES_PREFIX, Publisher

logger = logging.getLogger(__name__)

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def generate_subdomain(project_name: Optional[str], project_id: Any) -> str:
    """ASCII slug of the project name plus the first 8 chars of its id, e.g. `my-shop-1a2b3c4d`."""
    slug = _NON_SLUG_RE.sub("-", (project_name or "").strip().lower()).strip("-") or "project"
    return f"{slug}-{str(project_id)[:8]}"


def site_prefix(subdomain: str) -> str:
    return f"{SITES_PREFIX}{subdomain}"


def resolve_asset_path(asset_path: Optional[str]) -> str:
    """Map a request path to a stored object path; directory-style paths serve index.html."""
    clean = (asset_path or "").replace("\\", "/").strip("/")
    if not clean:
        return "index.html"
    if ".." in clean.split("/"):
        raise PublishError("Invalid asset path", details={"path": asset_path})
    clean = posixpath.normpath(clean)
    if not posixpath.splitext(clean)[1]:
        return f"{clean}/index.html"
    return clean


class PublishService:
    def __init__(self, renderer: StaticRenderer, publisher: Publisher, public_base: Optional[str] = None):
        self.renderer = renderer
        self.publisher = publisher
        self.public_base = (public_base or settings.PUBLIC_BASE_URL).rstrip("/")

    def public_url(self, subdomain: str) -> str:
        return f"{self.public_base}/{site_prefix(subdomain)}"

    def publish(self, project_id: Any, project_name: str, schema_json: Optional[str]) -> PublishResult:
        if not (schema_json or "").strip():
            raise PublishError("project schema is empty", details={"project_id": str(project_id)})

        subdomain = generate_subdomain(project_name, project_id)
        build_dir = self.renderer.render_static(project_id, schema_json)
        files = self.publisher.upload(build_dir, site_prefix(subdomain))

        result = PublishResult(
            subdomain=subdomain,
            public_url=self.public_url(subdomain),
            published_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
            build_dir=build_dir,
            files_uploaded=files,
        )
        logger.info(
            "Project published",
            extra={"project_id": str(project_id), "subdomain": subdomain, "files": files},
        )
        return result

    def serve_published(self, subdomain: str, asset_path: Optional[str] = None) -> Tuple[bytes, str]:
        """Body and content type of a published asset."""
        if not subdomain or "/" in subdomain or subdomain in (".", ".."):
            raise PublishError("Invalid subdomain", details={"subdomain": subdomain})
        relative = resolve_asset_path(asset_path)
        return self.publisher.get_object(f"{site_prefix(subdomain)}/{relative}")
