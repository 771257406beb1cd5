"""
Render a normalized page schema into a static site directory.

One build directory per project, replaced on every render: `/` becomes
index.html, any other page path P becomes P/index.html, and styles.css +
analytics.js are copied to the root.
Blocks are rendered through Jinja2 snippets with autoescape, so every value that
comes from the schema is escaped on insertion.
"""
import json
import logging
import os
import re
import shutil
import time
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

from jinja2 import BaseLoader, Environment
from markupsafe import Markup

from landly.config import settings
from landly.exceptions import RenderError
from landly.schemas import PALETTE_KEYS, BlockKind
from landly.services.block_snippets import (
    BLOCK_SNIPPETS,
    EMPTY_PAGE_SNIPPET,
    PAGE_TEMPLATE,
    UNSUPPORTED_SNIPPET,
)
from landly.services.props import as_dict, get_bool, get_str, get_text, to_dicts, to_list, to_strings

logger = logging.getLogger(__name__)

STATIC_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "static")
STYLESHEET_NAME = "styles.css"
ANALYTICS_SCRIPT_NAME = "analytics.js"

DEFAULT_PALETTE: Dict[str, str] = {
    "primary": "#2563EB",
    "secondary": "#7C3AED",
    "accent": "#F97316",
    "background": "#FFFFFF",
    "text": "#1F2937",
}

DEFAULT_NAV_ITEMS = ["Возможности", "Цены", "Отзывы", "Контакты"]
EMPTY_PAGE_MESSAGE = "Content will appear after the first generation"

_CSS_COLOR_RE = re.compile(
    r"^(#[0-9a-fA-F]{3,8}|[a-zA-Z]{3,20}|(rgb|rgba|hsl|hsla)\(\s*[0-9.,%\s/]+\))$"
)
_SAFE_URL_SCHEMES = {"http", "https", "mailto", "tel"}
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


def safe_url(value: str, default: str = "#") -> str:
    """Keep relative, anchor and http(s)/mailto/tel URLs; anything else becomes `default`."""
    url = (value or "").strip()
    if not url:
        return default
    scheme = urlsplit(url).scheme.lower()
    if scheme and scheme not in _SAFE_URL_SCHEMES:
        return default
    return url


def safe_color(value: str, default: str) -> str:
    color = (value or "").strip()
    return color if _CSS_COLOR_RE.match(color) else default


def extract_palette(schema: Dict[str, Any]) -> Dict[str, str]:
    """Resolve the 5-color palette; each missing, blank or unsafe entry falls back independently."""
    raw = as_dict(as_dict(schema.get("theme")).get("palette"))
    return {key: safe_color(get_str(raw, key), DEFAULT_PALETTE[key]) for key in PALETTE_KEYS}


def build_theme_style(palette: Dict[str, str]) -> str:
    return "".join(f"--landing-{key}:{palette[key]};" for key in PALETTE_KEYS)


def page_output_path(build_dir: str, page_path: str) -> str:
    """Map a page path to its index.html inside build_dir, refusing paths that escape it."""
    if _CONTROL_CHARS_RE.search(page_path or ""):
        raise RenderError(f"page path contains control characters: {page_path!r}", stage="page")
    relative = (page_path or "").strip().strip("/")
    if not relative:
        return os.path.join(build_dir, "index.html")
    root = os.path.realpath(build_dir)
    target_dir = os.path.realpath(os.path.join(root, *relative.split("/")))
    if target_dir != root and not target_dir.startswith(root + os.sep):
        raise RenderError(f"page path escapes build directory: {page_path}", stage="page")
    return os.path.join(target_dir, "index.html")


def asset_prefix_for(page_path: str) -> str:
    relative = (page_path or "").strip().strip("/")
    depth = len([part for part in relative.split("/") if part]) if relative else 0
    return "../" * depth


def _load_asset(name: str) -> str:
    with open(os.path.join(STATIC_DIR, name), "r", encoding="utf-8") as handle:
        return handle.read()


class StaticRenderer:
    """
    Holds only its output root and the bundled assets; concurrent renders for different
    project ids do not interfere. Same-project renders must be serialized by
    the caller.
    """

    def __init__(self, output_root: Optional[str] = None, lang: str = "ru"):
        self.output_root = output_root or settings.RENDER_OUTPUT_DIR
        self.lang = lang
        try:
            self._assets = {name: _load_asset(name) for name in (STYLESHEET_NAME, ANALYTICS_SCRIPT_NAME)}
        except OSError as exc:
            raise RenderError(f"failed to load static assets: {exc}", stage="assets") from exc
        self.env = Environment(loader=BaseLoader(), autoescape=True)
        self._page_template = self.env.from_string(PAGE_TEMPLATE)
        self._empty_template = self.env.from_string(EMPTY_PAGE_SNIPPET)
        self._unsupported_template = self.env.from_string(UNSUPPORTED_SNIPPET)
        self._block_templates = {kind: self.env.from_string(src) for kind, src in BLOCK_SNIPPETS.items()}
        self._block_contexts: Dict[BlockKind, Callable[[Dict[str, Any], Dict[str, Any]], Dict[str, Any]]] = {
            BlockKind.HERO: _hero_context,
            BlockKind.FEATURES: _features_context,
            BlockKind.PRICING: _pricing_context,
            BlockKind.CTA: _cta_context,
            BlockKind.TESTIMONIALS: _testimonials_context,
            BlockKind.FAQ: _faq_context,
        }

    def render_static(self, project_id: Any, schema_json: str) -> str:
        """Render every page of `schema_json` into `<output_root>/<project_id>`; returns that directory."""
        started = time.monotonic()
        project_key = str(project_id)
        try:
            schema = json.loads(schema_json)
        except ValueError as exc:
            raise RenderError(f"failed to parse schema: {exc}", stage="parse", project_id=project_key) from exc
        if not isinstance(schema, dict) or not isinstance(schema.get("pages"), list):
            raise RenderError("invalid pages structure in schema", stage="structure", project_id=project_key)

        if (
            not project_key
            or project_key in (".", "..")
            or "/" in project_key
            or "\\" in project_key
            or _CONTROL_CHARS_RE.search(project_key)
        ):
            raise RenderError(f"invalid project id: {project_key!r}", stage="build_dir", project_id=project_key)
        build_dir = os.path.join(self.output_root, project_key)

        rendered: List[Tuple[str, str]] = []
        for page in schema["pages"]:
            if not isinstance(page, dict):
                continue
            path = get_str(page, "path", "/")
            rendered.append((page_output_path(build_dir, path), self.render_page(page, schema)))

        # Pages dropped from the schema must not survive into the next publish.
        try:
            if os.path.isdir(build_dir):
                shutil.rmtree(build_dir)
            os.makedirs(build_dir, exist_ok=True)
        except (OSError, ValueError) as exc:
            raise RenderError(
                f"failed to create build directory: {exc}", stage="build_dir", project_id=project_key
            ) from exc

        for filename, html in rendered:
            try:
                os.makedirs(os.path.dirname(filename), exist_ok=True)
                with open(filename, "w", encoding="utf-8") as handle:
                    handle.write(html)
            except (OSError, ValueError) as exc:
                raise RenderError(f"failed to render page: {exc}", stage="page", project_id=project_key) from exc

        try:
            self.copy_static_assets(build_dir)
        except OSError as exc:
            raise RenderError(
                f"failed to copy static assets: {exc}", stage="assets", project_id=project_key
            ) from exc

        logger.info(
            "Static site rendered",
            extra={
                "project_id": project_key,
                "build_dir": build_dir,
                "pages": len(rendered),
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return build_dir

    def render_page(self, page: Dict[str, Any], schema: Dict[str, Any]) -> str:
        """Full HTML document for one page. Never mutates `page` or `schema`."""
        sections = [section for section in (
            self.render_block(block, schema) for block in to_list(page.get("blocks"))
        ) if section]
        if not sections:
            sections = [Markup(self._empty_template.render(message=EMPTY_PAGE_MESSAGE))]
        return self._page_template.render(
            lang=self.lang,
            title=get_str(page, "title"),
            description=get_str(page, "description"),
            inline_css=Markup(self._assets[STYLESHEET_NAME]),
            asset_prefix=asset_prefix_for(get_str(page, "path", "/")),
            theme_style=build_theme_style(extract_palette(schema)),
            sections=sections,
        )

    def render_block(self, block: Any, schema: Dict[str, Any]) -> Markup:
        """One <section> per block; unknown or malformed blocks get a labelled placeholder."""
        block = as_dict(block)
        raw_type = get_str(block, "type").strip() or "unknown"
        kind = BlockKind.parse(raw_type)
        if kind is BlockKind.UNSUPPORTED:
            return Markup(self._unsupported_template.render(block_type=raw_type))
        context = self._block_contexts[kind](as_dict(block.get("props")), schema)
        return Markup(self._block_templates[kind.value].render(**context))

    def copy_static_assets(self, build_dir: str) -> None:
        for name, content in self._assets.items():
            with open(os.path.join(build_dir, name), "w", encoding="utf-8") as handle:
                handle.write(content)


def _hero_context(props: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    headline = get_str(props, "headline").strip() or "Заголовок лендинга"
    nav_items = to_strings(props.get("navItems")) or list(DEFAULT_NAV_ITEMS)
    return {
        "headline": headline,
        "subheadline": get_str(props, "subheadline"),
        "cta_text": get_str(props, "ctaText"),
        "cta_url": safe_url(get_str(props, "ctaUrl", "#")),
        "secondary_text": get_str(props, "secondaryCtaText", "Подробнее"),
        "secondary_url": safe_url(get_str(props, "secondaryCtaUrl", "#")),
        "eyebrow": get_str(props, "eyebrow", "Инновационная платформа"),
        "brand": get_str(props, "brand", "Landly"),
        "nav_items": nav_items,
        "nav_action_text": get_str(props, "navActionText", "Войти"),
        "nav_action_url": safe_url(get_str(props, "navActionUrl", "#")),
        "image": safe_url(get_str(props, "image"), default=""),
        "image_alt": get_str(props, "imageAlt", headline),
    }


def _features_context(props: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": get_str(props, "title", "Наши преимущества"),
        "items": [
            {
                "icon": get_str(item, "icon"),
                "title": get_str(item, "title"),
                "description": get_str(item, "description"),
            }
            for item in to_dicts(props.get("items"))
        ],
    }


def _pricing_context(props: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    payment = as_dict(schema.get("payment"))
    default_button_text = get_str(payment, "buttonText").strip() or "Выбрать тариф"
    default_url = get_str(payment, "url").strip()
    plans = []
    for plan in to_dicts(props.get("plans")):
        plans.append({
            "name": get_str(plan, "name"),
            "price": get_text(plan, "price"),
            "currency": get_str(plan, "currency"),
            "period": get_str(plan, "period"),
            "features": to_strings(plan.get("features")),
            "featured": get_bool(plan, "featured"),
            "button_text": get_str(plan, "buttonText").strip() or default_button_text,
            "url": safe_url(get_str(plan, "url").strip() or default_url, default=""),
        })
    return {"title": get_str(props, "title", "Тарифы"), "plans": plans}


def _cta_context(props: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": get_str(props, "title", "Готовы начать?"),
        "description": get_str(props, "description"),
        "button_text": get_str(props, "buttonText", "Связаться"),
        "button_url": safe_url(get_str(props, "buttonUrl", "#")),
        "secondary_text": get_str(props, "secondaryButtonText"),
        "secondary_url": safe_url(get_str(props, "secondaryButtonUrl", "#")),
    }


def _testimonials_context(props: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": get_str(props, "title", "Отзывы клиентов"),
        "items": [
            {
                "text": get_str(item, "text"),
                "author": get_str(item, "author"),
                "role": get_str(item, "role"),
                "rating": get_text(item, "rating"),
            }
            for item in to_dicts(props.get("items"))
        ],
    }


def _faq_context(props: Dict[str, Any], schema: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": get_str(props, "title", "Частые вопросы"),
        "items": [
            {"question": get_str(item, "question"), "answer": get_str(item, "answer")}
            for item in to_dicts(props.get("items"))
        ],
    }
