"""
Validate AI-produced page schemas against the bundled Draft-07 JSON-Schema and
apply deterministic business-rule auto-fixes.

Structural validation comes first: a document that fails the JSON-Schema is
rejected and never auto-fixed. Auto-fixes only adjust content inside an already
valid tree and are idempotent, so re-validating normalized output reports no fixes.
"""
import json
import logging
import math
import os
from typing import Any, Callable, Dict, List, Optional, Union

from jsonschema import Draft7Validator
from jsonschema import exceptions as jsonschema_exceptions

from landly.config import settings
from landly.exceptions import SchemaCompilationError, SchemaMismatchError, SchemaNotJSONError
from landly.schemas import BlockKind, NormalizationLimits, PaymentDefaults, ValidationResult
from landly.services.props import as_dict, get_str, to_list

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates", "page_schema.json"
)

# Rotated in order when a features block has too few items.
DEFAULT_FEATURE_ITEMS = (
    {"icon": "⚡", "title": "Быстрый запуск", "description": "Лендинг готов за минуты"},
    {"icon": "🎯", "title": "Убедительные тексты", "description": "AI подстраивается под вашу нишу"},
    {"icon": "🚀", "title": "Рост конверсии", "description": "Современный дизайн и CTA"},
)


def limits_from_settings() -> NormalizationLimits:
    return NormalizationLimits(
        title_max=settings.PAGE_TITLE_MAX_LENGTH,
        description_max=settings.PAGE_DESCRIPTION_MAX_LENGTH,
        features_min=settings.FEATURES_MIN_ITEMS,
    )


def payment_defaults_from_settings() -> PaymentDefaults:
    return PaymentDefaults(
        url=settings.DEFAULT_PAYMENT_URL,
        button_text=settings.DEFAULT_PAYMENT_BUTTON_TEXT,
    )


def unique_fixes(values: List[Optional[str]]) -> List[str]:
    """Drop empty entries and duplicates, keeping first-occurrence order."""
    seen = set()
    result: List[str] = []
    for value in values:
        if not value or value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def truncate_field(mapping: Dict[str, Any], key: str, limit: int, reason: str) -> Optional[str]:
    """
    Trim and, if needed, truncate mapping[key] to `limit` code points.
    Returns `reason` on truncation, `reason + "_trimmed"` when only surrounding
    whitespace was removed, None when nothing changed. Non-string and blank
    values are left untouched.
    """
    value = get_str(mapping, key)
    trimmed = value.strip()
    if not trimmed:
        return None
    if len(trimmed) > limit:
        mapping[key] = trimmed[:limit].rstrip()
        return reason
    if trimmed != value:
        mapping[key] = trimmed
        return reason + "_trimmed"
    return None


class PageSchemaValidator:
    """
    Compiled page-schema validator. Build one at process start and share it;
    instances hold no per-call state.
    """

    def __init__(
        self,
        schema_path: Optional[str] = None,
        limits: Optional[NormalizationLimits] = None,
        payment_defaults: Optional[PaymentDefaults] = None,
        default_page_title: Optional[str] = None,
    ):
        self.schema_path = schema_path or DEFAULT_SCHEMA_PATH
        self.limits = limits or limits_from_settings()
        self.payment_defaults = payment_defaults or payment_defaults_from_settings()
        self.default_page_title = default_page_title or settings.DEFAULT_PAGE_TITLE
        self._validator = self._compile(self.schema_path)
        self._block_normalizers: Dict[BlockKind, Callable[[Dict[str, Any], int, PaymentDefaults], List[Optional[str]]]] = {
            BlockKind.HERO: self._normalize_hero,
            BlockKind.FEATURES: self._normalize_features,
            BlockKind.PRICING: self._normalize_pricing,
            BlockKind.CTA: self._normalize_cta,
            BlockKind.TESTIMONIALS: _no_fixes,
            BlockKind.FAQ: _no_fixes,
            BlockKind.UNSUPPORTED: _no_fixes,
        }

    @staticmethod
    def _compile(schema_path: str) -> Draft7Validator:
        try:
            with open(schema_path, "r", encoding="utf-8") as handle:
                schema = json.load(handle)
        except (OSError, ValueError) as exc:
            raise SchemaCompilationError(f"failed to load page schema: {exc}", path=schema_path) from exc
        try:
            Draft7Validator.check_schema(schema)
        except jsonschema_exceptions.SchemaError as exc:
            raise SchemaCompilationError(f"failed to compile page schema: {exc.message}", path=schema_path) from exc
        return Draft7Validator(schema)

    def validate(self, raw: Union[str, bytes]) -> ValidationResult:
        """Parse, structurally validate and normalize a raw schema document."""
        try:
            doc = json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
        except ValueError as exc:
            raise SchemaNotJSONError(str(exc)) from exc

        errors = sorted(self._validator.iter_errors(doc), key=lambda e: list(e.absolute_path))
        if errors:
            raise SchemaMismatchError([_format_error(e) for e in errors])

        fixes = unique_fixes(self.apply_business_rules(doc))
        if fixes:
            logger.debug("Page schema normalized", extra={"fixes": fixes})
        return ValidationResult(
            normalized=json.dumps(doc, ensure_ascii=False, allow_nan=False),
            auto_fixes=fixes,
        )

    def apply_business_rules(self, doc: Any) -> List[Optional[str]]:
        """Mutate a structurally valid tree in place; returns raw (undeduplicated) fix ids."""
        if not isinstance(doc, dict):
            return []
        fixes: List[Optional[str]] = []
        payment = self._resolve_payment(doc)

        pages = to_list(doc.get("pages"))
        if not pages:
            pages = [{"path": "/", "title": self.default_page_title, "blocks": []}]
            doc["pages"] = pages
            fixes.append("default_page_added")

        for index, page in enumerate(pages):
            if not isinstance(page, dict):
                continue
            fixes.append(_normalize_page_path(page, index))
            fixes.append(truncate_field(page, "title", self.limits.title_max, f"page_{index}_title_truncated"))
            fixes.append(truncate_field(
                page, "description", self.limits.description_max, f"page_{index}_description_truncated"
            ))
            fixes.extend(self._normalize_blocks(page, payment))
        return fixes

    def _resolve_payment(self, doc: Dict[str, Any]) -> PaymentDefaults:
        payment = as_dict(doc.get("payment"))
        url = get_str(payment, "url").strip() or self.payment_defaults.url
        button_text = get_str(payment, "buttonText").strip() or self.payment_defaults.button_text
        return PaymentDefaults(url=url, button_text=button_text)

    def _normalize_blocks(self, page: Dict[str, Any], payment: PaymentDefaults) -> List[Optional[str]]:
        fixes: List[Optional[str]] = []
        for index, block in enumerate(to_list(page.get("blocks"))):
            if not isinstance(block, dict):
                continue
            props = block.get("props")
            if not isinstance(props, dict):
                props = {}
                block["props"] = props
            kind = BlockKind.parse(block.get("type"))
            fixes.extend(self._block_normalizers[kind](props, index, payment))
        return fixes

    def _normalize_hero(self, props: Dict[str, Any], index: int, payment: PaymentDefaults) -> List[Optional[str]]:
        fixes = _default_button(props, "ctaText", "ctaUrl", payment, "hero_cta")
        fixes.append(truncate_field(
            props, "headline", self.limits.title_max, f"block_{index}_hero_headline_truncated"
        ))
        fixes.append(truncate_field(
            props, "subheadline", self.limits.description_max, f"block_{index}_hero_subheadline_truncated"
        ))
        return fixes

    def _normalize_cta(self, props: Dict[str, Any], index: int, payment: PaymentDefaults) -> List[Optional[str]]:
        return _default_button(props, "buttonText", "buttonUrl", payment, "cta_button")

    def _normalize_pricing(self, props: Dict[str, Any], index: int, payment: PaymentDefaults) -> List[Optional[str]]:
        fixes: List[Optional[str]] = []
        for plan in to_list(props.get("plans")):
            if not isinstance(plan, dict):
                continue
            if not get_str(plan, "buttonText").strip():
                plan["buttonText"] = payment.button_text
                fixes.append("pricing_button_text_defaulted")
            if not get_str(plan, "url").strip():
                plan["url"] = payment.url
                fixes.append("pricing_button_url_defaulted")
        return fixes

    def _normalize_features(self, props: Dict[str, Any], index: int, payment: PaymentDefaults) -> List[Optional[str]]:
        items = to_list(props.get("items"))
        if len(items) >= self.limits.features_min:
            return []
        items = list(items)
        while len(items) < self.limits.features_min:
            template = DEFAULT_FEATURE_ITEMS[len(items) % len(DEFAULT_FEATURE_ITEMS)]
            items.append(dict(template))
        props["items"] = items
        return ["features_autofilled"]


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {token}")


def _finite_float(token: str) -> float:
    value = float(token)
    if math.isinf(value):
        raise ValueError(f"number out of range: {token}")
    return value


def _no_fixes(props: Dict[str, Any], index: int, payment: PaymentDefaults) -> List[Optional[str]]:
    return []


def _default_button(
    props: Dict[str, Any], text_key: str, url_key: str, payment: PaymentDefaults, prefix: str
) -> List[Optional[str]]:
    fixes: List[Optional[str]] = []
    if not get_str(props, text_key).strip():
        props[text_key] = payment.button_text
        fixes.append(f"{prefix}_text_defaulted")
    if not get_str(props, url_key).strip():
        props[url_key] = payment.url
        fixes.append(f"{prefix}_url_defaulted")
    return fixes


def _normalize_page_path(page: Dict[str, Any], index: int) -> Optional[str]:
    raw = get_str(page, "path")
    path = raw.strip()
    if not path:
        page["path"] = "/" if index == 0 else f"/page-{index + 1}"
        return f"page_{index}_path_defaulted"
    if not path.startswith("/"):
        page["path"] = "/" + path
        return f"page_{index}_path_normalized"
    if path != raw:
        page["path"] = path
        return f"page_{index}_path_normalized"
    return None


def _format_error(error: jsonschema_exceptions.ValidationError) -> str:
    path = ".".join(str(p) for p in error.absolute_path) if error.absolute_path else "(root)"
    return f"{path}: {error.message}"
