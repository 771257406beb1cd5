"""
Page schema types shared by the validator, the renderer and the services.
The schema itself stays a generic JSON tree; these types name its closed parts.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class BlockKind(str, Enum):
    HERO = "hero"
    FEATURES = "features"
    PRICING = "pricing"
    CTA = "cta"
    TESTIMONIALS = "testimonials"
    FAQ = "faq"
    UNSUPPORTED = "unsupported"

    @classmethod
    def parse(cls, raw: Any) -> "BlockKind":
        """Map a raw block ``type`` value to a kind; anything unknown is UNSUPPORTED."""
        if not isinstance(raw, str):
            return cls.UNSUPPORTED
        name = raw.strip().lower()
        if name == cls.UNSUPPORTED.value:
            return cls.UNSUPPORTED
        try:
            return cls(name)
        except ValueError:
            return cls.UNSUPPORTED


# Every block type the JSON-Schema accepts; only a subset has a BlockKind of its own.
SCHEMA_BLOCK_TYPES = (
    "hero", "features", "pricing", "testimonials", "faq",
    "cta", "gallery", "about", "contact",
)

PALETTE_KEYS = ("primary", "secondary", "accent", "background", "text")


@dataclass(frozen=True)
class NormalizationLimits:
    title_max: int = 90
    description_max: int = 160
    features_min: int = 3


@dataclass(frozen=True)
class PaymentDefaults:
    url: str = "#"
    button_text: str = "Связаться"


@dataclass
class ValidationResult:
    normalized: str
    auto_fixes: List[str] = field(default_factory=list)


@dataclass
class GenerationResult:
    schema_json: str
    auto_fixes: List[str] = field(default_factory=list)


@dataclass
class PublishResult:
    subdomain: str
    public_url: str
    published_at: str
    build_dir: Optional[str] = None
    files_uploaded: int = 0
