"""
Test configuration and fixtures.
Renders and publishes go to pytest's tmp_path so nothing touches the
configured RENDER_OUTPUT_DIR or PUBLISH_DIR.
"""
import json

import pytest

from landly.schemas import NormalizationLimits, PaymentDefaults
from landly.services.page_schema_validator import PageSchemaValidator
from landly.services.static_renderer import StaticRenderer
from landly.services.storage import LocalDiskPublisher


@pytest.fixture(scope="session")
def validator():
    """Validator with the stock limits, independent of any .env overrides."""
    return PageSchemaValidator(
        limits=NormalizationLimits(),
        payment_defaults=PaymentDefaults(),
        default_page_title="Лендинг",
    )


@pytest.fixture
def renderer(tmp_path):
    return StaticRenderer(output_root=str(tmp_path / "builds"))


@pytest.fixture
def publisher(tmp_path):
    return LocalDiskPublisher(base_dir=str(tmp_path / "published"), public_base_url="https://cdn.example")


@pytest.fixture
def make_schema():
    """Build a schema JSON string from pages and optional top-level keys."""
    def _make(pages=None, **extra):
        doc = {"pages": pages if pages is not None else []}
        doc.update(extra)
        return json.dumps(doc, ensure_ascii=False)
    return _make
