"""Reserved keys and hardcoded fallbacks."""
from brandsite.core.config import settings
from .schemas import BrandConfig, Link, MetaTags

BRAND_KEY = settings.BRAND_KEY
CONFIG_SUB_KEY = settings.CONFIG_SUB_KEY

DEFAULT_SPACE_UNIT = 8
DEFAULT_RADIUS_MASTER = 8

# Placeholder project view used when no project record is available
PLACEHOLDER_PROJECT_ID = "0"
PLACEHOLDER_YEAR_CREATED = 2020

# Placeholder page view used when no page record is available
PLACEHOLDER_PAGE_KEY = "Home"
PLACEHOLDER_PAGE_TITLE = "Home"
PLACEHOLDER_ROUTE = "/"

DEFAULT_LOGO_URL = "/logo.jpg"

# Served when the brand record is missing or the store is unreachable
FALLBACK_BRAND = BrandConfig(
    links=[
        Link(name="Support", url="mailto:support@sirsluginston.com", type="support"),
        Link(name="GitHub", url="https://github.com/sirsluginston", type="social"),
    ],
    space_unit=DEFAULT_SPACE_UNIT,
    radius_master=DEFAULT_RADIUS_MASTER,
    default_theme="light",
    meta_tags=MetaTags(
        title="SirSluginston Co",
        description="Home of innovative projects and solutions",
        keywords=["sirsluginston", "projects", "technology"],
    ),
)


def fallback_brand() -> BrandConfig:
    """Return a fresh copy of the fallback brand record."""
    return FALLBACK_BRAND.model_copy(deep=True)
