"""Three-tier configuration resolution: Brand → Project → Page."""
from brandsite.modules.config.defaults import (
    BRAND_KEY,
    DEFAULT_RADIUS_MASTER,
    DEFAULT_SPACE_UNIT,
    PLACEHOLDER_PAGE_KEY,
    PLACEHOLDER_PAGE_TITLE,
    PLACEHOLDER_PROJECT_ID,
    PLACEHOLDER_ROUTE,
    PLACEHOLDER_YEAR_CREATED,
)
from brandsite.modules.config.schemas import (
    BrandConfig,
    BrandView,
    MergedConfig,
    PageConfig,
    PageView,
    ProjectConfig,
    ProjectStatus,
    ProjectView,
)


def _first(*values):
    """First value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def resolve_brand(brand: BrandConfig, project: ProjectConfig | None) -> BrandView:
    """Brand defaults with the project's overrides applied."""
    override = project if project is not None else ProjectConfig(project_key=BRAND_KEY)

    # Links are replaced wholesale by a non-empty project list
    links = override.links if override.links else brand.links

    return BrandView(
        parent=brand.parent,
        logo_url=brand.logo_url,
        brand_color=_first(override.brand_color, brand.brand_color),
        project_color=_first(override.project_color, brand.project_color),
        accent_color=_first(override.accent_color, brand.accent_color),
        light_color=_first(override.light_color, brand.light_color),
        dark_color=_first(override.dark_color, brand.dark_color),
        shared_border_color=_first(
            override.shared_border_color,
            brand.shared_border_color,
            override.project_color,
            brand.project_color,
        ),
        font_sans=brand.font_sans,
        font_serif=brand.font_serif,
        space_unit=_first(brand.space_unit, DEFAULT_SPACE_UNIT),
        radius_master=_first(brand.radius_master, DEFAULT_RADIUS_MASTER),
        default_theme=brand.default_theme,
        links=links,
        allowed_roles=_first(override.allowed_roles, brand.allowed_roles),
        denied_roles=_first(override.denied_roles, brand.denied_roles),
        meta_tags=_first(override.meta_tags, brand.meta_tags),
    )


def resolve_project(brand: BrandConfig, project: ProjectConfig | None) -> ProjectView:
    """Project identity, or a placeholder built from the brand."""
    if project is None:
        return ProjectView(
            project_key=BRAND_KEY,
            project_id=PLACEHOLDER_PROJECT_ID,
            project_title=brand.parent,
            project_slug=BRAND_KEY.lower(),
            project_status=ProjectStatus.ACTIVE,
            year_created=PLACEHOLDER_YEAR_CREATED,
        )
    return ProjectView(
        project_key=project.project_key,
        project_id=project.project_id,
        project_title=project.project_title,
        project_slug=project.project_slug,
        project_tagline=project.project_tagline,
        project_description=project.project_description,
        project_logo_url=project.project_logo_url,
        project_status=project.project_status,
        year_created=project.year_created,
        project_order=project.project_order,
        project_tags=project.project_tags,
    )


def resolve_page(page: PageConfig | None) -> PageView:
    """Page settings, or the placeholder home page."""
    if page is None:
        return PageView(
            page_key=PLACEHOLDER_PAGE_KEY,
            page_title=PLACEHOLDER_PAGE_TITLE,
            route=PLACEHOLDER_ROUTE,
            has_shell=True,
        )
    return PageView(
        page_key=page.page_key,
        page_title=page.page_title,
        page_tagline=page.page_tagline,
        route=page.route,
        allowed_roles=page.allowed_roles,
        denied_roles=page.denied_roles,
        has_shell=_first(page.has_shell, True),
        shell_config=page.shell_config,
        in_navbar=_first(page.in_navbar, True),
        navbar_label=_first(page.navbar_label, page.page_title),
        navbar_order=page.navbar_order,
        navbar_roles=page.navbar_roles,
        content_layout=page.content_layout,
        meta_tags=page.meta_tags,
    )


def resolve(
    brand: BrandConfig,
    project: ProjectConfig | None = None,
    page: PageConfig | None = None,
) -> MergedConfig:
    """
    Merge the three tiers into one read-only configuration.

    Palette fields take the project's value when it has one, else the
    brand's. ``shared_border_color`` falls further back to the project's own
    project color, then the brand's project color. Links, role lists and
    meta tags are replaced wholesale by the project, never merged.
    """
    return MergedConfig(
        brand=resolve_brand(brand, project),
        project=resolve_project(brand, project),
        page=resolve_page(page),
    )
