"""Tests for the site face: API client, loader and admin workflow."""
import httpx
import pytest

from brandsite.modules.config.schemas import ProjectStatus
from brandsite.modules.config.store import ConfigStore
from brandsite.modules.render import Element, UnknownComponent
from brandsite.modules.site import (
    AdminWorkflow,
    ApiError,
    DraftValidationError,
    PageDraft,
    ProjectDraft,
    SiteApiClient,
    SiteLoader,
)
from tests.conftest import ADMIN_HEADERS, BRAND_KEY, USER_HEADERS


def _unreachable_client() -> SiteApiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return SiteApiClient(base_url="http://down", transport=httpx.MockTransport(handler))


# =============================================================================
# Client reads
# =============================================================================

class TestClientReads:
    @pytest.mark.asyncio
    async def test_brand(self, site_client_factory, seeded):
        brand = await site_client_factory().fetch_brand_config()
        assert brand.brand_color == "#D2691E"

    @pytest.mark.asyncio
    async def test_missing_brand_falls_back(self, site_client_factory):
        brand = await site_client_factory().fetch_brand_config()

        assert brand.project_key == BRAND_KEY
        assert brand.parent == "SirSluginston Co"

    @pytest.mark.asyncio
    async def test_unreachable_api_degrades(self):
        client = _unreachable_client()
        try:
            assert (await client.fetch_brand_config()).parent == "SirSluginston Co"
            assert await client.fetch_project_config("Alpha") is None
            assert await client.fetch_all_project_configs() == []
            assert await client.fetch_project_pages("Alpha") == []
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_projects_and_pages(self, site_client_factory, seeded):
        client = site_client_factory()

        projects = await client.fetch_all_project_configs()
        pages = await client.fetch_project_pages("Alpha")

        assert sorted(p.project_key for p in projects) == ["Alpha", "Beta"]
        assert sorted(p.page_key for p in pages) == ["About", "Home"]

    @pytest.mark.asyncio
    async def test_missing_project(self, site_client_factory, seeded):
        assert await site_client_factory().fetch_project_config("Nope") is None

    @pytest.mark.asyncio
    async def test_unrecognized_status_is_kept(self, site_client_factory, config_store: ConfigStore):
        await config_store.put_item({
            "ProjectKey": "Delta", "PageKey": "Config", "ProjectTitle": "Delta",
            "ProjectStatus": "Beta",
        })
        client = site_client_factory()

        project = await client.fetch_project_config("Delta")
        listed = await client.fetch_all_project_configs()

        assert project is not None
        assert project.project_status == "Beta"
        assert [p.project_key for p in listed] == ["Delta"]

    @pytest.mark.asyncio
    async def test_known_status_is_enum(self, site_client_factory, seeded):
        project = await site_client_factory().fetch_project_config("Beta")
        assert project.project_status is ProjectStatus.COMING_SOON

    @pytest.mark.asyncio
    async def test_malformed_layout_keeps_page(self, site_client_factory, config_store: ConfigStore):
        await config_store.put_item({
            "ProjectKey": "Gamma", "PageKey": "Home", "PageTitle": "Gamma Home", "Route": "/",
            "ContentLayout": {"type": "PageContainer", "children": [
                {"type": "Card", "props": "oops", "children": [{"type": "text", "content": "hi"}]},
                {"content": "node without a type"},
                {"type": 7},
            ]},
        })

        pages = await site_client_factory().fetch_project_pages("Gamma")

        assert [p.page_key for p in pages] == ["Home"]


# =============================================================================
# Client writes
# =============================================================================

class TestClientWrites:
    @pytest.mark.asyncio
    async def test_admin_write_without_group(self, site_client_factory):
        client = site_client_factory(USER_HEADERS)

        with pytest.raises(ApiError) as exc_info:
            await client.delete_project("Alpha")

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Forbidden: Admin access required"

    @pytest.mark.asyncio
    async def test_user_settings_round(self, site_client_factory):
        client = site_client_factory(USER_HEADERS)

        assert await client.get_user_settings() is None
        created = await client.create_user_record({"RealName": "Sir Slug"})
        updated = await client.update_user_settings({"DateFormat": "YYYY-MM-DD"})

        assert created["RealName"] == "Sir Slug"
        assert updated["DateFormat"] == "YYYY-MM-DD"
        assert (await client.get_user_settings())["DateFormat"] == "YYYY-MM-DD"


# =============================================================================
# Loader
# =============================================================================

class TestLoader:
    @pytest.mark.asyncio
    async def test_load_resolves_and_renders(self, site_client_factory, seeded):
        loader = SiteLoader(site_client_factory(), project_key="Alpha")

        view = await loader.load("/")

        assert view.config.project.project_key == "Alpha"
        assert view.config.brand.shared_border_color == "#123456"
        assert view.config.page.page_key == "Home"
        assert [item.label for item in view.nav_items] == ["About us", "Alpha Home"]
        assert isinstance(view.layout, Element)
        assert isinstance(view.layout.children[1], UnknownComponent)
        assert "Unknown component: Bogus" in view.html
        assert view.logo_url == "/logo.jpg"

    @pytest.mark.asyncio
    async def test_load_selects_page_by_route(self, site_client_factory, seeded):
        loader = SiteLoader(site_client_factory(), project_key="Alpha")

        view = await loader.load("/about")

        assert view.config.page.page_key == "About"
        assert view.layout is None
        assert view.html == ""

    @pytest.mark.asyncio
    async def test_load_without_records_uses_placeholders(self, site_client_factory):
        loader = SiteLoader(site_client_factory(), project_key="Nope")

        view = await loader.load("/anything")

        assert view.config.project.project_key == BRAND_KEY
        assert view.config.page.route == "/"
        assert view.nav_items == []

    @pytest.mark.asyncio
    async def test_cache_until_invalidated(self, site_client_factory, config_store: ConfigStore, seeded):
        loader = SiteLoader(site_client_factory(), project_key="Alpha")
        await loader.load("/")

        await config_store.put_item({
            "ProjectKey": "Alpha", "PageKey": "Config", "ProjectID": "2",
            "ProjectTitle": "Alpha Renamed",
        })

        assert (await loader.load("/")).config.project.project_title == "Alpha"
        loader.invalidate("Alpha")
        assert (await loader.load("/")).config.project.project_title == "Alpha Renamed"

    @pytest.mark.asyncio
    async def test_restricted_page_not_rendered(self, site_client_factory, config_store: ConfigStore):
        await config_store.put_item({
            "ProjectKey": "Alpha", "PageKey": "Secret", "PageTitle": "Secret", "Route": "/",
            "AllowedRoles": ["Admin"],
            "ContentLayout": {"type": "Card", "content": "<b>secret</b>"},
        })
        loader = SiteLoader(site_client_factory(), project_key="Alpha")

        view = await loader.load("/")

        assert view.can_view is False
        assert view.layout is None

    @pytest.mark.asyncio
    async def test_malformed_nodes_render_as_placeholders(
        self, site_client_factory, config_store: ConfigStore
    ):
        await config_store.put_item({
            "ProjectKey": "Gamma", "PageKey": "Home", "PageTitle": "Gamma Home", "Route": "/",
            "ContentLayout": {"type": "PageContainer", "children": [
                {"type": "Card", "children": [{"type": "text", "content": "hi"}]},
                {"content": "x"},
            ]},
        })
        loader = SiteLoader(site_client_factory(), project_key="Gamma")

        view = await loader.load("/")

        assert view.config.page.page_key == "Home"
        assert view.config.page.page_title == "Gamma Home"
        assert isinstance(view.layout.children[1], UnknownComponent)
        assert "hi" in view.html
        assert "Unknown component: None" in view.html

    @pytest.mark.asyncio
    async def test_unrecognized_status_resolves(self, site_client_factory, config_store: ConfigStore):
        await config_store.put_item({
            "ProjectKey": "Delta", "PageKey": "Config", "ProjectTitle": "Delta",
            "ProjectStatus": "Beta",
        })
        loader = SiteLoader(site_client_factory(), project_key="Delta")

        view = await loader.load("/")

        assert view.config.project.project_key == "Delta"
        assert view.config.project.project_status == "Beta"


# =============================================================================
# Admin workflow
# =============================================================================

class TestAdminWorkflow:
    @pytest.mark.asyncio
    async def test_validation_blocks_all_writes(self, site_client_factory, config_store: ConfigStore):
        workflow = AdminWorkflow(site_client_factory(ADMIN_HEADERS))
        draft = ProjectDraft(project_key="Gamma", project_title="", project_color="")

        with pytest.raises(DraftValidationError) as exc_info:
            await workflow.create_project(draft)

        assert exc_info.value.problems == ["Title is required", "Color is required"]
        assert await config_store.query("Gamma") == []

    @pytest.mark.asyncio
    async def test_create_project_with_pages(self, site_client_factory, config_store: ConfigStore):
        workflow = AdminWorkflow(site_client_factory(ADMIN_HEADERS))
        draft = ProjectDraft(
            project_key="Gamma",
            project_title="Gamma",
            pages=[PageDraft(page_key="Home", route="/")],
        )

        project = await workflow.create_project(draft)

        stored = await config_store.get_item("Gamma", "Config")
        page = await config_store.get_item("Gamma", "Home")
        assert project.project_slug == "gamma"
        assert stored["ProjectID"] == "1"
        assert stored["ProjectStatus"] == "Coming Soon"
        assert stored["ProjectColor"] == "#4B3A78"
        assert stored["Version"] == "1.0.0"
        assert isinstance(stored["YearCreated"], int)
        assert page["ProjectKey"] == "Gamma"
        assert page["PageTitle"] == "New Page"
        assert page["InNavbar"] is False

    @pytest.mark.asyncio
    async def test_write_invalidates_loader(self, site_client_factory, seeded):
        client = site_client_factory(ADMIN_HEADERS)
        loader = SiteLoader(client, project_key="Alpha")
        workflow = AdminWorkflow(client, loader)
        before = await loader.load("/")

        await workflow.update_project(
            (await client.fetch_project_config("Alpha")), project_title="Alpha Prime"
        )

        after = await loader.load("/")
        assert before.config.project.project_title == "Alpha"
        assert after.config.project.project_title == "Alpha Prime"

    @pytest.mark.asyncio
    async def test_delete_project(self, site_client_factory, config_store: ConfigStore, seeded):
        workflow = AdminWorkflow(site_client_factory(ADMIN_HEADERS))

        await workflow.delete_project("Alpha")

        assert await config_store.query("Alpha") == []

    @pytest.mark.asyncio
    async def test_save_page_rejects_reserved_key(self, site_client_factory):
        workflow = AdminWorkflow(site_client_factory(ADMIN_HEADERS))

        with pytest.raises(DraftValidationError):
            await workflow.save_page("Alpha", PageDraft(page_key="Config"))
