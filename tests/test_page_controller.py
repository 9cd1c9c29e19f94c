"""
Unit tests for PageController listing, detail and user actions.

This suite verifies:
- Listing cards follow manifest order regardless of fetch completion order
- One broken record does not blank the grid; a missing index yields a message
- Detail placeholders: no identifier (zero fetches), not found, fetch failure
- Actions read cached data only and report capability failures inline
"""

import asyncio
import json
import re

import pytest

from conftest import EPOXY_LOCATION, IM7_LOCATION, INDEX_LOCATION, T300_LOCATION, FakeFetcher
from compositelab.core import FileFetcher, LocalPlatform, PageController, identifier_from_query
from compositelab.schema import DetailState, ViewerConfig


def card_ids(html: str) -> list[str]:
    return re.findall(r'class="material-card" data-material="([^"]+)"', html)


@pytest.fixture
def clipboard():
    """List collecting clipboard writes."""
    return []


@pytest.fixture
def controller(fetcher, tmp_path, clipboard):
    platform = LocalPlatform(export_dir=tmp_path, clipboard=clipboard.append)
    return PageController(fetcher, platform=platform)


@pytest.mark.parametrize(
    "query, expected",
    [
        (None, None),
        ("", None),
        ("?id=T300", "T300"),
        ("id=3501-6", "3501-6"),
        ("https://example.org/pages/material-detail.html?id=IM7&tab=2", "IM7"),
        ("pages/material-detail.html", None),
        ("?id=%20%20", None),
        ({"id": ["T300"]}, "T300"),
        ({"id": "IM7"}, "IM7"),
    ],
)
def test_identifier_from_query(query, expected):
    assert identifier_from_query(query) == expected


def test_listing_preserves_manifest_order(catalog_documents):
    fetcher = FakeFetcher(catalog_documents, delays={T300_LOCATION: 0.03, IM7_LOCATION: 0.0})
    controller = PageController(fetcher)

    listing = asyncio.run(controller.show_listing())

    assert listing.ok
    assert card_ids(listing.containers["fibers"]) == ["T300", "IM7"]
    assert card_ids(listing.containers["matrices"]) == ["3501-6"]
    assert listing.failures == {}


def test_listing_add_new_after_last_matrix_card(controller):
    listing = asyncio.run(controller.show_listing())
    matrices = str(listing.containers["matrices"])

    assert matrices.index('data-material="3501-6"') < matrices.index("add-material-card")
    assert "add-material-card" not in listing.containers["fibers"]


def test_listing_isolates_broken_record(catalog_documents):
    catalog_documents[IM7_LOCATION] = ValueError("Invalid JSON document")
    controller = PageController(FakeFetcher(catalog_documents))

    listing = asyncio.run(controller.show_listing())

    assert card_ids(listing.containers["fibers"]) == ["T300"]
    assert list(listing.failures) == ["IM7"]


def test_deeply_nested_record_is_isolated(tmp_path, catalog_documents):
    for location, document in catalog_documents.items():
        (tmp_path / location).parent.mkdir(parents=True, exist_ok=True)
        (tmp_path / location).write_text(json.dumps(document), encoding="utf-8")
    (tmp_path / T300_LOCATION).write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
    controller = PageController(FileFetcher(tmp_path))

    listing = asyncio.run(controller.show_listing())
    assert card_ids(listing.containers["fibers"]) == ["IM7"]
    assert card_ids(listing.containers["matrices"]) == ["3501-6"]
    assert list(listing.failures) == ["T300"]

    view = asyncio.run(controller.show_detail("?id=T300"))
    assert view.state is DetailState.FETCH_FAILED


def test_listing_without_index():
    listing = asyncio.run(PageController(FakeFetcher({})).show_listing())

    assert not listing.ok
    assert listing.containers == {"fibers": "", "matrices": ""}


def test_listing_groups_by_record_tag(catalog_documents):
    catalog_documents[EPOXY_LOCATION]["type"] = "FIBER"
    listing = asyncio.run(PageController(FakeFetcher(catalog_documents)).show_listing())

    assert card_ids(listing.containers["fibers"]) == ["T300", "IM7", "3501-6"]
    assert card_ids(listing.containers["matrices"]) == []


def test_detail_without_identifier(fetcher):
    controller = PageController(fetcher)
    view = asyncio.run(controller.show_detail(None))

    assert view.state is DetailState.NO_IDENTIFIER
    assert "No Material Specified" in view.body
    assert fetcher.calls == []


def test_detail_not_found(controller):
    view = asyncio.run(controller.show_detail("?id=AS4"))

    assert view.state is DetailState.RECORD_NOT_FOUND
    assert "Material Not Found" in view.body


def test_detail_fetch_failed(catalog_documents):
    del catalog_documents[T300_LOCATION]
    view = asyncio.run(PageController(FakeFetcher(catalog_documents)).show_detail("?id=T300"))

    assert view.state is DetailState.FETCH_FAILED
    assert "Material Unavailable" in view.body
    assert "Material Not Found" not in view.body


def test_detail_index_unavailable():
    view = asyncio.run(PageController(FakeFetcher({})).show_detail("?id=T300"))
    assert view.state is DetailState.FETCH_FAILED


def test_detail_populated(controller):
    view = asyncio.run(controller.show_detail("?id=T300"))

    assert view.state is DetailState.POPULATED
    assert view.state.is_terminal
    assert view.title == "T300 Carbon Fiber - CompositeLab"
    assert "230 GPa" in view.body
    assert controller.current_record.identifier == "T300"


def test_detail_uses_location_rewrite(catalog_documents):
    documents = {key.replace("materials/fibers/", "../materials/fibers/"): value for key, value in catalog_documents.items()}
    documents[INDEX_LOCATION] = catalog_documents[INDEX_LOCATION]
    config = ViewerConfig(location_rewrite=("materials/", "../materials/"))
    fetcher = FakeFetcher(documents)

    view = asyncio.run(PageController(fetcher, config=config).show_detail("?id=IM7"))

    assert view.state is DetailState.POPULATED
    assert fetcher.calls == [INDEX_LOCATION, "../materials/fibers/im7.json"]


def test_listing_then_detail_fetch_each_file_once(controller, fetcher):
    async def run():
        await controller.show_listing()
        return await controller.show_detail("?id=IM7")

    view = asyncio.run(run())
    assert view.state is DetailState.POPULATED
    assert fetcher.count(INDEX_LOCATION) == 1
    assert fetcher.count(IM7_LOCATION) == 1


def test_concurrent_listing_and_detail(catalog_documents):
    fetcher = FakeFetcher(catalog_documents, delays={IM7_LOCATION: 0.02})
    controller = PageController(fetcher)

    async def run():
        return await asyncio.gather(controller.show_listing(), controller.show_detail("?id=IM7"))

    listing, view = asyncio.run(run())
    assert card_ids(listing.containers["fibers"]) == ["T300", "IM7"]
    assert view.state is DetailState.POPULATED
    assert fetcher.count(IM7_LOCATION) == 1


def test_copy_code(controller, clipboard, fetcher):
    asyncio.run(controller.show_detail("?id=IM7"))
    calls_before = len(fetcher.calls)

    result = controller.copy_code()

    assert result.ok
    assert result.feedback == "✓ Copied!"
    assert clipboard == [controller.current_record.code_template]
    assert len(fetcher.calls) == calls_before


def test_copy_without_template(controller):
    asyncio.run(controller.show_detail("?id=T300"))
    assert not controller.copy_code("T300").ok


def test_copy_without_clipboard(fetcher):
    controller = PageController(fetcher, platform=LocalPlatform())
    asyncio.run(controller.show_detail("?id=IM7"))

    result = controller.copy_code()

    assert not result.ok
    assert "Failed to copy" in result.message


def test_export_record(controller, tmp_path):
    asyncio.run(controller.show_listing())

    result = controller.export_record("3501-6")

    assert result.ok
    exported = json.loads((tmp_path / "3501-6.json").read_text(encoding="utf-8"))
    assert exported["id"] == "3501-6"
    assert exported["shelf_life_days"] == 365


def test_export_uncached_record_does_not_fetch(controller, fetcher):
    result = controller.export_record("T300")

    assert not result.ok
    assert result.message == "Material not found!"
    assert fetcher.calls == []


def test_export_all(controller, tmp_path):
    asyncio.run(controller.show_listing())

    assert controller.export_all().ok
    exported = json.loads((tmp_path / "all_materials.json").read_text(encoding="utf-8"))
    assert list(exported) == ["3501-6", "IM7", "T300"]


def test_export_without_directory(fetcher):
    controller = PageController(fetcher, platform=LocalPlatform())
    asyncio.run(controller.show_listing())

    result = controller.export_all()

    assert not result.ok
    assert "all_materials.json" in result.message


def test_print_datasheet(fetcher):
    printed = []
    controller = PageController(fetcher, platform=LocalPlatform(printer=printed.append))

    assert not controller.print_datasheet().ok
    asyncio.run(controller.show_detail("?id=T300"))
    assert controller.print_datasheet().ok
    assert printed == [str(controller.current_view.body)]


def test_print_unavailable(controller):
    asyncio.run(controller.show_detail("?id=T300"))

    result = controller.print_datasheet()

    assert not result.ok
    assert result.message == "Printing is not available."


def test_preview_record(controller):
    asyncio.run(controller.show_listing())

    result = controller.preview_record("IM7")

    assert result.ok
    assert result.message.startswith("Edit material: IM7 Carbon Fiber")
    assert result.data["abaqus"]["template"].startswith("*MATERIAL")


def test_add_new_material(controller):
    assert controller.add_new_material("matrix", "RTM6").ok
    assert not controller.add_new_material("metal", "Al 7075").ok
    assert not controller.add_new_material("fiber", "  ").ok
