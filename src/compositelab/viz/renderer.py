"""
Render material records into HTML view fragments.

Every public method is a pure function of its arguments: the same record
always yields byte-identical markup. Free text is escaped; the only markup a
record can introduce is the ``**bold**`` emphasis of its long-form description.
"""

from typing import NamedTuple
from urllib.parse import urlencode

from markupsafe import Markup

from compositelab.config.template_env import load_template_environment
from compositelab.data.mapped import card_groups, get_group_title, optional_groups, required_groups
from compositelab.schema.category import Category
from compositelab.schema.material_record import MaterialRecord
from compositelab.schema.viewer_config import ViewerConfig
from compositelab.utils.format import format_long_description

DEFAULT_MANUFACTURER = "Various"
DEFAULT_DESCRIPTION = "No description available."


class PropertySection(NamedTuple):
    name: str
    title: str
    anchor: str
    rows: tuple[tuple[str, str], ...]


class RecordRenderer:
    """
    Map material records to listing cards and detail documents.

    Parameters
    ----------
    config : ViewerConfig, optional
        Supplies the detail page link target and the site title.
    """

    def __init__(self, config: ViewerConfig | None = None) -> None:
        self.config = config or ViewerConfig()
        self.env = load_template_environment()

    def property_sections(self, record: MaterialRecord, groups: tuple[str, ...], optional: tuple[str, ...] = ()) -> list[PropertySection]:
        """
        Build the property tables shown for ``record``.

        Groups listed in ``optional`` are skipped when the record lacks them;
        the others are always shown, empty if the record has no such group.
        """
        sections = []
        for name in groups:
            group = record.group(name)
            if group is None and name in optional:
                continue
            rows = tuple((entry.label, entry.display) for entry in group.entries) if group else ()
            sections.append(
                PropertySection(
                    name=name,
                    title=get_group_title(name),
                    anchor=f"{name.replace('_', '-')}-properties",
                    rows=rows,
                )
            )
        return sections

    def detail_href(self, identifier: str) -> str:
        """Link to the detail page for ``identifier``."""
        return f"{self.config.detail_page}?{urlencode({'id': identifier})}"

    def render_card(self, record: MaterialRecord) -> Markup:
        """Render the listing card for ``record``."""
        template = self.env.get_template("card.html")
        return Markup(
            template.render(
                record=record,
                sections=self.property_sections(record, card_groups, optional=optional_groups),
                code_id=f"abaqus-{record.identifier}",
                detail_href=self.detail_href(record.identifier),
            )
        )

    def render_detail(self, record: MaterialRecord) -> Markup:
        """Render the full datasheet for ``record``."""
        template = self.env.get_template("detail.html")
        paragraphs = format_long_description(record.detailed_description) if record.detailed_description else []
        return Markup(
            template.render(
                record=record,
                breadcrumb_type=self.breadcrumb(record),
                manufacturer=record.manufacturer or DEFAULT_MANUFACTURER,
                description=record.description or DEFAULT_DESCRIPTION,
                paragraphs=paragraphs,
                sections=self.property_sections(record, required_groups + optional_groups, optional=optional_groups),
            )
        )

    def render_add_new(self, category: Category) -> Markup:
        """Render the placeholder card that starts a new material of ``category``."""
        return Markup(self.env.get_template("add_new.html").render(category=category))

    def render_placeholder(self, title: str, message: str, state: str = "") -> Markup:
        """Render a stand-in detail document for pages without a material."""
        return Markup(self.env.get_template("placeholder.html").render(title=title, message=message, state=state))

    def page_title(self, record: MaterialRecord) -> str:
        return f"{record.name} - {self.config.site_title}"

    def breadcrumb(self, record: MaterialRecord) -> str:
        return f"{record.category_tag} Materials"
