"""
Tests for the built-in template catalog.
"""

from automata.schemas.templates import Template
from automata.services.template_library import (
    get_all_templates,
    get_template_by_id,
    get_templates_by_industry,
    get_templates_by_type,
)


class TestTemplateLibrary:
    """Tests for catalog lookups."""

    def test_catalog_size_and_unique_ids(self):
        """The catalog holds 12 templates with unique ids."""
        templates = get_all_templates()
        assert len(templates) == 12
        assert len({template.id for template in templates}) == 12
        assert all(isinstance(template, Template) for template in templates)

    def test_get_all_returns_copy(self):
        """Mutating the returned list does not touch the catalog."""
        templates = get_all_templates()
        templates.clear()
        assert len(get_all_templates()) == 12

    def test_by_industry_includes_all_tagged(self):
        """Industry filter keeps "all" templates and the industry's own."""
        ids = {template.id for template in get_templates_by_industry("food")}
        assert {"loyalty-program", "happy-hour-alerts", "birthday-rewards"} <= ids
        assert "abandoned-cart" not in ids
        assert "renewal-reminder" not in ids

    def test_by_industry_empty_returns_all(self):
        """A missing industry returns the whole catalog."""
        assert len(get_templates_by_industry(None)) == 12
        assert len(get_templates_by_industry("")) == 12

    def test_by_id(self):
        """Lookup by id returns the template, None when unknown."""
        template = get_template_by_id("appointment-reminders")
        assert template.name == "Appointment Reminders"
        assert template.industries == ["health", "service"]
        assert get_template_by_id("does-not-exist") is None

    def test_by_type(self):
        """Type filter returns matching templates only."""
        workflows = get_templates_by_type("workflow")
        assert [template.id for template in workflows] == ["loyalty-program"]
        assert len(get_templates_by_type(None)) == 12

    def test_wire_format_is_camel_case(self):
        """Templates dump with camelCase keys and the config block."""
        dumped = get_template_by_id("birthday-rewards").model_dump(by_alias=True)
        assert "targetSegment" in dumped
        assert "config" in dumped
