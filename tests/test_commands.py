"""Unit tests for the command table and resolver."""

import pytest

from selenium_remote.core.commands import (
    COMMANDS,
    Command,
    Method,
    Placeholder,
    ResolvedRequest,
    SubstitutionContext,
    UrlTemplate,
    build_command_table,
    lookup,
    resolve,
)
from selenium_remote.core.exceptions import MissingSessionError, UnknownCommandError


class TestCommandTable:
    """Tests for the static command catalog."""

    def test_every_command_has_an_entry(self):
        """Should map every Command member."""
        assert set(COMMANDS) == set(Command)

    def test_entries_are_well_formed(self):
        """Every entry should use a known method and a non-empty template."""
        for command in Command:
            spec = lookup(command)
            assert spec.method in (Method.GET, Method.POST, Method.DELETE)
            assert spec.url_template.text
            assert not spec.url_template.text.startswith("/")

    def test_no_ambiguous_routes(self):
        """No two commands should share the same method and template."""
        routes = [(spec.method, spec.url_template.text) for spec in COMMANDS.values()]
        assert len(routes) == len(set(routes))

    def test_table_is_read_only(self):
        """Should reject mutation."""
        with pytest.raises(TypeError):
            COMMANDS[Command.STATUS] = COMMANDS[Command.QUIT]

    @pytest.mark.parametrize(
        "command_id,method,template",
        [
            ("status", "GET", "status"),
            ("newSession", "POST", "session"),
            ("quit", "DELETE", "session/:sessionId"),
            ("setImplicitWaitTimeout", "POST", "session/:sessionId/timeouts/implicit_wait"),
            ("getElementLocationInView", "GET", "session/:sessionId/element/:id/location_in_view"),
            ("getElementTagName", "GET", "session/:sessionId/element/:id/name"),
            ("getActiveElement", "POST", "session/:sessionId/element/active"),
            ("close", "DELETE", "session/:sessionId/window"),
            ("mouseMoveToLocation", "POST", "session/:sessionId/moveto"),
        ],
    )
    def test_catalog_entries(self, command_id, method, template):
        """Should reproduce the wire protocol routes exactly."""
        spec = lookup(command_id)

        assert spec.method.value == method
        assert spec.url_template.text == template

    def test_lookup_by_string_and_enum_agree(self):
        """Should accept the wire identifier or the enum member."""
        assert lookup("findElement") is lookup(Command.FIND_ELEMENT)

    def test_lookup_unknown_command(self):
        """Should raise UnknownCommandError for identifiers not in the table."""
        with pytest.raises(UnknownCommandError) as exc:
            lookup("getSpeed")

        assert exc.value.command == "getSpeed"

    def test_entry_placeholders(self):
        """Should expose the placeholders a template references."""
        spec = lookup(Command.GET_ELEMENT_ATTRIBUTE)

        assert spec.placeholders == {Placeholder.SESSION_ID, Placeholder.ID, Placeholder.NAME}
        assert lookup(Command.STATUS).placeholders == frozenset()


class TestBuildCommandTable:
    """Tests for table construction checks."""

    def test_duplicate_route_rejected(self):
        """Should refuse two commands with the same method and template."""
        entries = [
            (Command.GET_CURRENT_URL, Method.GET, "session/:sessionId/url"),
            (Command.GET_TITLE, Method.GET, "session/:sessionId/url"),
        ]
        with pytest.raises(ValueError, match="Ambiguous route"):
            build_command_table(entries, required=())

    def test_same_template_different_method_allowed(self):
        """GET and POST on the same path are distinct routes."""
        entries = [
            (Command.GET_CURRENT_URL, Method.GET, "session/:sessionId/url"),
            (Command.GET, Method.POST, "session/:sessionId/url"),
        ]
        table = build_command_table(entries, required=())

        assert len(table) == 2

    def test_duplicate_command_rejected(self):
        """Should refuse a command listed twice."""
        entries = [
            (Command.STATUS, Method.GET, "status"),
            (Command.STATUS, Method.POST, "status"),
        ]
        with pytest.raises(ValueError, match="Duplicate"):
            build_command_table(entries, required=())

    def test_missing_command_rejected(self):
        """Should refuse a table that leaves out a required command."""
        entries = [(Command.STATUS, Method.GET, "status")]
        with pytest.raises(ValueError, match="missing"):
            build_command_table(entries, required=(Command.STATUS, Command.QUIT))

    def test_unknown_placeholder_rejected(self):
        """Should refuse placeholders outside the fixed set."""
        entries = [(Command.STATUS, Method.GET, "session/:sessionId/local_storage/key/:key")]
        with pytest.raises(ValueError, match=":key"):
            build_command_table(entries, required=())


class TestUrlTemplate:
    """Tests for template tokenizing."""

    def test_parse_segments(self):
        """Should split literals and placeholders."""
        template = UrlTemplate.parse("session/:sessionId/element/:id/css/:propertyName")

        assert template.segments == (
            "session",
            Placeholder.SESSION_ID,
            "element",
            Placeholder.ID,
            "css",
            Placeholder.PROPERTY_NAME,
        )

    @pytest.mark.parametrize("text", ["", "/session", "session//url", "session/"])
    def test_parse_rejects_malformed(self, text):
        """Should refuse absolute paths and empty segments."""
        with pytest.raises(ValueError):
            UrlTemplate.parse(text)

    def test_literal_containing_placeholder_name(self):
        """A literal segment like "name" is not the :name placeholder."""
        template = UrlTemplate.parse("session/:sessionId/element/:id/name")
        context = SubstitutionContext(session_id="S1", id="E7", name="ignored")

        assert template.format(context) == "session/S1/element/E7/name"


class TestResolve:
    """Tests for command resolution."""

    def test_get_capabilities(self):
        result = resolve(Command.GET_CAPABILITIES, SubstitutionContext(session_id="S1"))

        assert result == ResolvedRequest(method=Method.GET, url="session/S1")

    def test_get_element_attribute(self):
        context = SubstitutionContext(session_id="S1", id="E7", name="value")

        result = resolve("getElementAttribute", context)

        assert result.method == Method.GET
        assert result.url == "session/S1/element/E7/attribute/value"

    def test_element_equals(self):
        context = SubstitutionContext(session_id="S1", id="E7", other="E9")

        result = resolve(Command.ELEMENT_EQUALS, context)

        assert result.method == Method.GET
        assert result.url == "session/S1/element/E7/equals/E9"

    def test_css_property(self):
        context = SubstitutionContext(session_id="S1", id="E7", property_name="color")

        result = resolve(Command.GET_ELEMENT_VALUE_OF_CSS_PROPERTY, context)

        assert result.url == "session/S1/element/E7/css/color"

    def test_delete_cookie_named(self):
        context = SubstitutionContext(session_id="S1", name="foo")

        result = resolve(Command.DELETE_COOKIE_NAMED, context)

        assert result.method == Method.DELETE
        assert result.url == "session/S1/cookie/foo"

    def test_session_only_context_for_all_commands(self):
        """Should fill :sessionId and leave every other token untouched."""
        context = SubstitutionContext(session_id="abc123")

        for command in Command:
            template = lookup(command).url_template.text
            result = resolve(command, context)
            assert result.url == template.replace(":sessionId", "abc123")
            assert ":sessionId" not in result.url

    def test_unresolved_placeholder_left_in_place(self):
        """Should not fail when the context lacks a value the template needs."""
        result = resolve(Command.CLICK_ELEMENT, SubstitutionContext(session_id="S1"))

        assert result.url == "session/S1/element/:id/click"

    def test_irrelevant_context_fields_ignored(self):
        """Should ignore values the template does not reference."""
        context = SubstitutionContext(session_id="S1", id="E7", name="n", other="o")

        result = resolve(Command.GET_TITLE, context)

        assert result.url == "session/S1/title"

    def test_values_are_not_rescanned(self):
        """A session ID that looks like a placeholder should be inserted verbatim."""
        context = SubstitutionContext(session_id="x:id", id="E7")

        result = resolve(Command.CLICK_ELEMENT, context)

        assert result.url == "session/x:id/element/E7/click"

    def test_non_string_values(self):
        """Should stringify numeric IDs."""
        context = SubstitutionContext(session_id="S1", id=5)

        result = resolve(Command.GET_ELEMENT_TEXT, context)

        assert result.url == "session/S1/element/5/text"

    @pytest.mark.parametrize("command", [Command.GET_TITLE, Command.STATUS, "findElement"])
    def test_missing_session(self, command):
        """Should raise MissingSessionError without a session ID."""
        context = SubstitutionContext(id="E7", name="n", property_name="p", other="o")

        with pytest.raises(MissingSessionError):
            resolve(command, context)

    def test_missing_session_checked_before_lookup(self):
        """Should report the missing session even for an unknown command."""
        with pytest.raises(MissingSessionError) as exc:
            resolve("noSuchCommand", SubstitutionContext())

        assert exc.value.command == "noSuchCommand"

    def test_unknown_command(self):
        """Should raise UnknownCommandError for identifiers not in the table."""
        with pytest.raises(UnknownCommandError):
            resolve("setSpeed", SubstitutionContext(session_id="S1"))

    def test_idempotent(self):
        """Should return identical output for identical input."""
        context = SubstitutionContext(session_id="S1", id="E7", name="href")

        first = resolve(Command.GET_ELEMENT_ATTRIBUTE, context)
        second = resolve(Command.GET_ELEMENT_ATTRIBUTE, context)

        assert first == second
        assert first.url.encode() == second.url.encode()
