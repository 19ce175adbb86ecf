"""
Tests for pretty and fix-command output
"""

import pytest
from colorama import Fore, Style

from linch.error_handler import ErrorType
from linch.extraction import Link
from linch.output import FixFormatter, PrettyFormatter, build_formatter
from linch.validator import LinkError, PermanentRedirect, Success, TemporaryRedirect

LINK = Link('https://example.com/old', '/docs/guide.md')


@pytest.fixture
def pretty():
    return PrettyFormatter(color=False)


class TestPrettyFormatter:
    def test_success(self, pretty):
        assert pretty.format(Success(LINK, 200)) == 'SUCCE 200: https://example.com/old'

    def test_permanent_redirect_is_unescaped(self, pretty):
        action = PermanentRedirect(LINK, 301, 'https://example.com/new%20page')
        assert pretty.format(action) == 'REDIR 301: https://example.com/old -> https://example.com/new page'

    def test_temporary_redirect(self, pretty):
        action = TemporaryRedirect(LINK, 307, 'https://example.com/tmp')
        assert pretty.format(action) == 'SEMIR 307: https://example.com/old -> https://example.com/tmp'

    def test_server_error(self, pretty):
        action = LinkError(LINK, ErrorType.HTTP_STATUS, 'HTTP 404', status=404)
        assert pretty.format(action) == 'ERROR 404: https://example.com/old'

    def test_internal_error_without_status(self, pretty):
        action = LinkError(LINK, ErrorType.TRANSPORT_ERROR, 'request timed out')
        assert pretty.format(action) == 'INTER XXX: https://example.com/old (request timed out)'

    def test_malformed_redirect_keeps_status(self, pretty):
        action = LinkError(LINK, ErrorType.REDIRECT_MALFORMED, 'missing location in redirection', status=301)
        assert pretty.format(action).startswith('INTER 301: ')

    def test_colors(self):
        line = PrettyFormatter(color=True).format(Success(LINK, 200))
        assert line == f'SUCCE {Fore.GREEN}200{Style.RESET_ALL}: https://example.com/old'


class TestFixFormatter:
    def test_permanent_redirect_becomes_sed_command(self):
        action = PermanentRedirect(LINK, 308, 'https://example.com/new')
        assert FixFormatter().format(action) == (
            "sed -i 's|https://example\\.com/old|https://example.com/new|g' /docs/guide.md"
        )

    def test_escapes_special_characters(self):
        link = Link('https://example.com/a?x=1&y=2', "/docs/it's here.md")
        action = PermanentRedirect(link, 301, 'https://example.com/b?x=1&y=2|z')

        command = FixFormatter().format(action)

        assert 'a?x=1&y=2' in command
        assert 'b?x=1\\&y=2\\|z' in command
        assert command.endswith("'/docs/it'\"'\"'s here.md'")

    def test_internal_error_becomes_comment(self):
        action = LinkError(LINK, ErrorType.PARSE_ERROR, 'missing host')
        assert FixFormatter().format(action) == '# INTER https://example.com/old: missing host'

    @pytest.mark.parametrize('action', [
        Success(LINK, 200),
        TemporaryRedirect(LINK, 302, 'https://example.com/tmp'),
        LinkError(LINK, ErrorType.HTTP_STATUS, 'HTTP 500', status=500),
    ])
    def test_other_outcomes_print_nothing(self, action):
        assert FixFormatter().format(action) is None


def test_build_formatter():
    assert isinstance(build_formatter(fix=True), FixFormatter)
    formatter = build_formatter(fix=False, color=False)
    assert isinstance(formatter, PrettyFormatter)
    assert formatter.color is False
