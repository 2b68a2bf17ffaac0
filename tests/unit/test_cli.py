"""Tests for the command-line interface."""

from typer.testing import CliRunner

from fakes import PNG_BYTES
from favicon_resolver import cli
from favicon_resolver.models import IconResult, MediaType

runner = CliRunner()


def _icon() -> IconResult:
    return IconResult(uri="https://example.com/i.png", content=PNG_BYTES, media_type=MediaType.PNG)


class TestResolveCommand:
    """Tests for ``favicon-resolver resolve``."""

    def test_writes_icon(self, monkeypatch, tmp_path):
        async def fake_resolve(domain, config):
            assert domain == "example.com"
            return _icon()

        monkeypatch.setattr(cli, "_resolve", fake_resolve)
        target = tmp_path / "icon.png"

        result = runner.invoke(cli.app, ["resolve", "example.com", "--output", str(target)])

        assert result.exit_code == 0
        assert "PNG" in result.output
        assert target.read_bytes() == PNG_BYTES

    def test_timeout_option_applied(self, monkeypatch):
        seen = {}

        async def fake_resolve(domain, config):
            seen["timeout"] = config.timeout
            return _icon()

        monkeypatch.setattr(cli, "_resolve", fake_resolve)
        result = runner.invoke(cli.app, ["resolve", "example.com", "--timeout", "2.5"])

        assert result.exit_code == 0
        assert seen["timeout"] == 2.5

    def test_missing_icon_exits_nonzero(self, monkeypatch):
        async def fake_resolve(domain, config):
            return None

        monkeypatch.setattr(cli, "_resolve", fake_resolve)
        result = runner.invoke(cli.app, ["resolve", "nothing.test"])

        assert result.exit_code == 1
        assert "No icon found" in result.output


class TestBatchCommand:
    def test_summary(self, monkeypatch):
        async def fake_resolve_many(domains, config, max_concurrent):
            assert max_concurrent == 3
            return {"a.test": _icon(), "b.test": None}

        monkeypatch.setattr(cli, "_resolve_many", fake_resolve_many)
        result = runner.invoke(cli.app, ["batch", "a.test", "b.test", "-c", "3"])

        assert result.exit_code == 0
        assert "Found: 1" in result.output
        assert "Missing: 1" in result.output
