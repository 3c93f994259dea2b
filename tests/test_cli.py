"""Tests for CLI."""

import shutil
from pathlib import Path

import yaml
from bs4 import BeautifulSoup
from typer.testing import CliRunner

from admin_bookmarks.cli import app
from admin_bookmarks.config import load_config

runner = CliRunner()
FIXTURES = Path(__file__).parent / "fixtures"


def _copy_fixture(tmp_path: Path, name: str = "site.yml") -> Path:
    config_path = tmp_path / "site.yml"
    shutil.copy(FIXTURES / name, config_path)
    return config_path


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("options", "render", "validate", "init", "set"):
        assert command in result.stdout


def test_cli_no_args_shows_help():
    result = runner.invoke(app, [])
    # Exit code 2 is standard for "no command specified" (usage error)
    assert result.exit_code == 2
    assert "render" in result.output


def test_cli_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "admin-bookmarks" in result.stdout


class TestOptions:
    def test_options_yaml(self):
        result = runner.invoke(app, ["options", "--config", str(FIXTURES / "site.yml")])
        assert result.exit_code == 0

        data = yaml.safe_load(result.stdout)
        assert list(data)[0] == "bookmark_desc"
        assert len(data) == 11
        assert data["bookmark_1_url"]["label"] == "Bookmark 1"
        assert data["bookmark_1_url"]["options"] == {
            "": "-- Select a Page --",
            "settings": "Settings",
            "settings/general": "Settings -- General",
            "child": "Hidden -- Child",
            "users": "Users",
        }

    def test_options_missing_config(self):
        result = runner.invoke(app, ["options", "--config", "/nonexistent/site.yml"])
        assert result.exit_code == 1
        assert "not found" in result.output.lower()

    def test_options_unreadable_pages(self, tmp_path: Path):
        config_path = tmp_path / "site.yml"
        config_path.write_text("pages:\n  - {id: nope}\n", encoding="utf-8")

        result = runner.invoke(app, ["options", "--config", str(config_path)])
        assert result.exit_code == 1
        assert "Cannot read pages" in result.output


class TestRender:
    def test_render_html_stdout(self):
        result = runner.invoke(app, ["render", "--config", str(FIXTURES / "site.yml")])
        assert result.exit_code == 0

        soup = BeautifulSoup(result.stdout, "html.parser")
        links = soup.select(".admin-bookmarks-link")
        assert [(a.get_text(), a["href"]) for a in links] == [
            ("Settings -- General", "https://example.com/admin/settings/general"),
            ("Hidden -- Child", "https://example.com/admin/child"),
        ]

    def test_render_markdown(self):
        result = runner.invoke(
            app,
            ["render", "--config", str(FIXTURES / "site.yml"), "--format", "markdown"],
        )
        assert result.exit_code == 0
        assert (
            "- [Settings -- General](https://example.com/admin/settings/general)"
            in result.stdout
        )

    def test_render_to_file(self, tmp_path: Path):
        output = tmp_path / "out" / "bookmarks.html"
        result = runner.invoke(
            app,
            [
                "render",
                "--config",
                str(FIXTURES / "site.yml"),
                "--output",
                str(output),
            ],
        )
        assert result.exit_code == 0
        assert "Generated" in result.output
        assert "admin-bookmarks-dropdown" in output.read_text(encoding="utf-8")

    def test_render_no_bookmarks(self):
        result = runner.invoke(
            app, ["render", "--config", str(FIXTURES / "site_no_plugin.yml")]
        )
        assert result.exit_code == 0
        assert "No bookmarks to render" in result.output
        assert "<ul" not in result.output

    def test_render_fails_open_on_bad_pages(self, tmp_path: Path):
        config_path = tmp_path / "site.yml"
        config_path.write_text(
            "pages: 5\nplugins:\n  - admin_bookmarks:\n      bookmark_1_url: a\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["render", "--config", str(config_path)])
        assert result.exit_code == 0
        assert "Warnings:" in result.output
        assert "<ul" not in result.output

    def test_render_verbose_lists_bookmarks(self):
        result = runner.invoke(
            app, ["render", "--config", str(FIXTURES / "site.yml"), "--verbose"]
        )
        assert result.exit_code == 0
        assert "Bookmarks: 2" in result.output

    def test_render_reports_cycles(self):
        result = runner.invoke(
            app, ["render", "--config", str(FIXTURES / "site_cycle.yml")]
        )
        assert result.exit_code == 0
        assert "parent cycle detected" in result.output
        assert "https://example.com/admin/content" in result.output


class TestValidate:
    def test_validate_success(self):
        result = runner.invoke(
            app, ["validate", "--config", str(FIXTURES / "site.yml")]
        )
        assert result.exit_code == 0
        assert "Config valid" in result.output
        assert "Bookmarkable pages: 4" in result.output
        assert "Bookmarks: 2/10" in result.output
        assert "Stale bookmarks" in result.output
        assert "bookmark_3_url: drafts" in result.output

    def test_validate_verbose_lists_paths(self):
        result = runner.invoke(
            app, ["validate", "--config", str(FIXTURES / "site.yml"), "-v"]
        )
        assert result.exit_code == 0
        assert "settings/general: Settings -- General" in result.output

    def test_validate_quiet(self):
        result = runner.invoke(
            app, ["validate", "--config", str(FIXTURES / "site.yml"), "-q"]
        )
        assert result.exit_code == 0
        assert result.output == ""

    def test_validate_missing_file(self):
        result = runner.invoke(app, ["validate", "--config", "/nonexistent.yml"])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_validate_bad_options(self, tmp_path: Path):
        config_path = tmp_path / "site.yml"
        config_path.write_text(
            "plugins:\n  - admin_bookmarks:\n      max_bookmarks: -3\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["validate", "--config", str(config_path)])
        assert result.exit_code == 1
        assert "Config invalid" in result.output

    def test_validate_reports_skipped_pages(self):
        result = runner.invoke(
            app, ["validate", "--config", str(FIXTURES / "site_cycle.yml")]
        )
        assert result.exit_code == 0
        assert "Skipped pages" in result.output
        assert "page 1 (parent cycle detected)" in result.output
        assert "bookmark_2_url: b/a (page 1 is in a parent cycle)" in result.output
        assert "no live page with this path" not in result.output


class TestInit:
    def test_init_list_plugins(self, tmp_path: Path):
        config_path = tmp_path / "site.yml"
        config_path.write_text(
            "admin_url: https://example.com/admin\nplugins:\n- search\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["init", "--config", str(config_path)])
        assert result.exit_code == 0
        assert "Added admin_bookmarks plugin" in result.output

        content = config_path.read_text(encoding="utf-8")
        assert "# slots offered in the settings UI" in content
        assert "# placed between ancestor titles" in content
        assert load_config(config_path).slots == {}
        raw = yaml.safe_load(content)
        assert raw["plugins"][0] == "search"
        assert "admin_bookmarks" in raw["plugins"][1]

    def test_init_mapping_plugins(self, tmp_path: Path):
        config_path = tmp_path / "site.yml"
        config_path.write_text("plugins:\n  search: {}\n", encoding="utf-8")

        result = runner.invoke(app, ["init", "--config", str(config_path)])
        assert result.exit_code == 0
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        assert "admin_bookmarks" in raw["plugins"]

    def test_init_no_plugins_key(self, tmp_path: Path):
        config_path = tmp_path / "site.yml"
        config_path.write_text("admin_url: https://example.com\n", encoding="utf-8")

        result = runner.invoke(app, ["init", "--config", str(config_path)])
        assert result.exit_code == 0
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        assert raw["admin_url"] == "https://example.com"
        assert raw["plugins"] == [
            {"admin_bookmarks": {"max_bookmarks": 10, "label_separator": " -- "}}
        ]
        assert load_config(config_path).label_separator == " -- "

    def test_init_refuses_existing(self, tmp_path: Path):
        config_path = _copy_fixture(tmp_path)
        result = runner.invoke(app, ["init", "--config", str(config_path)])
        assert result.exit_code == 1
        assert "already configured" in result.output

    def test_init_force_replaces_existing(self, tmp_path: Path):
        config_path = _copy_fixture(tmp_path)
        result = runner.invoke(app, ["init", "--config", str(config_path), "--force"])
        assert result.exit_code == 0
        assert load_config(config_path).slots == {}

    def test_init_missing_file(self, tmp_path: Path):
        result = runner.invoke(
            app, ["init", "--config", str(tmp_path / "missing.yml")]
        )
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_init_invalid_plugins(self, tmp_path: Path):
        config_path = tmp_path / "site.yml"
        config_path.write_text("plugins: admin_bookmarks\n", encoding="utf-8")
        result = runner.invoke(app, ["init", "--config", str(config_path)])
        assert result.exit_code == 1
        assert "must be a list or mapping" in result.output


class TestSet:
    def test_set_slot(self, tmp_path: Path):
        config_path = _copy_fixture(tmp_path)
        result = runner.invoke(
            app, ["set", "2", "users", "--config", str(config_path)]
        )
        assert result.exit_code == 0
        assert "Bookmark 2 set to users" in result.output

        config = load_config(config_path)
        assert config.get_slot(2) == "users"
        assert config.get_slot(1) == "settings/general"
        assert config.label_separator == " -- "

    def test_set_clears_slot(self, tmp_path: Path):
        config_path = _copy_fixture(tmp_path)
        result = runner.invoke(app, ["set", "1", "--config", str(config_path)])
        assert result.exit_code == 0
        assert "cleared" in result.output
        assert load_config(config_path).get_slot(1) == ""

    def test_set_mapping_plugins(self, tmp_path: Path):
        config_path = _copy_fixture(tmp_path, "site_mapping_plugins.yml")
        result = runner.invoke(
            app, ["set", "3", "settings", "--config", str(config_path)]
        )
        assert result.exit_code == 0
        assert load_config(config_path).get_slot(3) == "settings"

    def test_set_bare_plugin_entry(self, tmp_path: Path):
        config_path = tmp_path / "site.yml"
        config_path.write_text(
            "pages:\n  - {id: 1, title: Settings, slug: settings}\n"
            "plugins:\n  - admin_bookmarks\n",
            encoding="utf-8",
        )
        result = runner.invoke(
            app, ["set", "1", "settings", "--config", str(config_path)]
        )
        assert result.exit_code == 0
        assert load_config(config_path).get_slot(1) == "settings"

    def test_set_rejects_unknown_path(self, tmp_path: Path):
        config_path = _copy_fixture(tmp_path)
        before = config_path.read_text(encoding="utf-8")
        result = runner.invoke(
            app, ["set", "2", "drafts", "--config", str(config_path)]
        )
        assert result.exit_code == 1
        assert "No live page with path: drafts" in result.output
        assert config_path.read_text(encoding="utf-8") == before

    def test_set_rejects_out_of_range_slot(self, tmp_path: Path):
        config_path = _copy_fixture(tmp_path, "site_mapping_plugins.yml")
        result = runner.invoke(
            app, ["set", "4", "settings", "--config", str(config_path)]
        )
        assert result.exit_code == 1
        assert "between 1 and 3" in result.output

    def test_set_requires_plugin(self, tmp_path: Path):
        config_path = _copy_fixture(tmp_path, "site_no_plugin.yml")
        result = runner.invoke(
            app, ["set", "1", "settings", "--config", str(config_path)]
        )
        assert result.exit_code == 1
        assert "not configured" in result.output

    def test_set_requires_plugin_in_mapping_form(self, tmp_path: Path):
        config_path = tmp_path / "site.yml"
        config_path.write_text(
            "pages:\n  - {id: 1, title: Settings, slug: settings}\n"
            "plugins:\n  search: {}\n",
            encoding="utf-8",
        )
        before = config_path.read_text(encoding="utf-8")
        result = runner.invoke(
            app, ["set", "1", "settings", "--config", str(config_path)]
        )
        assert result.exit_code == 1
        assert "not configured" in result.output
        assert config_path.read_text(encoding="utf-8") == before

    def test_set_after_init(self, tmp_path: Path):
        config_path = _copy_fixture(tmp_path, "site_no_plugin.yml")
        assert runner.invoke(app, ["init", "--config", str(config_path)]).exit_code == 0

        result = runner.invoke(
            app, ["set", "1", "settings", "--config", str(config_path)]
        )
        assert result.exit_code == 0
        config = load_config(config_path)
        assert config.get_slot(1) == "settings"
        assert config.max_bookmarks == 10
