"""Tests for CLI commands."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from blogkit.cli import cli
from conftest import make_text


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "blogkit.yaml"
    path.write_text(
        """
content:
  content_roots: [content]
feed:
  site_title: CLI Blog
  site_url: https://example.com
  page_size: 1
""",
        encoding="utf-8",
    )
    return path


def _invoke(*args):
    return CliRunner().invoke(cli, list(args))


class TestBuildCommand:
    def test_build_writes_outputs(self, tmp_path, content_dir, config_file):
        """Test build writes artifacts and reports counts."""
        result = _invoke("build", "-c", str(config_file), "-d", str(tmp_path), "--no-progress")

        assert result.exit_code == 0, result.output
        assert "✓ Published 3 documents (2 posts, 1 pages)" in result.output
        assert "Tags: 2" in result.output

        manifest = json.loads((tmp_path / "public" / "manifest.json").read_text())
        assert len(manifest["posts"]) == 2

    def test_build_failure_exits_nonzero(self, tmp_path, content_dir, config_file):
        """Test build with a malformed source fails without output."""
        (content_dir / "broken.md").write_text("no front matter here\n")

        result = _invoke("build", "-c", str(config_file), "-d", str(tmp_path), "--no-progress")

        assert result.exit_code != 0
        assert "✗ Build failed" in result.output
        assert not (tmp_path / "public").exists()

    def test_missing_config(self, tmp_path):
        """Test build with a missing config file."""
        result = _invoke("build", "-c", str(tmp_path / "missing.yaml"), "-d", str(tmp_path))

        assert result.exit_code != 0
        assert "Configuration error" in result.output


class TestValidateCommand:
    def test_validate_valid_content(self, tmp_path, content_dir, config_file):
        """Test validate with valid content writes nothing."""
        result = _invoke("validate", "-c", str(config_file), "-d", str(tmp_path))

        assert result.exit_code == 0
        assert "✓ Content is valid" in result.output
        assert "Documents: 3" in result.output
        assert not (tmp_path / "public").exists()

    def test_validate_reports_duplicate_permalink(self, tmp_path, content_dir, config_file):
        """Test validate reports a permalink collision."""
        (content_dir / "team.md").write_text(make_text("Team", permalink="/about"))

        result = _invoke("validate", "-c", str(config_file), "-d", str(tmp_path))

        assert result.exit_code != 0
        assert "/about" in result.output


class TestListCommand:
    def test_list_first_page(self, tmp_path, content_dir, config_file):
        """Test list shows the newest post first."""
        result = _invoke("list", "-c", str(config_file), "-d", str(tmp_path))

        assert result.exit_code == 0
        assert "2022-10-10  /2022/10/10/second-post  Second Post" in result.output
        assert "First Post" not in result.output
        assert "Page 1/2 (2 total)" in result.output

    def test_list_pages(self, tmp_path, content_dir, config_file):
        """Test list with the page layout kind."""
        result = _invoke("list", "-c", str(config_file), "-d", str(tmp_path), "--kind", "page")

        assert result.exit_code == 0
        assert "/about  About" in result.output

    def test_list_invalid_page(self, tmp_path, content_dir, config_file):
        """Test list rejects page numbers below 1."""
        result = _invoke("list", "-c", str(config_file), "-d", str(tmp_path), "--page", "0")

        assert result.exit_code == 2


class TestTagsCommand:
    def test_tags_summary(self, tmp_path, content_dir, config_file):
        """Test tags prints every tag with its count."""
        result = _invoke("tags", "-c", str(config_file), "-d", str(tmp_path))

        assert result.exit_code == 0
        assert "Python (2)" in result.output
        assert "notes (1)" in result.output

    def test_single_tag(self, tmp_path, content_dir, config_file):
        """Test tags for one tag, newest first."""
        result = _invoke("tags", "-c", str(config_file), "-d", str(tmp_path), "--tag", "PYTHON")

        lines = [line for line in result.output.splitlines() if line.startswith("/")]
        assert lines == [
            "/2022/10/10/second-post  Second Post",
            "/2022/10/08/first-post  First Post",
        ]

    def test_unknown_tag(self, tmp_path, content_dir, config_file):
        """Test tags for a tag nobody uses."""
        result = _invoke("tags", "-c", str(config_file), "-d", str(tmp_path), "--tag", "rust")

        assert result.exit_code == 0
        assert "No documents tagged 'rust'" in result.output
