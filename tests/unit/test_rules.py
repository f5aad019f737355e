"""
Rules loader tests: YAML parsing, defaults and schema validation.
"""

from pathlib import Path

import pytest

from tokengraph.rules.loader import extract_yaml, load_rules, parse_rules
from tokengraph.rules.models import Rules


def write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "rules.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadRules:
    def test_project_rules_file_is_valid(self) -> None:
        """The shipped rules.yaml loads."""
        rules = load_rules(Path(__file__).parent.parent.parent / "rules.yaml")
        assert rules.tree.max_depth == 4
        assert rules.source.path == "data/variables.json"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_rules(tmp_path / "absent.yaml")

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        rules = load_rules(write(tmp_path, ""))
        assert rules == Rules()
        assert rules.classification.foundation_collections == ["Typography", "Color"]
        assert rules.classification.component_collections == ["Components"]
        assert rules.display.alias_prefix == "→ "

    def test_partial_override(self, tmp_path: Path) -> None:
        rules = load_rules(write(tmp_path, "tree:\n  max_depth: 2\n"))
        assert rules.tree.max_depth == 2
        assert rules.tree.strict_cycles is False

    def test_markdown_fenced(self, tmp_path: Path) -> None:
        content = "# Rules\n\n```yaml\ntree:\n  strict_cycles: true\n```\n\nNotes.\n"
        rules = load_rules(write(tmp_path, content))
        assert rules.tree.strict_cycles is True

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Invalid YAML syntax"):
            load_rules(write(tmp_path, "tree: [unclosed"))

    def test_negative_depth_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(write(tmp_path, "tree:\n  max_depth: -1\n"))

    def test_http_source_requires_url(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(write(tmp_path, "source:\n  kind: http\n"))

    def test_overlapping_categories_rejected(self, tmp_path: Path) -> None:
        content = (
            "classification:\n"
            "  foundation_collections: [Color]\n"
            "  component_collections: [Color]\n"
        )
        with pytest.raises(ValueError, match="Rules validation failed"):
            load_rules(write(tmp_path, content))


class TestClassificationSection:
    def test_to_rules(self) -> None:
        classification = Rules().classification.to_rules()
        assert classification.foundation_collections == frozenset({"Typography", "Color"})
        assert classification.component_collections == frozenset({"Components"})


class TestParseRules:
    def test_yml_fence_accepted(self) -> None:
        rules = parse_rules("Intro\n```yml\ndisplay:\n  alias_prefix: '-> '\n```\n")
        assert rules.display.alias_prefix == "-> "

    def test_only_first_block_used(self) -> None:
        content = "```yaml\ntree:\n  max_depth: 1\n```\n```yaml\ntree:\n  max_depth: 9\n```\n"
        assert parse_rules(content).tree.max_depth == 1

    def test_non_mapping_rejected(self) -> None:
        with pytest.raises(ValueError, match="must hold a mapping"):
            parse_rules("- just\n- a list\n")

    def test_extract_yaml_without_fence(self) -> None:
        assert extract_yaml("tree: {}\n") == "tree: {}\n"
