"""
End-to-end tests for the command line interface.
"""

import json

import pytest
from typer.testing import CliRunner

from albumseq.cli import app

runner = CliRunner()


@pytest.fixture
def context_path(tmp_path):
    return tmp_path / "context.json"


def invoke(context_path, *args):
    return runner.invoke(app, ["--context", str(context_path), *args])


@pytest.fixture
def populated(context_path):
    for args in (
        ["add-tracklist", "--name", "Album", "A:3:00", "B:4:00", "C:2:00"],
        ["add-medium", "--name", "Vinyl", "--sides", "2", "--max-duration", "5:00"],
        ["add-constraint", "--kind", "adjacent", "--weight", "10", "A", "B"],
    ):
        result = invoke(context_path, *args)
        assert result.exit_code == 0, result.output
    return context_path


class TestInit:

    def test_init_creates_context(self, context_path):
        result = invoke(context_path, "init")

        assert result.exit_code == 0
        assert "Created new context" in result.output
        assert json.loads(context_path.read_text())["tracklists"] == []

    def test_init_refuses_existing_file(self, context_path):
        context_path.write_text("{}")

        result = invoke(context_path, "init")

        assert result.exit_code == 1
        assert context_path.read_text() == "{}"


class TestMissingContext:
    """Commands on a context file that does not exist yet."""

    def test_show_does_not_create_file(self, context_path):
        result = invoke(context_path, "show")

        assert result.exit_code == 0
        assert not context_path.exists()

    def test_propose_does_not_create_file(self, context_path):
        result = invoke(context_path, "propose", "-t", "Album", "-m", "Vinyl")

        assert result.exit_code == 1
        assert not context_path.exists()

    def test_failed_add_does_not_create_file(self, context_path):
        result = invoke(context_path, "add-tracklist", "--name", "Album", "broken")

        assert result.exit_code == 1
        assert not context_path.exists()

    def test_successful_add_creates_file(self, context_path):
        result = invoke(
            context_path, "add-medium", "--name", "Vinyl", "--sides", "2", "--max-duration", "22:00"
        )

        assert result.exit_code == 0
        assert json.loads(context_path.read_text())["mediums"][0]["name"] == "Vinyl"


class TestEditing:

    def test_add_commands_persist(self, populated):
        data = json.loads(populated.read_text())

        assert data["tracklists"][0]["name"] == "Album"
        assert [t["title"] for t in data["tracklists"][0]["tracks"]] == ["A", "B", "C"]
        assert data["mediums"][0] == {"name": "Vinyl", "sides": 2, "max_duration_per_side": 5.0}
        assert data["constraints"][0] == {
            "kind": {"kind": "Adjacent", "data": ["A", "B"]},
            "weight": 10,
        }

    def test_bad_track_is_rejected_without_saving(self, populated):
        before = populated.read_text()

        result = invoke(populated, "add-tracklist", "--name", "Other", "A:3:00", "broken")

        assert result.exit_code == 1
        assert populated.read_text() == before

    def test_superscript_digits_are_rejected(self, populated):
        before = populated.read_text()

        result = invoke(populated, "add-tracklist", "--name", "Other", "A:\u00b2:30")

        assert result.exit_code == 1
        assert populated.read_text() == before

    def test_unknown_constraint_kind(self, populated):
        result = invoke(populated, "add-constraint", "--kind", "before", "A", "B")

        assert result.exit_code == 1
        assert len(json.loads(populated.read_text())["constraints"]) == 1

    def test_remove_constraint(self, populated):
        result = invoke(populated, "remove-constraint", "--index", "0")

        assert result.exit_code == 0
        assert "Removed constraint at index 0" in result.output
        assert json.loads(populated.read_text())["constraints"] == []

    def test_remove_constraint_out_of_range(self, populated):
        result = invoke(populated, "remove-constraint", "--index", "3")

        assert result.exit_code == 1

    def test_show_filter(self, populated):
        result = invoke(populated, "show", "--filter", "media")

        assert result.exit_code == 0
        assert "Vinyl" in result.output
        assert "Tracklists" not in result.output


class TestPropose:

    def test_propose_renders_sides(self, populated):
        result = invoke(populated, "propose", "--tracklist", "album", "--medium", "vinyl", "--count", "1")

        assert result.exit_code == 0, result.output
        assert "Permutation #1" in result.output
        assert "Score: 10" in result.output
        assert "Side 1" in result.output and "Side 2" in result.output
        assert "TOTAL" in result.output
        assert "Permutation #2" not in result.output

    def test_propose_with_min_score(self, populated):
        result = invoke(populated, "propose", "-t", "Album", "-m", "Vinyl", "--min-score", "11")

        assert result.exit_code == 0
        assert "No ordering fits" in result.output

    def test_propose_unknown_tracklist(self, populated):
        result = invoke(populated, "propose", "-t", "Missing", "-m", "Vinyl")

        assert result.exit_code == 1

    def test_propose_respects_track_limit(self, populated):
        result = invoke(populated, "propose", "-t", "Album", "-m", "Vinyl", "--max-tracks", "2")

        assert result.exit_code == 1

    def test_propose_rejects_non_finite_stored_duration(self, context_path):
        context_path.write_text(json.dumps({
            "tracklists": [{"name": "Album", "tracks": [{"title": "A", "duration": float("nan")}]}],
            "mediums": [{"name": "Vinyl", "sides": 2, "max_duration_per_side": 5.0}],
            "constraints": [],
        }))

        result = invoke(context_path, "propose", "-t", "Album", "-m", "Vinyl")

        assert result.exit_code == 1
        assert "No ordering fits" not in result.output
