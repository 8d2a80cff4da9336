"""
Tests for the simulate_spins.py command-line tool.
"""

import matplotlib

matplotlib.use("Agg")

import pytest
import yaml

from simulate_spins import load_entities, main


@pytest.fixture
def fast_config(tmp_path):
    """Short spins so the CLI finishes quickly."""
    path = tmp_path / "fast.yaml"
    path.write_text(
        yaml.dump(
            {
                "timing": {"base_duration_ms": 1500.0, "min_turns": 3, "max_turns": 4},
                "simulation": {"frame_interval_ms": 50.0},
                "logging": {"level": "WARNING"},
            }
        )
    )
    return str(path)


class TestLoadEntities:
    def test_list(self, tmp_path):
        path = tmp_path / "entities.yaml"
        path.write_text(yaml.dump([{"identifier": "A1", "label": "Alice"}, {"ticketNumber": "B7"}]))

        entities = load_entities(str(path))
        assert [e.identifier for e in entities] == ["A1", "B7"]
        assert entities[1].label == "B7"

    def test_entries_mapping(self, tmp_path):
        path = tmp_path / "entities.yaml"
        path.write_text(yaml.dump({"entries": [{"identifier": "X", "label": "Xavier"}]}))
        assert load_entities(str(path))[0].label == "Xavier"


class TestMain:
    def test_generated_wheel_with_targets(self, fast_config, tmp_path, capsys):
        plot_path = tmp_path / "spins.png"
        records = main(
            [
                "--config", fast_config,
                "--n-entities", "6",
                "--n-spins", "3",
                "--targets", "T2", "T5",
                "--seed", "5",
                "--save-plot", str(plot_path),
            ]
        )

        assert len(records) == 3
        assert [r.outcome.winning_identifier for r in records[:2]] == ["T2", "T5"]
        assert records[2].target is None
        assert plot_path.exists()
        assert plot_path.stat().st_size > 0
        assert "Wheel Spin Results (3 spins)" in capsys.readouterr().out

    def test_entity_file(self, fast_config, tmp_path):
        path = tmp_path / "entities.yaml"
        path.write_text(yaml.dump([{"ticketNumber": f"TK{i}", "label": f"Guest {i} - TK{i}"} for i in range(5)]))

        records = main(["--config", fast_config, "--entities", str(path), "--n-spins", "1", "--targets", "TK3"])
        assert records[0].outcome.winning_identifier == "TK3"

    def test_empty_entity_file(self, fast_config, tmp_path):
        path = tmp_path / "entities.yaml"
        path.write_text("[]")
        with pytest.raises(SystemExit) as exc:
            main(["--config", fast_config, "--entities", str(path)])
        assert exc.value.code == 1

    def test_critical_config(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"timing": {"min_turns": 0}}))
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(path)])
        assert exc.value.code == 1
