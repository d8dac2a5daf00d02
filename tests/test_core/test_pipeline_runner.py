"""Tests for core pipeline runner and contracts."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from planecut.core.contracts import (
    ContourRecord,
    PieceRecord,
    PipelineConfig,
    PlaneSpec,
    StepEntry,
    StepMeta,
)
from planecut.core.pipeline_runner import (
    import_step_class,
    load_pipeline_config,
    load_step_config,
    run_pipeline,
)


class TestContracts:
    def test_step_meta(self):
        meta = StepMeta(step_name="test", elapsed_seconds=1.5, params={"a": 1})
        assert meta.step_name == "test"
        assert meta.elapsed_seconds == 1.5

    def test_plane_spec_requires_three_components(self):
        PlaneSpec(normal=[0, 0, 1], point=[0, 0, 0])
        with pytest.raises(ValidationError):
            PlaneSpec(normal=[0, 1], point=[0, 0, 0])

    def test_piece_record(self):
        piece = PieceRecord(
            index=0, side="below", signed_area=8.0, centroid=[1.0, 2.0, 0.0],
            contour=ContourRecord(points=[[0, 0, 0], [2, 0, 0], [2, 4, 0]]),
        )
        assert piece.contour.closed is True
        assert piece.contour.metadata == {}

    def test_pipeline_config(self):
        cfg = PipelineConfig(
            project_name="test",
            data_root=Path("./data"),
            steps=[StepEntry(name="s1", module="planecut.steps.s01_import_contour", config_file="c.yaml")],
        )
        assert len(cfg.steps) == 1
        assert cfg.steps[0].enabled is True
        assert cfg.steps[0].inputs == {}


class TestPipelineRunner:
    def test_load_pipeline_config(self, tmp_path: Path):
        config = {
            "project_name": "test_project",
            "data_root": str(tmp_path / "data"),
            "steps": [
                {"name": "import_contour", "module": "planecut.steps.s01_import_contour",
                 "config_file": "configs/steps/s01_import_contour.yaml", "depends_on": [], "enabled": True},
            ],
        }
        config_file = tmp_path / "pipeline.yaml"
        with open(config_file, "w") as f:
            yaml.dump(config, f)

        cfg = load_pipeline_config(config_file)
        assert cfg.project_name == "test_project"
        assert len(cfg.steps) == 1

    def test_import_step_class(self):
        cls = import_step_class("planecut.steps.s02_split_plane")
        assert cls.__name__ == "SplitPlaneStep"
        assert hasattr(cls, "input_type")
        assert hasattr(cls, "output_type")

    def test_import_all_steps(self):
        expected = {
            "planecut.steps.s01_import_contour": ["source_file"],
            "planecut.steps.s02_split_plane": ["contour_file"],
        }
        for module, required in expected.items():
            cls = import_step_class(module)
            assert cls.name, f"{module} has empty name"
            assert cls.required_input_fields() == required

    def test_load_step_config(self, tmp_path: Path):
        from planecut.steps.s02_split_plane.config import SplitPlaneConfig

        config_file = tmp_path / "s02.yaml"
        with open(config_file, "w") as f:
            yaml.dump({"plane": {"normal": [0.0, 1.0, 0.0], "point": [0.0, 3.0, 0.0]}}, f)

        cfg = load_step_config(config_file, SplitPlaneConfig)
        assert cfg.plane.normal == [0.0, 1.0, 0.0]
        assert cfg.plane.point == [0.0, 3.0, 0.0]
        assert cfg.height_tolerance_percent == 0.1

    def test_empty_step_config_uses_defaults(self, tmp_path: Path):
        from planecut.steps.s01_import_contour.config import ImportContourConfig

        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_step_config(config_file, ImportContourConfig).input_format == "auto"

    def test_run_pipeline(self, tmp_path: Path, data_root: Path, sample_contour_json: Path):
        s01_cfg = tmp_path / "s01.yaml"
        s02_cfg = tmp_path / "s02.yaml"
        with open(s01_cfg, "w") as f:
            yaml.dump({"input_format": "json"}, f)
        with open(s02_cfg, "w") as f:
            yaml.dump({"plane": {"normal": [1.0, 0.0, 0.0], "point": [2.0, 0.0, 0.0]}}, f)

        pipeline = {
            "project_name": "square",
            "data_root": str(data_root),
            "steps": [
                {"name": "import_contour", "module": "planecut.steps.s01_import_contour",
                 "config_file": str(s01_cfg), "inputs": {"source_file": str(sample_contour_json)}},
                {"name": "split_plane", "module": "planecut.steps.s02_split_plane",
                 "config_file": str(s02_cfg), "depends_on": ["import_contour"]},
            ],
        }
        config_file = tmp_path / "pipeline.yaml"
        with open(config_file, "w") as f:
            yaml.dump(pipeline, f)

        results = run_pipeline(config_file)
        assert set(results) == {"import_contour", "split_plane"}
        assert results["import_contour"].num_points == 4
        assert results["split_plane"].num_pieces == 2
        assert results["split_plane"].total_area == pytest.approx(16.0)
        assert results["split_plane"].pieces_file.exists()

    def test_disabled_step_is_skipped(self, tmp_path: Path, data_root: Path, sample_contour_json: Path):
        pipeline = {
            "data_root": str(data_root),
            "steps": [
                {"name": "import_contour", "module": "planecut.steps.s01_import_contour",
                 "config_file": str(Path("configs/steps/s01_import_contour.yaml").resolve()),
                 "inputs": {"source_file": str(sample_contour_json)}, "enabled": False},
            ],
        }
        config_file = tmp_path / "pipeline.yaml"
        with open(config_file, "w") as f:
            yaml.dump(pipeline, f)

        assert run_pipeline(config_file) == {}
