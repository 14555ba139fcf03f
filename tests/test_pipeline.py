"""Tests for the tracing pipeline."""
import numpy as np
import pytest
from PIL import Image

from mooretrace.pipeline import TracePipeline
from mooretrace.types import NoBorderFoundError, PreprocessConfig, TraceConfig


class TestTracePipeline:
    """Test end-to-end tracing."""

    def test_exact_without_scaling(self, disk_rgba):
        pipeline = TracePipeline(preprocess_config=PreprocessConfig(scale=1, blur_radius=0))

        result = pipeline.process_array(disk_rgba)

        assert result.width == 100
        assert result.height == 80
        assert result.buffer_width == 102
        assert result.buffer_height == 82
        assert result.points[0] == (50.0, 10.0)
        assert result.contour.start == (51, 11)
        xs = [p[0] for p in result.points]
        ys = [p[1] for p in result.points]
        assert min(xs) == 20.0 and max(xs) == 80.0
        assert min(ys) == 10.0 and max(ys) == 70.0

    def test_points_mapped_back_to_source(self, disk_rgba):
        pipeline = TracePipeline(preprocess_config=PreprocessConfig(scale=0.5, blur_radius=1.0))

        result = pipeline.process_array(disk_rgba)
        points = np.array(result.points)

        assert result.buffer_width < result.width
        assert 5 <= points[:, 0].min() <= 25
        assert 75 <= points[:, 0].max() <= 95
        assert 0 <= points[:, 1].min() <= 15
        assert 65 <= points[:, 1].max() <= 85

    def test_process_file(self, tmp_path, disk_rgba):
        path = tmp_path / "disk.png"
        Image.fromarray(disk_rgba).save(path)

        result = TracePipeline().process(path)

        assert len(result.points) == len(result.contour)
        assert len(result.points) > 4

    def test_blur_closes_gap(self):
        """A one-pixel crack would make the tracer stop at the first half."""
        mask = np.zeros((20, 30), dtype=bool)
        mask[5:15, 5:14] = True
        mask[5:15, 15:25] = True  # Column 14 is a transparent crack

        sharp = TracePipeline(preprocess_config=PreprocessConfig(scale=1, blur_radius=0))
        soft = TracePipeline(preprocess_config=PreprocessConfig(scale=1, blur_radius=1.0))

        sharp_xs = [p[0] for p in sharp.process_array(mask).points]
        soft_xs = [p[0] for p in soft.process_array(mask).points]

        assert max(sharp_xs) == 13.0
        assert max(soft_xs) >= 24.0

    def test_canvas_filling_sprite_with_narrow_padding(self):
        """A shape touching every image edge still traces with padding=1 and blur."""
        rgba = np.full((40, 40, 4), 255, dtype=np.uint8)
        pipeline = TracePipeline(
            preprocess_config=PreprocessConfig(scale=1, blur_radius=2.0, padding=1)
        )

        result = pipeline.process_array(rgba)
        points = np.array(result.points)

        assert result.contour.closed
        assert result.contour.start != (0, 0)
        assert points.min() >= -1
        assert points.max() <= 40

    def test_transparent_image(self):
        pipeline = TracePipeline()

        with pytest.raises(NoBorderFoundError):
            pipeline.process_array(np.zeros((50, 50, 4), dtype=np.uint8))

    def test_threshold_config(self):
        rgba = np.zeros((10, 10, 4), dtype=np.uint8)
        rgba[3:6, 3:6, 3] = 50
        pipeline = TracePipeline(
            trace_config=TraceConfig(alpha_threshold=60),
            preprocess_config=PreprocessConfig(scale=1, blur_radius=0)
        )

        with pytest.raises(NoBorderFoundError):
            pipeline.process_array(rgba)
