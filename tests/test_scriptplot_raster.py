from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

import numpy as np
from PIL import Image

from scriptplot.raster import clip_segment, draw_polyline, draw_text, new_canvas, text_size
from scriptplot.scales import DataLimits, build_transform, format_ticks_for_axis, generate_nice_ticks
from scriptplot.targets import DisplayFrame, MemoryTarget, PngFileTarget


class RasterPrimitiveTests(unittest.TestCase):
    def test_clip_segment_inside_is_unchanged(self) -> None:
        self.assertEqual(clip_segment(1.0, 1.0, 5.0, 5.0, (0, 0, 10, 10)), (1.0, 1.0, 5.0, 5.0))

    def test_clip_segment_trims_to_rect(self) -> None:
        x0, y0, x1, y1 = clip_segment(-10.0, 5.0, 20.0, 5.0, (0, 0, 10, 10))
        self.assertAlmostEqual(x0, 0.0)
        self.assertAlmostEqual(x1, 10.0)
        self.assertEqual((y0, y1), (5.0, 5.0))

    def test_clip_segment_outside_is_dropped(self) -> None:
        self.assertIsNone(clip_segment(-5.0, -5.0, -1.0, 20.0, (0, 0, 10, 10)))

    def test_polyline_counts_visible_segments(self) -> None:
        canvas = new_canvas(20, 20)
        drawn = draw_polyline(canvas, [(2.0, 2.0), (10.0, 2.0), (50.0, 50.0), (60.0, 60.0)], (255, 0, 0, 255), clip=(0, 0, 19, 19))
        self.assertEqual(drawn, 2)
        self.assertTrue(np.all(canvas[2, 2:11, :3] == (255, 0, 0)))

    def test_polyline_with_single_point_draws_nothing(self) -> None:
        canvas = new_canvas(10, 10)
        self.assertEqual(draw_polyline(canvas, [(5.0, 5.0)], (255, 0, 0, 255), clip=(0, 0, 9, 9)), 0)
        self.assertTrue(np.all(canvas == 255))

    def test_text_renders_coverage(self) -> None:
        canvas = new_canvas(200, 60)
        draw_text(canvas, 5, 5, "Title", (0, 0, 0, 255), font_size_px=25.0)
        self.assertTrue(np.any(canvas[:, :, 0] < 255))
        w, h = text_size("Title", font_size_px=25.0)
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)


class ScaleTests(unittest.TestCase):
    def test_transform_maps_corners_of_plot_rect(self) -> None:
        transform = build_transform(DataLimits(xmin=0.0, xmax=10.0, ymin=-1.0, ymax=1.0), 30, 20, 101, 51)
        self.assertEqual(transform.apply(0.0, -1.0), (30.0, 70.0))
        self.assertEqual(transform.apply(10.0, 1.0), (130.0, 20.0))

    def test_reversed_bounds_are_allowed(self) -> None:
        transform = build_transform(DataLimits(xmin=10.0, xmax=0.0, ymin=0.0, ymax=1.0), 0, 0, 11, 11)
        self.assertEqual(transform.apply(10.0, 0.0)[0], 0.0)
        self.assertEqual(transform.apply(0.0, 0.0)[0], 10.0)

    def test_degenerate_or_non_finite_limits_are_rejected(self) -> None:
        for limits in (
            DataLimits(xmin=5.0, xmax=5.0, ymin=0.0, ymax=1.0),
            DataLimits(xmin=0.0, xmax=1.0, ymin=2.0, ymax=2.0),
            DataLimits(xmin=0.0, xmax=float("inf"), ymin=0.0, ymax=1.0),
        ):
            with self.subTest(limits=limits):
                with self.assertRaises(ValueError):
                    build_transform(limits, 0, 0, 100, 100)

    def test_nice_ticks_stay_inside_range(self) -> None:
        ticks = generate_nice_ticks(-1.0, 1.0, 5)
        self.assertAlmostEqual(float(ticks[0]), -1.0)
        self.assertAlmostEqual(float(ticks[-1]), 1.0)
        self.assertIn(0.0, ticks.tolist())
        self.assertEqual(format_ticks_for_axis(generate_nice_ticks(10.0, 0.0, 3)), ["0", "5", "10"])

    def test_tick_formatting_uses_consistent_decimals_from_step(self) -> None:
        labels = format_ticks_for_axis(np.asarray([1.5, 2.0, 2.5, 3.0], dtype=np.float64))
        self.assertEqual(labels, ["1.5", "2", "2.5", "3"])


class TargetTests(unittest.TestCase):
    def test_display_frame_copies_canvas(self) -> None:
        canvas = new_canvas(4, 3, (1, 2, 3, 255))
        frame = DisplayFrame.from_canvas(canvas, revision=7)
        canvas[:] = 0
        self.assertEqual((frame.width, frame.height, frame.revision), (4, 3, 7))
        self.assertEqual(frame.rgba[0, 0].tolist(), [1, 2, 3, 255])

    def test_display_frame_rejects_wrong_shape(self) -> None:
        with self.assertRaises(ValueError):
            DisplayFrame.from_canvas(np.zeros((3, 4, 3), dtype=np.uint8), revision=1)

    def test_png_target_writes_image(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "out.png"
            target = PngFileTarget(path, make_parents=True)
            target.present_frame(DisplayFrame.from_canvas(new_canvas(8, 6, (10, 20, 30, 255)), revision=1))
            with Image.open(path) as image:
                self.assertEqual(image.size, (8, 6))
                self.assertEqual(image.convert("RGBA").getpixel((0, 0)), (10, 20, 30, 255))
            self.assertEqual(target.frames_written, 1)

    def test_png_target_missing_directory_raises_os_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = PngFileTarget(Path(tmp) / "missing" / "out.png")
            with self.assertRaises(OSError):
                target.present_frame(DisplayFrame.from_canvas(new_canvas(2, 2), revision=1))

    def test_memory_target_requires_a_frame(self) -> None:
        target = MemoryTarget()
        self.assertIsNone(target.last_frame)
        with self.assertRaises(LookupError):
            target.last_rgba()


if __name__ == "__main__":
    unittest.main()
