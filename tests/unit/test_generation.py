import sys
import threading
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "export"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from glyphart_core.generation import GenerationController, GenerationState, GenerationSuperseded
from glyphart_renderer.errors import EmptyCanvas
from glyphart_renderer.models import RawBitmap, RenderConfig
from glyphart_renderer.pipeline import generate_art


def gray_bitmap(width=200, height=100, value=128):
    return RawBitmap(width=width, height=height, pixels=bytes([value, value, value, 255]) * (width * height))


class GenerationControllerTests(unittest.TestCase):
    def test_generate_publishes_document(self):
        with GenerationController() as controller:
            document = controller.generate(gray_bitmap(), RenderConfig(target_width=60), timeout=10)
            self.assertEqual((document.width, document.height), (60, 16))
            self.assertIs(controller.document, document)
            status = controller.status
            self.assertEqual(status.state, GenerationState.READY)
            self.assertEqual(status.runs_completed, 1)
            self.assertIn("run_ok", [e["event"] for e in controller.recent_events()])

    def test_failure_keeps_previous_document(self):
        with GenerationController() as controller:
            first = controller.generate(gray_bitmap(), RenderConfig(target_width=60), timeout=10)
            with self.assertRaises(EmptyCanvas):
                controller.generate(gray_bitmap(width=1000, height=1), RenderConfig(target_width=1), timeout=10)
            self.assertIs(controller.document, first)
            status = controller.status
            self.assertEqual(status.state, GenerationState.FAILED)
            self.assertEqual(status.runs_failed, 1)
            self.assertIsNotNone(status.last_error)

    def test_newest_request_supersedes_older_ones(self):
        started = threading.Event()
        release = threading.Event()
        calls = []

        def slow(bitmap, config):
            calls.append(config.target_width)
            if len(calls) == 1:
                started.set()
                release.wait(5)
            return generate_art(bitmap, config)

        with GenerationController(generator=slow) as controller:
            first = controller.submit(gray_bitmap(), RenderConfig(target_width=60))
            self.assertTrue(started.wait(5))
            second = controller.submit(gray_bitmap(), RenderConfig(target_width=70))
            third = controller.submit(gray_bitmap(), RenderConfig(target_width=80))
            release.set()

            with self.assertRaises(GenerationSuperseded):
                first.result(timeout=10)
            with self.assertRaises(GenerationSuperseded):
                second.result(timeout=10)
            latest = third.result(timeout=10)

            self.assertEqual(latest.width, 80)
            self.assertIs(controller.document, latest)
            self.assertEqual(controller.status.runs_superseded, 2)
        self.assertEqual(calls, [60, 80])

    def test_stale_run_that_fails_reports_superseded(self):
        started = threading.Event()
        release = threading.Event()

        def held(bitmap, config):
            if config.target_width == 1:
                started.set()
                release.wait(5)
            return generate_art(bitmap, config)

        with GenerationController(generator=held) as controller:
            stale = controller.submit(gray_bitmap(width=1000, height=1), RenderConfig(target_width=1))
            self.assertTrue(started.wait(5))
            latest = controller.submit(gray_bitmap(), RenderConfig(target_width=60))
            release.set()

            with self.assertRaises(GenerationSuperseded) as ctx:
                stale.result(timeout=10)
            self.assertIsInstance(ctx.exception.__cause__, EmptyCanvas)
            document = latest.result(timeout=10)

            status = controller.status
            self.assertEqual(status.runs_failed, 0)
            self.assertIsNone(status.last_error)
            self.assertEqual(status.runs_superseded, 1)
            self.assertEqual(status.last_run_id, 2)
            self.assertIs(controller.document, document)

    def test_runs_never_overlap(self):
        lock = threading.Lock()
        active = [0]
        peak = [0]

        def tracked(bitmap, config):
            with lock:
                active[0] += 1
                peak[0] = max(peak[0], active[0])
            try:
                return generate_art(bitmap, config)
            finally:
                with lock:
                    active[0] -= 1

        with GenerationController(generator=tracked) as controller:
            futures = [controller.submit(gray_bitmap(), RenderConfig(target_width=50 + i)) for i in range(5)]
            futures[-1].result(timeout=10)
            for future in futures[:-1]:
                try:
                    future.result(timeout=10)
                except GenerationSuperseded:
                    pass
        self.assertEqual(peak[0], 1)


if __name__ == "__main__":
    unittest.main()
