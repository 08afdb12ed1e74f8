from __future__ import annotations

import threading
import unittest

from scriptplot import CommandRecorder, PlotSession, PlotXY, Title, Xlim, Ylim


class CommandRecorderTests(unittest.TestCase):
    def test_drain_returns_commands_in_append_order_then_empties(self) -> None:
        recorder = CommandRecorder()
        commands = [
            Title("A"),
            Xlim(left=0.0, right=10.0),
            PlotXY(x=(1.0, 2.0), y=(3.0, 4.0), label="s1"),
            Ylim(bottom=-2.0, top=2.0),
        ]
        for cmd in commands:
            self.assertIsNone(recorder.append(cmd))

        self.assertEqual(recorder.drain(), commands)
        self.assertEqual(recorder.drain(), [])
        self.assertEqual(len(recorder), 0)

    def test_drains_are_disjoint_and_cover_every_append(self) -> None:
        recorder = CommandRecorder()
        recorder.append(Title("first"))
        recorder.append(Xlim(left=0.0, right=1.0))
        first = recorder.drain()
        recorder.append(Title("second"))
        second = recorder.drain()

        self.assertEqual(first, [Title("first"), Xlim(left=0.0, right=1.0)])
        self.assertEqual(second, [Title("second")])
        self.assertFalse(any(cmd is other for cmd in first for other in second))

    def test_drained_list_is_not_touched_by_later_appends(self) -> None:
        recorder = CommandRecorder()
        recorder.append(Title("a"))
        drained = recorder.drain()
        recorder.append(Title("b"))
        self.assertEqual(drained, [Title("a")])

    def test_pending_is_a_snapshot_and_does_not_consume(self) -> None:
        recorder = CommandRecorder()
        recorder.append(Title("a"))
        snapshot = recorder.pending
        recorder.append(Title("b"))
        self.assertEqual(snapshot, (Title("a"),))
        self.assertEqual(len(recorder), 2)
        self.assertEqual(recorder.drain(), [Title("a"), Title("b")])

    def test_recorder_stores_payloads_without_validation(self) -> None:
        recorder = CommandRecorder()
        recorder.append(Xlim(left=5.0, right=5.0))
        recorder.append(PlotXY(x=(1.0, 2.0, 3.0), y=(4.0,), label=""))
        self.assertEqual(len(recorder.drain()), 2)


class SessionIsolationTests(unittest.TestCase):
    def test_sessions_never_see_each_others_commands(self) -> None:
        a = PlotSession()
        b = PlotSession()
        a.run_script("import pyplotter\npyplotter.title('from a')\n")
        b.run_script("import pyplotter\npyplotter.title('from b')\n")

        self.assertEqual(a.drain(), [Title("from a")])
        self.assertEqual(b.drain(), [Title("from b")])

    def test_sessions_on_separate_threads_keep_separate_logs(self) -> None:
        sessions = [PlotSession() for _ in range(4)]
        drained: dict[int, list] = {}
        start = threading.Barrier(len(sessions))

        def worker(idx: int) -> None:
            session = sessions[idx]
            start.wait()
            for i in range(200):
                session.bindings.title(f"{idx}:{i}")
            drained[idx] = session.drain()

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(len(sessions))]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for idx, commands in drained.items():
            self.assertEqual(commands, [Title(f"{idx}:{i}") for i in range(200)])


if __name__ == "__main__":
    unittest.main()
