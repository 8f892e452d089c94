import asyncio
import signal
import unittest

from chesstv.cli.stop import StopSignal


class StopSignalTests(unittest.IsolatedAsyncioTestCase):
    async def test_poll_times_out_without_request(self) -> None:
        stop = StopSignal()
        self.assertFalse(await stop.poll(0.01))

    async def test_poll_returns_immediately_once_requested(self) -> None:
        stop = StopSignal()
        stop.request()
        self.assertTrue(await asyncio.wait_for(stop.poll(10), timeout=1))

    async def test_request_during_poll_wakes_it(self) -> None:
        stop = StopSignal()
        asyncio.get_running_loop().call_later(0.01, stop.request)
        self.assertTrue(await stop.poll(5))

    async def test_signal_handler_sets_stop_and_restores_original(self) -> None:
        original = signal.getsignal(signal.SIGINT)
        stop = StopSignal().install((signal.SIGINT,))
        self.addCleanup(stop.close)
        self.assertNotEqual(signal.getsignal(signal.SIGINT), original)

        stop._on_signal(signal.SIGINT, None)

        self.assertTrue(await stop.poll(1))
        self.assertEqual(signal.getsignal(signal.SIGINT), original)

    async def test_close_restores_handlers(self) -> None:
        original = signal.getsignal(signal.SIGINT)
        stop = StopSignal().install((signal.SIGINT,))
        stop.close()
        self.assertEqual(signal.getsignal(signal.SIGINT), original)
