"""End-to-end tests for the measurement orchestrator."""

import math
import unittest

from librespeed.client import LibrespeedClient, Result
from librespeed.errors import DecodeError, ProtocolError, Stage, StageError
from mock_server import IDENTITY_PAYLOAD, LibrespeedTestCase


class TestResultRecord(unittest.TestCase):
    def test_to_dict(self):
        r = Result(
            download_speed_mbps=100.0, upload_speed_mbps=50.0,
            ping_ms=12.5, jitter_ms=1.25, isp="ISP", ip="1.2.3.4",
        )
        d = r.to_dict()
        self.assertEqual(d["download_speed_mbps"], 100.0)
        self.assertEqual(d["ip"], "1.2.3.4")
        self.assertEqual(len(d), 6)


class TestStageMessages(unittest.TestCase):
    def test_descriptions(self):
        cause = ProtocolError(500)
        self.assertTrue(str(StageError(Stage.IDENTITY, cause)).startswith("failed to get IP info: "))
        self.assertTrue(str(StageError(Stage.PING, cause)).startswith("ping test failed: "))
        self.assertTrue(str(StageError(Stage.DOWNLOAD, cause)).startswith("download test failed: "))
        self.assertTrue(str(StageError(Stage.UPLOAD, cause)).startswith("upload test failed: "))


class TestRunTest(LibrespeedTestCase):
    def _client(self) -> LibrespeedClient:
        return LibrespeedClient(self.base_url, clock=self.clock, sleep=self.sleep)

    async def test_full_run(self):
        async with self._client() as client:
            result = await client.run_test()

        for value in (
            result.download_speed_mbps,
            result.upload_speed_mbps,
            result.ping_ms,
            result.jitter_ms,
        ):
            self.assertTrue(math.isfinite(value))
            self.assertGreater(value, 0)

        self.assertEqual(result.ip, IDENTITY_PAYLOAD["processedString"])
        self.assertEqual(result.isp, IDENTITY_PAYLOAD["rawIspInfo"]["organization"])

    async def test_stage_order(self):
        stages = []
        async with self._client() as client:
            client.on_stage = stages.append
            await client.run_test()
        self.assertEqual(stages, [Stage.IDENTITY, Stage.PING, Stage.DOWNLOAD, Stage.UPLOAD])

    async def test_download_failure(self):
        self.mock.download_status = 500
        async with self._client() as client:
            with self.assertRaises(StageError) as ctx:
                await client.run_test()

        err = ctx.exception
        self.assertEqual(err.stage, Stage.DOWNLOAD)
        self.assertIn("download", str(err))
        self.assertIsInstance(err.cause, ProtocolError)
        self.assertIs(err.__cause__, err.cause)
        # upload never attempted
        self.assertEqual(self.mock.uploads, [])

    async def test_identity_failure_stops_run(self):
        self.mock.identity_body = "not json"
        async with self._client() as client:
            with self.assertRaises(StageError) as ctx:
                await client.run_test()
        self.assertEqual(ctx.exception.stage, Stage.IDENTITY)
        self.assertIsInstance(ctx.exception.cause, DecodeError)
        self.assertEqual(self.mock.ping_calls, 0)

    async def test_ping_failure(self):
        self.mock.ping_statuses = {2: 500}
        async with self._client() as client:
            with self.assertRaises(StageError) as ctx:
                await client.run_test()
        self.assertEqual(ctx.exception.stage, Stage.PING)
        self.assertIn("ping test failed", str(ctx.exception))
        self.assertEqual(self.mock.download_queries, [])

    async def test_upload_failure(self):
        self.mock.upload_status = 500
        async with self._client() as client:
            with self.assertRaises(StageError) as ctx:
                await client.run_test()
        self.assertEqual(ctx.exception.stage, Stage.UPLOAD)


if __name__ == "__main__":
    unittest.main()
