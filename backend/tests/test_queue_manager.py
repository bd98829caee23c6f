"""
Catalog Backend - Queue Manager Unit Tests
============================================

What:  Tests for the BullMQ-backed QueueManager.
How:   bullmq.Queue and the redis.asyncio probe client are replaced with
       mocks; no Redis server needed.

What we test:
    ✅ Queues are created once per name with the configured prefix
    ✅ add_job passes BullMQ's delay option only for positive delays
    ✅ Redis errors surface as QueueServiceError
    ✅ get_queue_stats maps BullMQ job counts to state counts
    ✅ health_check never raises; close releases every connection
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.exceptions import QueueServiceError
from app.services.queue_manager import JOB_STATES, QueueManager


def _make_queue(job_id="3", counts=None):
    queue = MagicMock()
    queue.add = AsyncMock(return_value=SimpleNamespace(id=job_id))
    queue.getJobCounts = AsyncMock(return_value=counts or {})
    queue.close = AsyncMock()
    return queue


@pytest.fixture
def queue_class():
    """Patches bullmq.Queue as imported by the queue manager."""
    with patch("app.services.queue_manager.Queue") as mock_class:
        mock_class.side_effect = lambda name, opts: _make_queue()
        yield mock_class


class TestGetQueue:
    """Tests for queue creation."""

    def test_queue_is_created_once_per_name(self, queue_class):
        manager = QueueManager(redis_url="redis://test:6379/0", key_prefix="bull")

        first = manager.get_queue("test")
        second = manager.get_queue("test")
        other = manager.get_queue("image-generation")

        assert first is second
        assert other is not first
        assert queue_class.call_count == 2
        queue_class.assert_any_call(
            "test", {"connection": "redis://test:6379/0", "prefix": "bull"}
        )

    def test_nothing_is_created_on_construction(self, queue_class):
        manager = QueueManager(redis_url="redis://test:6379/0")

        queue_class.assert_not_called()
        assert manager._client is None


class TestAddJob:
    """Tests for job creation."""

    def setup_method(self):
        self.manager = QueueManager(redis_url="redis://test:6379/0", key_prefix="bull")
        self.queue = _make_queue(job_id="17")
        self.manager._queues["test"] = self.queue

    @pytest.mark.asyncio
    async def test_immediate_job(self):
        job = await self.manager.add_job("test", "test-job", {"message": "hi"})

        assert job.id == "17"
        assert job.name == "test-job"
        assert job.data == {"message": "hi"}
        self.queue.add.assert_awaited_once_with("test-job", {"message": "hi"}, {})

    @pytest.mark.asyncio
    async def test_delayed_job(self):
        await self.manager.add_job("test", "test-job", {}, delay_ms=5000)

        self.queue.add.assert_awaited_once_with("test-job", {}, {"delay": 5000})

    @pytest.mark.asyncio
    async def test_zero_delay_is_immediate(self):
        await self.manager.add_job("test", "test-job", {}, delay_ms=0)

        self.queue.add.assert_awaited_once_with("test-job", {}, {})

    @pytest.mark.asyncio
    async def test_numeric_job_id_is_stringified(self):
        self.queue.add.return_value = SimpleNamespace(id=42)

        job = await self.manager.add_job("test", "test-job", {})

        assert job.id == "42"

    @pytest.mark.asyncio
    async def test_redis_error_becomes_queue_service_error(self):
        self.queue.add.side_effect = RedisConnectionError("refused")

        with pytest.raises(QueueServiceError) as exc_info:
            await self.manager.add_job("test", "test-job", {})

        assert exc_info.value.context["queue_name"] == "test"
        assert exc_info.value.context["job_type"] == "test-job"


class TestQueueStats:
    """Tests for get_queue_stats."""

    @pytest.mark.asyncio
    async def test_counts_by_state(self):
        manager = QueueManager(redis_url="redis://test:6379/0")
        queue = _make_queue(
            counts={"waiting": 2, "active": 1, "completed": 10, "failed": 3, "delayed": 4, "paused": 0}
        )
        manager._queues["image-generation"] = queue

        stats = await manager.get_queue_stats("image-generation")

        assert stats == {
            "queue_name": "image-generation",
            "waiting": 2,
            "active": 1,
            "completed": 10,
            "failed": 3,
            "delayed": 4,
        }
        queue.getJobCounts.assert_awaited_once_with(*JOB_STATES)

    @pytest.mark.asyncio
    async def test_missing_states_count_as_zero(self):
        manager = QueueManager(redis_url="redis://test:6379/0")
        manager._queues["test"] = _make_queue(counts={"active": None})

        stats = await manager.get_queue_stats("test")

        assert all(stats[state] == 0 for state in JOB_STATES)

    @pytest.mark.asyncio
    async def test_redis_error(self):
        manager = QueueManager(redis_url="redis://test:6379/0")
        queue = _make_queue()
        queue.getJobCounts.side_effect = RedisConnectionError("refused")
        manager._queues["test"] = queue

        with pytest.raises(QueueServiceError):
            await manager.get_queue_stats("test")


class TestHealthAndClose:
    """Tests for health_check and close."""

    @pytest.mark.asyncio
    async def test_ping_ok(self):
        manager = QueueManager(redis_url="redis://test:6379/0")
        manager._client = MagicMock(ping=AsyncMock(return_value=True))

        assert await manager.health_check() is True

    @pytest.mark.asyncio
    async def test_ping_failure_returns_false(self):
        manager = QueueManager(redis_url="redis://test:6379/0")
        manager._client = MagicMock(ping=AsyncMock(side_effect=RedisConnectionError("refused")))

        assert await manager.health_check() is False

    @pytest.mark.asyncio
    async def test_close_releases_queues_and_client(self):
        manager = QueueManager(redis_url="redis://test:6379/0")
        queue = _make_queue()
        manager._queues["test"] = queue
        client = MagicMock(aclose=AsyncMock())
        manager._client = client

        await manager.close()
        await manager.close()

        queue.close.assert_awaited_once()
        client.aclose.assert_awaited_once()
        assert manager._queues == {}
        assert manager._client is None

    @pytest.mark.asyncio
    async def test_close_continues_past_a_failing_queue(self):
        manager = QueueManager(redis_url="redis://test:6379/0")
        broken = _make_queue()
        broken.close.side_effect = RedisConnectionError("gone")
        healthy = _make_queue()
        manager._queues = {"a": broken, "b": healthy}

        await manager.close()

        healthy.close.assert_awaited_once()
        assert manager._queues == {}
