"""
Catalog Backend - Queue Manager
=================================

What:  Producer-side access to the BullMQ job queues.
How:   One bullmq.Queue per queue name, created on first use and reused.
       Jobs are written in BullMQ's own Redis format, so the existing BullMQ
       workers pick them up unchanged. A separate redis.asyncio client
       answers the health probe.
Who:   Called by the /api/v1/queues route handlers and the health check.

Workers are not run by this service; only producers and statistics live here.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import redis.asyncio as redis
from bullmq import Queue
from redis.exceptions import RedisError

from app.config import settings
from app.exceptions import QueueServiceError

logger = logging.getLogger(__name__)

# Job states reported by get_queue_stats, in response order
JOB_STATES = ("waiting", "active", "completed", "failed", "delayed")


class QueueName(str, enum.Enum):
    """Queues known to this deployment."""

    AI_RESPONSE = "ai-response-generation"
    IMAGE_GENERATION = "image-generation"
    CHARACTER_POPULATION = "character-population"
    TEST = "test"


@dataclass
class QueueJob:
    """A job as accepted by the queue."""

    id: str
    name: str
    data: Dict[str, Any]


class QueueManager:
    """
    Centralized access to every BullMQ queue.

    Nothing connects on construction: queues and the probe client are
    created lazily, so importing this module is safe with queues disabled.
    """

    def __init__(self, redis_url: Optional[str] = None, key_prefix: Optional[str] = None):
        self.redis_url = redis_url or settings.redis_url
        self.key_prefix = key_prefix or settings.queue_key_prefix
        self._queues: Dict[str, Queue] = {}
        self._client: Optional[redis.Redis] = None

    def get_queue(self, queue_name: str) -> Queue:
        """Get or create the Queue for a name."""
        queue = self._queues.get(queue_name)
        if queue is None:
            queue = Queue(queue_name, {"connection": self.redis_url, "prefix": self.key_prefix})
            self._queues[queue_name] = queue
            logger.info("Queue created", extra={"queue_name": queue_name})
        return queue

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(self.redis_url, decode_responses=True)
        return self._client

    async def add_job(
        self,
        queue_name: str,
        job_type: str,
        payload: Dict[str, Any],
        delay_ms: Optional[int] = None,
    ) -> QueueJob:
        """
        Add a job to a queue.

        A positive delay_ms is passed to BullMQ as the job's `delay` option.

        Raises:
            QueueServiceError: Redis rejected or could not be reached
        """
        options: Dict[str, Any] = {}
        if delay_ms and delay_ms > 0:
            options["delay"] = delay_ms

        try:
            job = await self.get_queue(queue_name).add(job_type, payload, options)
        except (RedisError, OSError) as e:
            logger.error("Failed to add %s job to queue %s: %s", job_type, queue_name, str(e))
            raise QueueServiceError(
                message="Failed to enqueue job",
                context={"queue_name": queue_name, "job_type": job_type, "error": str(e)},
            )

        logger.info(
            "Job added to queue",
            extra={"job_id": job.id, "job_name": job_type, "queue_name": queue_name},
        )
        return QueueJob(id=str(job.id), name=job_type, data=payload)

    async def get_queue_stats(self, queue_name: str) -> Dict[str, Any]:
        """
        Job counts per state for one queue.

        Raises:
            QueueServiceError: Redis could not be reached
        """
        try:
            counts = await self.get_queue(queue_name).getJobCounts(*JOB_STATES)
        except (RedisError, OSError) as e:
            logger.error("Failed to read stats for queue %s: %s", queue_name, str(e))
            raise QueueServiceError(
                message="Failed to read queue statistics",
                context={"queue_name": queue_name, "error": str(e)},
            )

        stats: Dict[str, Any] = {"queue_name": queue_name}
        for state in JOB_STATES:
            stats[state] = int(counts.get(state) or 0)
        return stats

    async def health_check(self) -> bool:
        """PING the Redis server. Returns False instead of raising."""
        try:
            return bool(await self.client.ping())
        except (RedisError, OSError) as e:
            logger.warning("Queue health check failed: %s", str(e))
            return False

    async def close(self) -> None:
        """Close every queue and the probe client. Called from the lifespan shutdown."""
        for name, queue in list(self._queues.items()):
            try:
                await queue.close()
            except (RedisError, OSError) as e:
                logger.error("Error closing queue %s: %s", name, str(e))
        self._queues.clear()

        if self._client is not None:
            await self._client.aclose()
            self._client = None
        logger.info("Queue connections closed")


# ── Singleton Instance ────────────────────────────────────────────────────
queue_manager = QueueManager()
