"""Registry of guest upload sessions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from wedding_share.services.uploads import UploadPipeline

_logger = logging.getLogger(__name__)


@dataclass
class GuestSessions:
    """One upload pipeline per guest session, oldest evicted past the cap."""

    factory: Callable[[], UploadPipeline]
    max_sessions: int = 200
    _pipelines: dict[UUID, UploadPipeline] = field(default_factory=dict)

    def create(self) -> tuple[UUID, UploadPipeline]:
        while len(self._pipelines) >= self.max_sessions:
            oldest = next(iter(self._pipelines))
            _logger.info("Evicting guest session %s", oldest)
            self.close(oldest)
        session_id = uuid4()
        pipeline = self.factory()
        self._pipelines[session_id] = pipeline
        return session_id, pipeline

    def get(self, session_id: UUID) -> UploadPipeline | None:
        return self._pipelines.get(session_id)

    def close(self, session_id: UUID) -> None:
        pipeline = self._pipelines.pop(session_id, None)
        if pipeline is not None:
            pipeline.close()

    def close_all(self) -> None:
        for session_id in list(self._pipelines):
            self.close(session_id)

    def __len__(self) -> int:
        return len(self._pipelines)
