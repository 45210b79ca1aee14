"""External collaborators: high-score storage and commentary."""

from services.commentary import CommentaryService
from services.storage import HIGH_SCORE_KEY, JsonFileStore, MemoryStore, ScoreStore

__all__ = ["CommentaryService", "HIGH_SCORE_KEY", "JsonFileStore", "MemoryStore", "ScoreStore"]
