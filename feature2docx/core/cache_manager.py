"""
Generated document cache for feature2docx
"""
import random
import string
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from feature2docx.utils.logger import setup_logger

logger = setup_logger(__name__)

ID_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class CachedDocument:
    content: bytes
    filename: str
    created_at: float


class DocumentCache:
    """Keeps generated documents in memory for a limited time"""

    def __init__(self, ttl: int = 600):
        self.ttl = ttl  # Time to live in seconds
        self.cache: Dict[str, CachedDocument] = {}
        self._lock = threading.Lock()

    @staticmethod
    def new_id() -> str:
        """Generate a document id like doc-1718000000000-k3j9x2a"""
        millis = int(datetime.now().timestamp() * 1000)
        suffix = ''.join(random.choices(ID_ALPHABET, k=7))
        return f"doc-{millis}-{suffix}"

    def _is_expired(self, document: CachedDocument, now: float) -> bool:
        return now - document.created_at > self.ttl

    def _clean_expired(self, now: float) -> int:
        """Remove expired entries, caller holds the lock"""
        expired_keys = [key for key, document in self.cache.items() if self._is_expired(document, now)]

        for key in expired_keys:
            del self.cache[key]

        if expired_keys:
            logger.debug(f"Evicted {len(expired_keys)} expired documents")
        return len(expired_keys)

    def put(self, content: bytes, filename: str) -> str:
        """Store a document and return its id"""
        now = datetime.now().timestamp()
        with self._lock:
            self._clean_expired(now)
            doc_id = self.new_id()
            while doc_id in self.cache:
                doc_id = self.new_id()
            self.cache[doc_id] = CachedDocument(content=content, filename=filename, created_at=now)
        return doc_id

    def get(self, doc_id: str) -> Optional[CachedDocument]:
        """Get a cached document, None if unknown or expired"""
        now = datetime.now().timestamp()
        with self._lock:
            document = self.cache.get(doc_id)
            if document is None:
                return None
            if self._is_expired(document, now):
                del self.cache[doc_id]
                return None
            return document

    def evict_expired(self) -> int:
        """Remove all expired documents"""
        with self._lock:
            return self._clean_expired(datetime.now().timestamp())

    def clear(self):
        """Clear all cache"""
        with self._lock:
            self.cache = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self.cache)
