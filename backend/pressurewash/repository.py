import json
import logging
import os
import tempfile
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import ValidationError

from .errors import DuplicateQuoteId, StorageFailure
from .models import Quote, QuoteSubmission
from .pricing import estimate

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 3


# -------------------------------------------------------------------
# Storage backends
# -------------------------------------------------------------------

class QuoteStore(ABC):
    """
    Durable home for quote records. Implementations must make `put`
    visible to `get` before returning and must reject a duplicate id.
    """

    @abstractmethod
    def get(self, quote_id: str) -> Optional[Quote]:
        ...

    @abstractmethod
    def put(self, quote: Quote) -> None:
        ...

    @abstractmethod
    def list(self) -> List[Quote]:
        """All quotes, newest first."""


class InMemoryQuoteStore(QuoteStore):
    def __init__(self):
        self._quotes: List[Quote] = []
        self._lock = threading.Lock()

    def get(self, quote_id: str) -> Optional[Quote]:
        with self._lock:
            return next((q for q in self._quotes if q.id == quote_id), None)

    def put(self, quote: Quote) -> None:
        with self._lock:
            if any(q.id == quote.id for q in self._quotes):
                raise DuplicateQuoteId()
            self._quotes.insert(0, quote)

    def list(self) -> List[Quote]:
        with self._lock:
            return list(self._quotes)


class JsonFileQuoteStore(QuoteStore):
    """
    Single JSON array on disk, newest first. Every put is a full
    read-modify-write of the file, serialized by a lock and swapped in
    with os.replace.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> List[Quote]:
        if not self.path.exists():
            return []

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.exception("Failed to read quotes from %s", self.path)
            raise StorageFailure("Could not load quotes.") from e

        if not isinstance(data, list):
            logger.error("Quotes file %s does not hold a list", self.path)
            raise StorageFailure("Could not load quotes.")

        try:
            return [Quote.model_validate(record) for record in data]
        except ValidationError as e:
            logger.exception("Quotes file %s holds an invalid record", self.path)
            raise StorageFailure("Could not load quotes.") from e

    def _write_all(self, quotes: List[Quote]) -> None:
        records = [q.to_record() for q in quotes]
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=".quotes-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.exception("Failed to write quotes to %s", self.path)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageFailure() from e

    def get(self, quote_id: str) -> Optional[Quote]:
        return next((q for q in self._read_all() if q.id == quote_id), None)

    def put(self, quote: Quote) -> None:
        with self._lock:
            quotes = self._read_all()
            if any(q.id == quote.id for q in quotes):
                raise DuplicateQuoteId()
            quotes.insert(0, quote)
            self._write_all(quotes)

    def list(self) -> List[Quote]:
        return self._read_all()


# -------------------------------------------------------------------
# Repository
# -------------------------------------------------------------------

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuoteRepository:
    """
    Create-and-read access to submitted quotes. The estimate is always
    computed here from the validated fields, never taken from the client.
    """

    def __init__(
        self,
        store: QuoteStore,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self._new_id = id_factory
        self._now = clock

    def create(self, submission: QuoteSubmission) -> Quote:
        est = estimate(submission.service, submission.size, submission.condition)

        for attempt in range(1, MAX_ID_ATTEMPTS + 1):
            quote = Quote(
                id=self._new_id(),
                created_at=self._now(),
                address=submission.address,
                name=submission.name,
                phone=submission.phone,
                service=submission.service,
                size=submission.size,
                condition=submission.condition,
                estimate_low=est.low,
                estimate_high=est.high,
            )
            try:
                self.store.put(quote)
            except DuplicateQuoteId:
                if attempt == MAX_ID_ATTEMPTS:
                    raise
                logger.warning("Quote id collision on %s, retrying", quote.id)
                continue

            logger.info(
                "Created quote %s (%s, %s-%s)",
                quote.id, quote.service, quote.estimate_low, quote.estimate_high,
            )
            return quote

    def get_by_id(self, quote_id: str) -> Optional[Quote]:
        """Returns None when no quote has this id."""
        return self.store.get(quote_id)

    def list_quotes(self) -> List[Quote]:
        return self.store.list()
