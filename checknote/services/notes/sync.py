"""
Optimistic client-side synchronization for a single note.

Public API:
  - NoteSync.fetch() -> Optional[Note]
  - NoteSync.save(note) -> bool
  - NoteSync.schedule_save(build) / flush() / close()
  - NoteSync.cache -> NoteCache

A save follows the usual optimistic-update cycle:

  1. cancel any in-flight fetch of the note so a late response can't
     overwrite the optimistic value,
  2. snapshot the cached note and overwrite it with the new one,
  3. on success commit, on failure restore the exact snapshot,
  4. refetch the canonical record either way.

Nothing is retried. Store calls are blocking and run in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Set

from .client import NoteNotFound, NotesError
from .models import Note, SaveNoteRequest
from .store import NoteStore

LOGGER = logging.getLogger(__name__)

DEFAULT_DEBOUNCE = 0.5

CacheKey = Optional[str]
CacheListener = Callable[[CacheKey, Optional[Note]], None]


# ------------------------------- Cache ---------------------------------------


class NoteCache:
    """Cached notes by id plus the fetch currently in flight for each id."""

    def __init__(self):
        self._data: Dict[CacheKey, Optional[Note]] = {}
        self._fetches: Dict[CacheKey, asyncio.Task] = {}
        self._listeners: List[CacheListener] = []

    def get_data(self, key: CacheKey) -> Optional[Note]:
        return self._data.get(key)

    def set_data(self, key: CacheKey, note: Optional[Note]) -> None:
        self._data[key] = note
        for listener in list(self._listeners):
            listener(key, note)

    def subscribe(self, listener: CacheListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def in_flight(self, key: CacheKey) -> Optional[asyncio.Task]:
        task = self._fetches.get(key)
        if task is not None and task.done():
            return None
        return task

    def track(self, key: CacheKey, task: asyncio.Task) -> None:
        self._fetches[key] = task
        task.add_done_callback(lambda t: self._untrack(key, t))

    def cancel(self, key: CacheKey) -> bool:
        task = self.in_flight(key)
        if task is None:
            return False
        LOGGER.debug("Cancelling in-flight fetch for %s", key)
        # Forget it now; the task only finishes cancelling on a later loop step.
        del self._fetches[key]
        task.cancel()
        return True

    def _untrack(self, key: CacheKey, task: asyncio.Task) -> None:
        if self._fetches.get(key) is task:
            del self._fetches[key]


# ---------------------------- Transaction ------------------------------------


class UpdateState(str, Enum):
    PENDING = "pending"
    APPLIED = "applied"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class OptimisticUpdate:
    """
    One optimistic write against the cache.

    `apply` stores the previous cached value and writes the new one,
    `rollback` puts that exact previous value back. Either settle step
    releases the snapshot.
    """

    def __init__(self, cache: NoteCache, key: CacheKey, value: Note):
        self._cache = cache
        self.key = key
        self.value = value
        self.state = UpdateState.PENDING
        self._previous: Optional[Note] = None

    @property
    def previous(self) -> Optional[Note]:
        return self._previous

    @property
    def settled(self) -> bool:
        return self.state in (UpdateState.COMMITTED, UpdateState.ROLLED_BACK)

    def apply(self) -> None:
        self._require(UpdateState.PENDING)
        self._previous = self._cache.get_data(self.key)
        self._cache.set_data(self.key, self.value)
        self.state = UpdateState.APPLIED

    def commit(self) -> None:
        self._require(UpdateState.APPLIED)
        self.state = UpdateState.COMMITTED
        self._previous = None

    def rollback(self) -> None:
        self._require(UpdateState.APPLIED)
        self._cache.set_data(self.key, self._previous)
        self.state = UpdateState.ROLLED_BACK
        self._previous = None

    def _require(self, state: UpdateState) -> None:
        if self.state is not state:
            raise RuntimeError(
                f"OptimisticUpdate is {self.state.value}, expected {state.value}"
            )


# ------------------------------ NoteSync -------------------------------------


class NoteSync:
    """
    Keeps a cached copy of one note in step with a record store.

    ``note_id=None`` tracks the store's default note.
    """

    def __init__(
        self,
        store: NoteStore,
        *,
        note_id: Optional[str] = None,
        debounce: float = DEFAULT_DEBOUNCE,
        cache: Optional[NoteCache] = None,
    ):
        self.store = store
        self.note_id = note_id
        self.debounce = debounce
        self.cache = cache or NoteCache()
        self.last_update: Optional[OptimisticUpdate] = None
        self._timer: Optional[asyncio.Task] = None
        self._pending_build: Optional[Callable[[], Optional[Note]]] = None
        self._saves: Set[asyncio.Task] = set()

    @property
    def data(self) -> Optional[Note]:
        return self.cache.get_data(self.note_id)

    # ------------------------------ Fetch -----------------------------------

    async def fetch(self) -> Optional[Note]:
        """
        Load the note into the cache. Concurrent callers share one request.
        A fetch cancelled by a save resolves to whatever the cache holds.
        """
        task = self.cache.in_flight(self.note_id)
        if task is None:
            task = self._start_fetch()
        return await self._wait(task)

    async def invalidate(self) -> Optional[Note]:
        """Drop any in-flight fetch and always issue a new one."""
        self.cache.cancel(self.note_id)
        return await self._wait(self._start_fetch())

    def _start_fetch(self) -> asyncio.Task:
        task = asyncio.create_task(self._load())
        self.cache.track(self.note_id, task)
        return task

    async def _wait(self, task: asyncio.Task) -> Optional[Note]:
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled():
                return self.data
            raise

    async def _load(self) -> Optional[Note]:
        try:
            note = await asyncio.to_thread(self.store.get, self.note_id)
        except NoteNotFound as exc:
            LOGGER.warning("Note fetch found nothing: %s", exc)
            self.cache.set_data(self.note_id, None)
            return None
        except NotesError as exc:
            LOGGER.error("Note fetch failed for %s: %s", self.note_id, exc)
            return self.data
        self.cache.set_data(self.note_id, note)
        return note

    # ------------------------------ Save ------------------------------------

    async def save(self, note: Note) -> bool:
        """Optimistically write ``note``. Returns False if the store rejected it."""
        self.cache.cancel(self.note_id)
        update = OptimisticUpdate(self.cache, self.note_id, note)
        self.last_update = update
        update.apply()
        LOGGER.info("Saving note %s", note.id)
        try:
            await asyncio.to_thread(self.store.save, SaveNoteRequest.from_note(note))
        except NotesError as exc:
            LOGGER.error("Saving note %s failed, rolling back: %s", note.id, exc)
            update.rollback()
            ok = False
        except asyncio.CancelledError:
            update.rollback()
            raise
        else:
            update.commit()
            ok = True
        await self.invalidate()
        return ok

    def schedule_save(self, build: Callable[[], Optional[Note]]) -> None:
        """
        Debounced save. Each call restarts the quiet window; when it expires
        ``build`` is called once and its note (if any) is saved.
        """
        self._pending_build = build
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = asyncio.create_task(self._debounced())

    @property
    def pending(self) -> bool:
        return (self._timer is not None and not self._timer.done()) or bool(
            self._saves
        )

    async def flush(self) -> None:
        """Run a pending debounced save now and wait for all saves to settle."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
            self._timer = None
            self._start_pending_save()
        if self._saves:
            await asyncio.gather(*list(self._saves))

    async def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._pending_build = None
        self.cache.cancel(self.note_id)
        if self._saves:
            await asyncio.gather(*list(self._saves), return_exceptions=True)

    async def _debounced(self) -> None:
        await asyncio.sleep(self.debounce)
        self._start_pending_save()

    def _start_pending_save(self) -> None:
        build, self._pending_build = self._pending_build, None
        note = build() if build else None
        if note is None:
            LOGGER.debug("Debounced save skipped: nothing to save")
            return
        task = asyncio.create_task(self.save(note))
        self._saves.add(task)
        task.add_done_callback(self._saves.discard)
